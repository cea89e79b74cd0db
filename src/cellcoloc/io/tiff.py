"""TIFF reading into MultiChannelImage via tifffile."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import tifffile

from cellcoloc.core.image import MultiChannelImage

logger = logging.getLogger(__name__)

# C = channel, S = sample (e.g. RGB).
_CHANNEL_AXES = "CS"
# Q = unknown, I = generic sequence; used as channels when nothing else is.
_GENERIC_AXES = "QI"


def read_multichannel_tiff(path: Path) -> MultiChannelImage:
    """Read a TIFF file as a (C, Y, X) multi-channel image.

    Axis labels of the first series decide the layout. Singleton axes are
    dropped and a ``C`` or ``S`` axis becomes the channel axis. Without one, a
    single unlabeled (``Q``/``I``) axis is taken as channels. A 2D image is a
    single channel.

    Args:
        path: Path to the TIFF file.

    Returns:
        MultiChannelImage named after the file stem.

    Raises:
        ValueError: If depth, time or several candidate channel axes remain.
    """
    path = Path(path)
    with tifffile.TiffFile(str(path)) as tif:
        series = tif.series[0]
        data = series.asarray()
        axes = series.axes

    if len(axes) != data.ndim:
        # No usable labels: squeeze and assume (C, Y, X).
        data = np.squeeze(data)
        logger.debug("Read %s with shape %s (unlabeled)", path.name, data.shape)
        return MultiChannelImage(data, name=path.stem, channel_axis=0)

    keep = [i for i, size in enumerate(data.shape) if size > 1 or axes[i] in "YX"]
    data = data.reshape([data.shape[i] for i in keep])
    axes = "".join(axes[i] for i in keep)

    channel_axes = [i for i, a in enumerate(axes) if a in _CHANNEL_AXES]
    if not channel_axes:
        channel_axes = [i for i, a in enumerate(axes) if a in _GENERIC_AXES]
    leftover = [a for i, a in enumerate(axes) if a not in "YX" and i not in channel_axes]
    if len(channel_axes) > 1 or leftover:
        raise ValueError(
            f"{path.name}: unsupported axes {axes!r}; "
            "only single-plane multi-channel images can be analyzed"
        )

    channel_axis = channel_axes[0] if channel_axes else 0
    logger.debug("Read %s with shape %s (axes=%r)", path.name, data.shape, axes)
    return MultiChannelImage(data, name=path.stem, channel_axis=channel_axis)
