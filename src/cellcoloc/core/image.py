"""MultiChannelImage — read-only handle over a (C, Y, X) pixel array."""

from __future__ import annotations

import numpy as np

from cellcoloc.core.exceptions import ChannelNotFoundError


class MultiChannelImage:
    """A rectangular grid of intensity samples per channel.

    The wrapped array is stored as a read-only ``(C, Y, X)`` copy so the
    acquisition data can never be modified by analysis code.

    Args:
        data: Pixel array. 2D arrays are treated as a single channel.
        name: Identifier reported in results (usually the file stem).
        channel_axis: Axis of ``data`` holding channels (3D input only).
    """

    def __init__(self, data: np.ndarray, name: str = "image", channel_axis: int = 0) -> None:
        array = np.asarray(data)
        if array.ndim == 2:
            array = array[np.newaxis, ...]
        elif array.ndim == 3:
            array = np.moveaxis(array, channel_axis, 0)
        else:
            raise ValueError(
                f"Expected a 2D (Y, X) or 3D multi-channel array, got shape {array.shape}"
            )
        if array.shape[0] == 0 or array.shape[1] == 0 or array.shape[2] == 0:
            raise ValueError(f"Image must not be empty, got shape {array.shape}")

        self._data = np.array(array, copy=True)
        self._data.flags.writeable = False
        self.name = name

    @property
    def channel_count(self) -> int:
        return int(self._data.shape[0])

    @property
    def height(self) -> int:
        return int(self._data.shape[1])

    @property
    def width(self) -> int:
        return int(self._data.shape[2])

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    def validate_channel(self, channel: int) -> None:
        """Raise ChannelNotFoundError unless ``channel`` is a valid index."""
        if not 0 <= channel < self.channel_count:
            raise ChannelNotFoundError(channel, self.channel_count)

    def channel(self, index: int) -> np.ndarray:
        """Return a read-only 2D (Y, X) view of one channel.

        Raises:
            ChannelNotFoundError: If ``index`` is out of range.
        """
        self.validate_channel(index)
        return self._data[index]

    def intensity(self, channel: int, x: int, y: int) -> float:
        """Intensity of one pixel in one channel."""
        return float(self.channel(channel)[y, x])

    def __repr__(self) -> str:
        return (
            f"MultiChannelImage(name={self.name!r}, channels={self.channel_count}, "
            f"width={self.width}, height={self.height}, dtype={self.dtype})"
        )
