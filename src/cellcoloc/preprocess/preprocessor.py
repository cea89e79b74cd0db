"""ImagePreprocessor — turn a raw channel into a clean binary mask."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

import numpy as np
from scipy import ndimage as ndi
from skimage.filters import gaussian
from skimage.restoration import rolling_ball

from cellcoloc.core.exceptions import InvalidConfigurationError
from cellcoloc.preprocess.thresholding import (
    OtsuAlgorithm,
    ThresholdAlgorithm,
    ThresholdLocality,
    ThresholdStrategy,
    global_otsu_mask,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreprocessingParameters:
    """Options for the preprocessing pipeline.

    Attributes:
        should_subtract_background: Remove uneven illumination with a rolling ball.
        largest_cell_diameter: Rolling-ball radius in pixels; also the local
            threshold radius when ``local_threshold_radius`` is None.
        threshold_locality: Global or local first-pass thresholding.
        local_threshold_algorithm: Algorithm used for local thresholding.
        local_threshold_radius: Neighbourhood radius for local thresholding.
        should_despeckle: Apply a median filter after thresholding.
        despeckle_radius: Median filter radius in pixels.
        should_gaussian_blur: Blur to merge fragments of the same cell.
        gaussian_blur_sigma: Standard deviation of the blur in pixels.
    """

    should_subtract_background: bool = True
    largest_cell_diameter: float = 30.0
    threshold_locality: ThresholdLocality = ThresholdLocality.LOCAL
    local_threshold_algorithm: ThresholdAlgorithm = field(default_factory=OtsuAlgorithm)
    local_threshold_radius: int | None = None
    should_despeckle: bool = True
    despeckle_radius: float = 1.0
    should_gaussian_blur: bool = True
    gaussian_blur_sigma: float = 3.0

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "threshold_locality", ThresholdLocality.parse(self.threshold_locality)
        )
        if self.largest_cell_diameter <= 0:
            raise InvalidConfigurationError(
                f"largest_cell_diameter must be > 0, got {self.largest_cell_diameter}"
            )
        if self.local_threshold_radius is not None and self.local_threshold_radius < 1:
            raise InvalidConfigurationError(
                f"local_threshold_radius must be >= 1 or None, got {self.local_threshold_radius}"
            )
        if self.should_despeckle and self.despeckle_radius <= 0:
            raise InvalidConfigurationError(
                f"despeckle_radius must be > 0, got {self.despeckle_radius}"
            )
        if self.should_gaussian_blur and self.gaussian_blur_sigma <= 0:
            raise InvalidConfigurationError(
                f"gaussian_blur_sigma must be > 0, got {self.gaussian_blur_sigma}"
            )

    @property
    def threshold_radius(self) -> int:
        """Effective local threshold radius in pixels."""
        if self.local_threshold_radius is not None:
            return int(self.local_threshold_radius)
        return max(1, int(round(self.largest_cell_diameter)))

    def threshold_strategy(self) -> ThresholdStrategy:
        """Resolve the first-pass threshold strategy."""
        return ThresholdStrategy(
            locality=self.threshold_locality,
            algorithm=self.local_threshold_algorithm,
            radius=self.threshold_radius,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "should_subtract_background": self.should_subtract_background,
            "largest_cell_diameter": self.largest_cell_diameter,
            "threshold_locality": self.threshold_locality.value,
            "local_threshold_algorithm": self.local_threshold_algorithm.name,
            **self.local_threshold_algorithm.to_dict(),
            "local_threshold_radius": self.threshold_radius,
            "should_despeckle": self.should_despeckle,
            "despeckle_radius": self.despeckle_radius,
            "should_gaussian_blur": self.should_gaussian_blur,
            "gaussian_blur_sigma": self.gaussian_blur_sigma,
        }


def rank_footprint(radius: float) -> np.ndarray:
    """Circular rank-filter kernel: offsets with ``dx**2 + dy**2 <= radius**2 + 1``.

    Radius 1.0 gives the full 3x3 square used for despeckling.
    """
    reach = int(math.floor(math.sqrt(radius * radius + 1)))
    offsets = np.arange(-reach, reach + 1)
    dy, dx = np.meshgrid(offsets, offsets, indexing="ij")
    return dx * dx + dy * dy <= radius * radius + 1


def to_gray8(channel: np.ndarray) -> np.ndarray:
    """Return a new 8-bit copy of a 2D channel.

    ``uint8`` data is copied unchanged. Any other dtype is scaled linearly
    from the min..max of its finite values onto 0..255. Non-finite pixels
    (NaN, inf) become 0, as does a constant or all-NaN channel.

    Raises:
        ValueError: If ``channel`` is not 2D.
    """
    if channel.ndim != 2:
        raise ValueError(f"Expected a 2D (Y, X) channel, got shape {channel.shape}")
    if channel.dtype == np.uint8:
        return channel.copy()

    values = channel.astype(np.float64)
    finite = np.isfinite(values)
    if not finite.any():
        return np.zeros(channel.shape, dtype=np.uint8)
    lo = float(values[finite].min())
    hi = float(values[finite].max())
    if hi <= lo:
        return np.zeros(channel.shape, dtype=np.uint8)
    scaled = np.where(finite, (values - lo) * (255.0 / (hi - lo)), 0.0)
    return np.clip(np.rint(scaled), 0, 255).astype(np.uint8)


class ImagePreprocessor:
    """Background removal, thresholding, despeckle, blur and re-threshold.

    The threshold strategy is resolved once, when the preprocessor is built.

    Args:
        params: Pipeline options.
    """

    def __init__(self, params: PreprocessingParameters | None = None) -> None:
        self._params = params or PreprocessingParameters()
        self._strategy = self._params.threshold_strategy()

    @property
    def params(self) -> PreprocessingParameters:
        return self._params

    @property
    def strategy(self) -> ThresholdStrategy:
        return self._strategy

    def prepare(self, channel: np.ndarray) -> np.ndarray:
        """Convert a channel to an 8-bit working copy and preprocess it."""
        working = to_gray8(channel)
        self.preprocess(working)
        return working

    def preprocess(self, working: np.ndarray) -> None:
        """Run the pipeline in place on a 2D ``uint8`` working buffer.

        Stages, in order: background subtraction, threshold, despeckle,
        gaussian blur, global Otsu re-threshold. The blur turns mask edges
        gray again, so the last stage restores a clean 0/255 mask.

        Raises:
            TypeError: If ``working`` is not ``uint8``.
            ValueError: If ``working`` is not 2D.
        """
        if working.dtype != np.uint8:
            raise TypeError(f"Working buffer must be uint8, got {working.dtype}")
        if working.ndim != 2:
            raise ValueError(f"Working buffer must be 2D (Y, X), got shape {working.shape}")

        params = self._params

        if params.should_subtract_background:
            logger.debug("Subtracting background (radius=%s)", params.largest_cell_diameter)
            background = rolling_ball(working, radius=params.largest_cell_diameter)
            working[...] = np.clip(
                working.astype(np.float64) - background, 0, 255
            ).astype(np.uint8)

        logger.debug(
            "Thresholding (%s, %s, radius=%d)",
            self._strategy.locality.value, self._strategy.algorithm.name,
            self._strategy.radius,
        )
        working[...] = self._strategy.apply(working)

        if params.should_despeckle:
            logger.debug("Despeckling (radius=%s)", params.despeckle_radius)
            footprint = rank_footprint(params.despeckle_radius)
            working[...] = ndi.median_filter(working, footprint=footprint, mode="nearest")

        if params.should_gaussian_blur:
            logger.debug("Gaussian blur (sigma=%s)", params.gaussian_blur_sigma)
            blurred = gaussian(
                working, sigma=params.gaussian_blur_sigma,
                mode="nearest", preserve_range=True,
            )
            working[...] = np.clip(np.rint(blurred), 0, 255).astype(np.uint8)

        working[...] = global_otsu_mask(working)
