"""Global and local thresholding strategies producing binary masks.

Masks follow the 8-bit convention used throughout preprocessing: ``uint8``
with 255 for foreground (candidate cell pixels) and 0 for background.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

import numpy as np
from scipy import ndimage as ndi
from skimage.filters import rank, threshold_otsu
from skimage.morphology import disk

from cellcoloc.core.exceptions import InvalidConfigurationError

FOREGROUND = 255
BACKGROUND = 0

DEFAULT_BERNSEN_CONTRAST = 15.0
DEFAULT_NIBLACK_K = 0.2
DEFAULT_NIBLACK_C = 0.0


class ThresholdLocality(str, Enum):
    """Whether one cut-off is used for the whole image or one per pixel."""

    GLOBAL = "global"
    LOCAL = "local"

    @classmethod
    def parse(cls, value: str | ThresholdLocality) -> ThresholdLocality:
        """Resolve a locality from its (case-insensitive) name.

        Raises:
            InvalidConfigurationError: If the name is unknown.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidConfigurationError(
                f"unknown threshold locality {value!r}. "
                f"Supported: {[m.value for m in cls]}"
            ) from None


def to_mask(foreground: np.ndarray) -> np.ndarray:
    """Convert a boolean foreground array to a 0/255 ``uint8`` mask."""
    return np.where(foreground, FOREGROUND, BACKGROUND).astype(np.uint8)


def global_otsu_mask(image: np.ndarray) -> np.ndarray:
    """Threshold a whole image at its Otsu level.

    Pixels strictly above the level are foreground. A uniform image has no
    level to split on; its pixels are foreground only if non-zero, which keeps
    all-background and all-foreground masks unchanged.
    """
    if image.min() == image.max():
        return to_mask(image > 0)
    level = threshold_otsu(image)
    return to_mask(image > level)


@dataclass(frozen=True)
class OtsuAlgorithm:
    """Otsu's clustering threshold computed over each pixel's neighbourhood."""

    name: ClassVar[str] = "otsu"

    def local_foreground(self, image: np.ndarray, footprint: np.ndarray) -> np.ndarray:
        level = rank.otsu(image, footprint)
        return image > level

    def to_dict(self) -> dict[str, float]:
        return {}


@dataclass(frozen=True)
class BernsenAlgorithm:
    """Mid-range threshold, applied only where the local contrast is high.

    Attributes:
        contrast_threshold: Minimum ``local_max - local_min`` for a
            neighbourhood to contain foreground.
    """

    contrast_threshold: float = DEFAULT_BERNSEN_CONTRAST
    name: ClassVar[str] = "bernsen"

    def __post_init__(self) -> None:
        if self.contrast_threshold < 0:
            raise InvalidConfigurationError(
                f"Bernsen contrast_threshold must be >= 0, got {self.contrast_threshold}"
            )

    def local_foreground(self, image: np.ndarray, footprint: np.ndarray) -> np.ndarray:
        local_max = ndi.maximum_filter(image, footprint=footprint, mode="nearest").astype(np.int32)
        local_min = ndi.minimum_filter(image, footprint=footprint, mode="nearest").astype(np.int32)
        mid = (local_max + local_min) / 2.0
        # Low-contrast neighbourhoods are treated as background.
        return ((local_max - local_min) >= self.contrast_threshold) & (image >= mid)

    def to_dict(self) -> dict[str, float]:
        return {"contrast_threshold": self.contrast_threshold}


@dataclass(frozen=True)
class NiblackAlgorithm:
    """Threshold at ``local_mean + k * local_std + c``.

    Attributes:
        k: Weight of the local standard deviation.
        c: Constant offset added to the threshold.
    """

    k: float = DEFAULT_NIBLACK_K
    c: float = DEFAULT_NIBLACK_C
    name: ClassVar[str] = "niblack"

    def local_foreground(self, image: np.ndarray, footprint: np.ndarray) -> np.ndarray:
        values = image.astype(np.float64)
        kernel = footprint.astype(np.float64)
        count = float(kernel.sum())

        # Integer-valued sums are exact in float64, so k=c=0 lands on the mean.
        total = ndi.correlate(values, kernel, mode="nearest")
        total_sq = ndi.correlate(values * values, kernel, mode="nearest")
        mean = total / count
        variance = np.maximum(count * total_sq - total * total, 0.0) / (count * count)

        threshold = mean + self.k * np.sqrt(variance) + self.c
        return values > threshold

    def to_dict(self) -> dict[str, float]:
        return {"k": self.k, "c": self.c}


ThresholdAlgorithm = Union[OtsuAlgorithm, BernsenAlgorithm, NiblackAlgorithm]

_ALGORITHMS: dict[str, type] = {
    OtsuAlgorithm.name: OtsuAlgorithm,
    BernsenAlgorithm.name: BernsenAlgorithm,
    NiblackAlgorithm.name: NiblackAlgorithm,
}

SUPPORTED_ALGORITHMS = frozenset(_ALGORITHMS)


def resolve_algorithm(
    name: str,
    contrast_threshold: float = DEFAULT_BERNSEN_CONTRAST,
    k: float = DEFAULT_NIBLACK_K,
    c: float = DEFAULT_NIBLACK_C,
) -> ThresholdAlgorithm:
    """Build a local threshold algorithm from its (case-insensitive) name.

    Only the parameters relevant to the chosen algorithm are used.

    Raises:
        InvalidConfigurationError: If the name is unknown.
    """
    key = str(name).strip().lower()
    if key not in _ALGORITHMS:
        raise InvalidConfigurationError(
            f"unknown local threshold algorithm {name!r}. "
            f"Supported: {sorted(SUPPORTED_ALGORITHMS)}"
        )
    if key == BernsenAlgorithm.name:
        return BernsenAlgorithm(contrast_threshold=float(contrast_threshold))
    if key == NiblackAlgorithm.name:
        return NiblackAlgorithm(k=float(k), c=float(c))
    return OtsuAlgorithm()


@dataclass(frozen=True)
class ThresholdStrategy:
    """A resolved binarization method.

    Attributes:
        locality: Global (one cut-off) or local (per-pixel cut-off).
        algorithm: Local algorithm; ignored for global thresholding, which
            always uses Otsu.
        radius: Neighbourhood radius in pixels for local thresholding.
    """

    locality: ThresholdLocality = ThresholdLocality.GLOBAL
    algorithm: ThresholdAlgorithm = OtsuAlgorithm()
    radius: int = 20

    def __post_init__(self) -> None:
        object.__setattr__(self, "locality", ThresholdLocality.parse(self.locality))
        if not isinstance(self.algorithm, (OtsuAlgorithm, BernsenAlgorithm, NiblackAlgorithm)):
            raise InvalidConfigurationError(
                f"unsupported threshold algorithm {self.algorithm!r}"
            )
        if int(self.radius) < 1:
            raise InvalidConfigurationError(
                f"threshold radius must be >= 1, got {self.radius}"
            )

    def apply(self, image: np.ndarray) -> np.ndarray:
        """Binarize a 2D ``uint8`` image into a new 0/255 mask."""
        if self.locality is ThresholdLocality.GLOBAL:
            return global_otsu_mask(image)
        footprint = disk(int(self.radius))
        return to_mask(self.algorithm.local_foreground(image, footprint))
