"""Analysis configuration: channels, cell size range and preprocessing options."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, fields
from typing import Any

from cellcoloc.core.exceptions import InvalidConfigurationError
from cellcoloc.preprocess.preprocessor import PreprocessingParameters
from cellcoloc.preprocess.thresholding import (
    DEFAULT_BERNSEN_CONTRAST,
    DEFAULT_NIBLACK_C,
    DEFAULT_NIBLACK_K,
    ThresholdLocality,
    resolve_algorithm,
)

_RANGE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*-\s*(\d+(?:\.\d+)?)\s*$")


@dataclass(frozen=True)
class CellDiameterRange:
    """Accepted cell diameters in pixels.

    Attributes:
        smallest: Minimum diameter (inclusive).
        largest: Maximum diameter (inclusive); bounds the background
            subtraction radius.
    """

    smallest: float = 0.0
    largest: float = 30.0

    def __post_init__(self) -> None:
        if self.smallest < 0:
            raise InvalidConfigurationError(
                f"smallest cell diameter must be >= 0, got {self.smallest}"
            )
        if self.largest <= 0:
            raise InvalidConfigurationError(
                f"largest cell diameter must be > 0, got {self.largest}"
            )
        if self.smallest > self.largest:
            raise InvalidConfigurationError(
                f"smallest cell diameter ({self.smallest}) exceeds largest ({self.largest})"
            )

    @classmethod
    def parse(cls, text: str) -> CellDiameterRange:
        """Parse the ``"min-max"`` text form, e.g. ``"0-30"`` or ``"8.5-40"``.

        Raises:
            InvalidConfigurationError: If the text is malformed.
        """
        match = _RANGE_RE.match(text)
        if match is None:
            raise InvalidConfigurationError(
                f"cell diameter range must look like 'min-max', got {text!r}"
            )
        return cls(float(match.group(1)), float(match.group(2)))

    def accepts(self, area: float) -> bool:
        """Whether a cell of ``area`` pixels has an equivalent diameter in range."""
        diameter = 2.0 * math.sqrt(area / math.pi)
        return self.smallest <= diameter <= self.largest

    def __str__(self) -> str:
        return f"{self.smallest:g}-{self.largest:g}"


@dataclass(frozen=True)
class TransductionParameters:
    """Complete configuration of one transduction analysis.

    Channel indices are 0-based.

    Attributes:
        target_channel: Morphology channel used to find cells.
        transduced_channel: Channel whose signal marks transduced cells.
        cell_diameter_range: Accepted cell diameters in pixels.
        local_threshold_radius: Neighbourhood radius for local thresholding.
        gaussian_blur_sigma: Blur applied before the final threshold.
        should_subtract_background: Remove uneven illumination first.
        threshold_locality: "global" or "local" first-pass thresholding.
        local_threshold_algorithm: "otsu", "bernsen" or "niblack".
        bernsen_contrast_threshold: Bernsen minimum local contrast.
        niblack_k: Niblack standard deviation weight.
        niblack_c: Niblack offset.
        should_despeckle: Median filter after thresholding.
        despeckle_radius: Median filter radius.
        should_gaussian_blur: Apply the blur stage.
        filter_by_diameter: Drop cells outside ``cell_diameter_range``.
    """

    target_channel: int = 0
    transduced_channel: int = 1
    cell_diameter_range: CellDiameterRange = CellDiameterRange()
    local_threshold_radius: int = 20
    gaussian_blur_sigma: float = 3.0
    should_subtract_background: bool = True
    threshold_locality: str = ThresholdLocality.LOCAL.value
    local_threshold_algorithm: str = "otsu"
    bernsen_contrast_threshold: float = DEFAULT_BERNSEN_CONTRAST
    niblack_k: float = DEFAULT_NIBLACK_K
    niblack_c: float = DEFAULT_NIBLACK_C
    should_despeckle: bool = True
    despeckle_radius: float = 1.0
    should_gaussian_blur: bool = True
    filter_by_diameter: bool = False

    def __post_init__(self) -> None:
        """Validate parameters and normalize names."""
        if isinstance(self.cell_diameter_range, str):
            object.__setattr__(
                self, "cell_diameter_range", CellDiameterRange.parse(self.cell_diameter_range)
            )
        for name in ("target_channel", "transduced_channel"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidConfigurationError(f"{name} must be an integer >= 0, got {value!r}")
        if self.local_threshold_radius < 1:
            raise InvalidConfigurationError(
                f"local_threshold_radius must be >= 1, got {self.local_threshold_radius}"
            )
        if self.gaussian_blur_sigma <= 0:
            raise InvalidConfigurationError(
                f"gaussian_blur_sigma must be > 0, got {self.gaussian_blur_sigma}"
            )
        object.__setattr__(
            self, "threshold_locality", ThresholdLocality.parse(self.threshold_locality).value
        )
        # Fails fast on unknown algorithm names.
        algorithm = resolve_algorithm(
            self.local_threshold_algorithm,
            contrast_threshold=self.bernsen_contrast_threshold,
            k=self.niblack_k,
            c=self.niblack_c,
        )
        object.__setattr__(self, "local_threshold_algorithm", algorithm.name)

    def to_preprocessing_parameters(self) -> PreprocessingParameters:
        """Resolve the preprocessing options into pipeline parameters."""
        return PreprocessingParameters(
            should_subtract_background=self.should_subtract_background,
            largest_cell_diameter=self.cell_diameter_range.largest,
            threshold_locality=ThresholdLocality.parse(self.threshold_locality),
            local_threshold_algorithm=resolve_algorithm(
                self.local_threshold_algorithm,
                contrast_threshold=self.bernsen_contrast_threshold,
                k=self.niblack_k,
                c=self.niblack_c,
            ),
            local_threshold_radius=self.local_threshold_radius,
            should_despeckle=self.should_despeckle,
            despeckle_radius=self.despeckle_radius,
            should_gaussian_blur=self.should_gaussian_blur,
            gaussian_blur_sigma=self.gaussian_blur_sigma,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict (YAML/JSON serializable)."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["cell_diameter_range"] = str(self.cell_diameter_range)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TransductionParameters:
        """Build parameters from a dict, rejecting unknown keys.

        Raises:
            InvalidConfigurationError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidConfigurationError(f"unknown parameter(s): {unknown}")
        kwargs = dict(data)
        diameter = kwargs.get("cell_diameter_range")
        try:
            if isinstance(diameter, dict):
                kwargs["cell_diameter_range"] = CellDiameterRange(**diameter)
            return cls(**kwargs)
        except TypeError as exc:
            raise InvalidConfigurationError(str(exc)) from exc

    def with_overrides(self, **overrides: Any) -> TransductionParameters:
        """Return a copy with the non-None ``overrides`` applied."""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return type(self).from_dict(data)
