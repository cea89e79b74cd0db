"""Report rows derived from TransductionResult for output writers."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from cellcoloc import __version__
from cellcoloc.coloc.parameters import TransductionParameters
from cellcoloc.core.models import TransductionResult

PACKAGE_NAME = "cellcoloc"

DOCUMENTATION_ROWS: list[tuple[str, str]] = [
    ("Abbreviation", "Description"),
    ("Summary", "Key overall measurements per image"),
    ("Transduced Cell Analysis", "Cell-by-cell metrics of transduced cells"),
    ("Parameters", "Parameters used for the analysis"),
    ("RawIntDen", "Raw integrated density: sum of pixel intensities in the cell"),
]


def clean_file_name(name: str) -> str:
    """Strip commas so file names never split a CSV field."""
    return name.replace(",", "")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


def _average(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


@dataclass(frozen=True)
class SummaryRow:
    """Key overall measurements of one image."""

    file_name: str
    cell_count: int
    transduced_cell_count: int
    transduction_efficiency: float
    average_area: float
    mean_intensity: float
    median_intensity: float
    min_intensity: float
    max_intensity: float
    raw_integrated_density: float

    COLUMNS = (
        "File Name",
        "Number of Cells",
        "Number of Transduced Cells",
        "Transduction Efficiency (%)",
        "Average Morphology Area (pixel^2)",
        "Mean Fluorescence Intensity (a.u.)",
        "Median Fluorescence Intensity (a.u.)",
        "Min Fluorescence Intensity (a.u.)",
        "Max Fluorescence Intensity (a.u.)",
        "RawIntDen",
    )

    @classmethod
    def from_result(cls, result: TransductionResult) -> SummaryRow:
        """Average the transduced-cell statistics of one result (0 when none)."""
        analyses = result.overlapping_analyses
        return cls(
            file_name=clean_file_name(result.metadata.file_name),
            cell_count=result.target_cell_count,
            transduced_cell_count=result.transduced_cell_count,
            transduction_efficiency=result.transduction_efficiency,
            average_area=_average([a.area for a in analyses]),
            mean_intensity=_average([a.mean for a in analyses]),
            median_intensity=_average([a.median for a in analyses]),
            min_intensity=_average([a.min for a in analyses]),
            max_intensity=_average([a.max for a in analyses]),
            raw_integrated_density=_average([a.raw_integrated_density for a in analyses]),
        )

    def to_list(self) -> list[Any]:
        return [
            self.file_name,
            self.cell_count,
            self.transduced_cell_count,
            self.transduction_efficiency,
            self.average_area,
            self.mean_intensity,
            self.median_intensity,
            self.min_intensity,
            self.max_intensity,
            self.raw_integrated_density,
        ]


@dataclass(frozen=True)
class CellAnalysisRow:
    """Transduction-channel metrics of one transduced cell."""

    file_name: str
    cell_number: int
    area: int
    mean: float
    median: float
    min: float
    max: float
    raw_integrated_density: float

    COLUMNS = (
        "File Name",
        "Transduced Cell",
        "Morphology Area (pixel^2)",
        "Mean Fluorescence Intensity (a.u.)",
        "Median Fluorescence Intensity (a.u.)",
        "Min Fluorescence Intensity (a.u.)",
        "Max Fluorescence Intensity (a.u.)",
        "RawIntDen",
    )

    @classmethod
    def from_result(cls, result: TransductionResult) -> list[CellAnalysisRow]:
        """One row per overlapping cell, numbered from 1."""
        name = clean_file_name(result.metadata.file_name)
        return [
            cls(
                file_name=name,
                cell_number=i,
                area=a.area,
                mean=a.mean,
                median=a.median,
                min=a.min,
                max=a.max,
                raw_integrated_density=a.raw_integrated_density,
            )
            for i, a in enumerate(result.overlapping_analyses, start=1)
        ]

    def to_list(self) -> list[Any]:
        return [
            self.file_name,
            self.cell_number,
            self.area,
            self.mean,
            self.median,
            self.min,
            self.max,
            self.raw_integrated_density,
        ]


@dataclass(frozen=True)
class ParametersRow:
    """Echo of the configuration used for one image."""

    file_name: str
    params: TransductionParameters

    COLUMNS = (
        "File Name",
        "Package",
        "Package Version",
        "Morphology channel",
        "Transduction channel",
        "Cell diameter range (px)",
        "Threshold locality",
        "Local threshold algorithm",
        "Local threshold radius",
        "Gaussian blur sigma",
        "Background subtraction",
        "Despeckle",
    )

    @classmethod
    def from_parameters(cls, file_name: str, params: TransductionParameters) -> ParametersRow:
        return cls(file_name=clean_file_name(file_name), params=params)

    def to_list(self) -> list[Any]:
        p = self.params
        return [
            self.file_name,
            PACKAGE_NAME,
            __version__,
            p.target_channel,
            p.transduced_channel,
            str(p.cell_diameter_range),
            p.threshold_locality,
            p.local_threshold_algorithm,
            p.local_threshold_radius,
            p.gaussian_blur_sigma,
            p.should_subtract_background,
            p.should_despeckle,
        ]
