"""cellcoloc Measure — per-cell intensity statistics."""

from cellcoloc.measure.metrics import (
    integrated_intensity,
    max_intensity,
    mean_intensity,
    median_intensity,
    min_intensity,
    transduction_efficiency,
)

__all__ = [
    "integrated_intensity",
    "max_intensity",
    "mean_intensity",
    "median_intensity",
    "min_intensity",
    "transduction_efficiency",
]
