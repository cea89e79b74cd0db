"""Per-cell intensity statistics over the pixel values sampled under a cell."""

from __future__ import annotations

import numpy as np


def mean_intensity(values: np.ndarray) -> float:
    """Average pixel intensity under the cell body."""
    return float(np.mean(values, dtype=np.float64))


def max_intensity(values: np.ndarray) -> float:
    """Maximum pixel intensity under the cell body."""
    return float(np.max(values))


def min_intensity(values: np.ndarray) -> float:
    """Minimum pixel intensity under the cell body."""
    return float(np.min(values))


def integrated_intensity(values: np.ndarray) -> float:
    """Total (summed) pixel intensity under the cell body."""
    return float(np.sum(values, dtype=np.float64))


def median_intensity(values: np.ndarray) -> float:
    """Median pixel intensity under the cell body."""
    return float(np.median(values))


def transduction_efficiency(overlapping: int, total: int) -> float:
    """Percentage of ``total`` cells that overlap; 0.0 when there are no cells."""
    if total <= 0:
        return 0.0
    return overlapping / total * 100.0
