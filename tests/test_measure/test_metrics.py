"""Tests for per-cell intensity metrics."""

from __future__ import annotations

import numpy as np
import pytest

from cellcoloc.measure.metrics import (
    integrated_intensity,
    max_intensity,
    mean_intensity,
    median_intensity,
    min_intensity,
    transduction_efficiency,
)


class TestMetrics:

    @pytest.fixture
    def values(self):
        return np.array([60, 70, 100, 110], dtype=np.uint8)

    def test_mean_intensity(self, values):
        assert mean_intensity(values) == pytest.approx(85.0)

    def test_median_intensity(self, values):
        assert median_intensity(values) == pytest.approx(85.0)

    def test_min_max(self, values):
        assert min_intensity(values) == 60.0
        assert max_intensity(values) == 110.0

    def test_integrated_intensity_does_not_overflow(self, values):
        # 340 exceeds the uint8 range.
        assert integrated_intensity(values) == 340.0

    def test_returns_python_float(self, values):
        assert isinstance(mean_intensity(values), float)


class TestTransductionEfficiency:

    def test_percentages(self):
        assert transduction_efficiency(0, 4) == 0.0
        assert transduction_efficiency(4, 4) == 100.0
        assert transduction_efficiency(1, 4) == 25.0

    def test_no_cells_guard(self):
        assert transduction_efficiency(0, 0) == 0.0

    def test_shared_with_results_and_matcher(self):
        from cellcoloc.coloc import matcher
        from cellcoloc.core.models import ImageMetadata, TransductionResult

        assert matcher.transduction_efficiency is transduction_efficiency
        assert TransductionResult(0, (), (), ImageMetadata("a.tif")).transduction_efficiency == 0.0
