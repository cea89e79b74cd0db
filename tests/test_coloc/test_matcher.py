"""Tests for ColocalizationMatcher, overlap rules and ResultAssembler."""

from __future__ import annotations

import numpy as np
import pytest

from cellcoloc.coloc.assembler import ResultAssembler
from cellcoloc.coloc.matcher import (
    ColocalizationMatcher,
    MaskIntersectionRule,
    MatchResult,
    MeanIntensityRule,
    mean_intensity,
    transduction_efficiency,
)
from cellcoloc.core.models import Cell, ImageMetadata, TransductionResult


def _block(x0: int, y0: int, size: int = 2) -> Cell:
    return Cell(points=frozenset(
        (x, y) for x in range(x0, x0 + size) for y in range(y0, y0 + size)
    ))


@pytest.fixture
def transduction() -> tuple[np.ndarray, np.ndarray]:
    image = np.zeros((10, 10), dtype=np.uint16)
    image[1:3, 1:3] = [[100, 200], [300, 400]]
    mask = np.where(image > 0, 255, 0).astype(np.uint8)
    return mask, image


class TestEfficiency:

    def test_zero_overlap(self):
        assert transduction_efficiency(0, 5) == 0.0

    def test_full_overlap(self):
        assert transduction_efficiency(5, 5) == 100.0

    def test_no_cells_guard(self):
        assert transduction_efficiency(0, 0) == 0.0

    def test_fraction(self):
        assert transduction_efficiency(1, 3) == pytest.approx(33.3333, rel=1e-4)


class TestMeanIntensity:

    def test_mean_over_cell(self, transduction):
        _, image = transduction
        assert mean_intensity(_block(1, 1), image) == 250.0


class TestColocalizationMatcher:

    def test_mask_intersection(self, transduction):
        mask, image = transduction
        cells = [_block(1, 1), _block(6, 6)]
        result = ColocalizationMatcher().match(cells, mask, image)

        assert result.target_cell_count == 2
        assert result.overlapping_cells == [cells[0]]
        analysis = result.analyses[0]
        assert analysis.area == 4
        assert analysis.mean == 250.0
        assert analysis.median == 250.0
        assert analysis.min == 100.0
        assert analysis.max == 400.0
        assert analysis.raw_integrated_density == 1000.0
        assert result.efficiency == 50.0

    def test_partial_overlap_counts(self, transduction):
        mask, image = transduction
        cell = _block(2, 2)  # one pixel on the lit block
        result = ColocalizationMatcher().match([cell], mask, image)
        assert result.overlapping_cells == [cell]

    def test_min_overlap_pixels(self, transduction):
        mask, image = transduction
        cell = _block(2, 2)
        matcher = ColocalizationMatcher(MaskIntersectionRule(min_overlap_pixels=2))
        assert matcher.match([cell], mask, image).overlapping_cells == []

    def test_mean_intensity_rule(self, transduction):
        mask, image = transduction
        cells = [_block(1, 1), _block(2, 2)]
        matcher = ColocalizationMatcher(MeanIntensityRule(threshold=200.0))
        result = matcher.match(cells, mask, image)
        # Second block averages 400 / 4 = 100.
        assert result.overlapping_cells == [cells[0]]

    def test_order_preserved(self, transduction):
        mask, image = transduction
        mask = np.full_like(mask, 255)
        cells = [_block(6, 6), _block(1, 1), _block(4, 4)]
        result = ColocalizationMatcher().match(cells, mask, image)
        assert result.overlapping_cells == cells

    def test_no_cells(self, transduction):
        mask, image = transduction
        result = ColocalizationMatcher().match([], mask, image)
        assert result.target_cell_count == 0
        assert result.efficiency == 0.0

    def test_shape_mismatch_raises(self, transduction):
        mask, image = transduction
        with pytest.raises(ValueError, match="shape"):
            ColocalizationMatcher().match([], mask[:5], image)

    def test_invalid_min_overlap(self):
        with pytest.raises(ValueError):
            MaskIntersectionRule(min_overlap_pixels=0)


class TestResultAssembler:

    def test_assemble(self, transduction):
        mask, image = transduction
        match = ColocalizationMatcher().match([_block(1, 1), _block(6, 6)], mask, image)
        metadata = ImageMetadata("a.tif", width=10, height=10, channel_count=2)

        result = ResultAssembler().assemble(match, metadata)
        assert isinstance(result, TransductionResult)
        assert result.target_cell_count == 2
        assert result.overlapping_cells == (_block(1, 1),)
        assert len(result.overlapping_analyses) == 1
        assert result.metadata is metadata
        assert result.transduction_efficiency == 50.0

    def test_assemble_empty(self):
        result = ResultAssembler().assemble(MatchResult(0), ImageMetadata("none.tif"))
        assert result.transduced_cell_count == 0
        assert result.transduction_efficiency == 0.0
