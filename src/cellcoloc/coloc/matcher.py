"""ColocalizationMatcher — classify morphology cells as transduction-positive."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from cellcoloc.core.models import Cell, ChannelCellAnalysis
from cellcoloc.measure.metrics import mean_intensity as _mean_of, transduction_efficiency

logger = logging.getLogger(__name__)


def mean_intensity(cell: Cell, image: np.ndarray) -> float:
    """Arithmetic mean of ``image`` over every point of the cell body."""
    return _mean_of(cell.sample(image))


class OverlapRule(Protocol):
    """Decision rule for whether a cell is transduction-positive."""

    def is_overlapping(self, cell: Cell, mask: np.ndarray, intensity: np.ndarray) -> bool:
        ...


@dataclass(frozen=True)
class MaskIntersectionRule:
    """Positive when the cell body covers enough transduction foreground.

    Attributes:
        min_overlap_pixels: Minimum number of body pixels that must be
            foreground in the transduction mask.
    """

    min_overlap_pixels: int = 1

    def __post_init__(self) -> None:
        if self.min_overlap_pixels < 1:
            raise ValueError(
                f"min_overlap_pixels must be >= 1, got {self.min_overlap_pixels}"
            )

    def is_overlapping(self, cell: Cell, mask: np.ndarray, intensity: np.ndarray) -> bool:
        overlap = int(np.count_nonzero(cell.sample(mask)))
        return overlap >= self.min_overlap_pixels


@dataclass(frozen=True)
class MeanIntensityRule:
    """Positive when the mean transduction intensity under the cell is high enough."""

    threshold: float

    def is_overlapping(self, cell: Cell, mask: np.ndarray, intensity: np.ndarray) -> bool:
        return mean_intensity(cell, intensity) >= self.threshold


@dataclass(frozen=True)
class MatchResult:
    """Cells of the morphology channel split by transduction status.

    Attributes:
        target_cell_count: Number of morphology cells considered.
        overlapping_cells: Transduction-positive cells, in input order.
        analyses: Transduction-channel statistics per overlapping cell.
    """

    target_cell_count: int
    overlapping_cells: list[Cell] = field(default_factory=list)
    analyses: list[ChannelCellAnalysis] = field(default_factory=list)

    @property
    def efficiency(self) -> float:
        return transduction_efficiency(len(self.overlapping_cells), self.target_cell_count)


class ColocalizationMatcher:
    """Associate morphology-channel cells with transduction-channel signal.

    Args:
        rule: Overlap decision rule. Defaults to a one-pixel intersection
            with the transduction foreground mask.
    """

    def __init__(self, rule: OverlapRule | None = None) -> None:
        self._rule = rule or MaskIntersectionRule()

    @property
    def rule(self) -> OverlapRule:
        return self._rule

    def match(
        self,
        cells: list[Cell],
        transduction_mask: np.ndarray,
        transduction_image: np.ndarray,
    ) -> MatchResult:
        """Classify each cell and measure the transduction-positive ones.

        Args:
            cells: Cells extracted from the morphology channel.
            transduction_mask: Binary (Y, X) foreground mask of the
                transduction channel; non-zero = signal.
            transduction_image: Transduction intensities (Y, X) used for the
                per-cell statistics.

        Returns:
            MatchResult with overlapping cells and their analyses.

        Raises:
            ValueError: If the mask and image shapes differ.
        """
        if transduction_mask.shape != transduction_image.shape:
            raise ValueError(
                f"Mask shape {transduction_mask.shape} does not match "
                f"image shape {transduction_image.shape}"
            )

        overlapping: list[Cell] = []
        analyses: list[ChannelCellAnalysis] = []
        for cell in cells:
            if self._rule.is_overlapping(cell, transduction_mask, transduction_image):
                overlapping.append(cell)
                analyses.append(ChannelCellAnalysis.from_cell(cell, transduction_image))

        logger.debug("%d of %d cells overlap the transduction channel", len(overlapping), len(cells))
        return MatchResult(
            target_cell_count=len(cells),
            overlapping_cells=overlapping,
            analyses=analyses,
        )
