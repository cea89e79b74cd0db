"""ResultAssembler — package match output into a TransductionResult."""

from __future__ import annotations

from cellcoloc.coloc.matcher import MatchResult
from cellcoloc.core.models import ImageMetadata, TransductionResult


class ResultAssembler:
    """Build the immutable per-image result handed to output writers."""

    def assemble(self, match: MatchResult, metadata: ImageMetadata) -> TransductionResult:
        return TransductionResult(
            target_cell_count=match.target_cell_count,
            overlapping_cells=tuple(match.overlapping_cells),
            overlapping_analyses=tuple(match.analyses),
            metadata=metadata,
        )
