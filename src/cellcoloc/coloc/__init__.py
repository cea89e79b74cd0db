"""cellcoloc Coloc — cross-channel matching, result assembly and batch runs."""

from cellcoloc.coloc.assembler import ResultAssembler
from cellcoloc.coloc.batch import BatchAnalyzer, BatchResult
from cellcoloc.coloc.engine import TransductionAnalyzer
from cellcoloc.coloc.matcher import (
    ColocalizationMatcher,
    MaskIntersectionRule,
    MatchResult,
    MeanIntensityRule,
    OverlapRule,
    mean_intensity,
    transduction_efficiency,
)
from cellcoloc.coloc.parameters import CellDiameterRange, TransductionParameters

__all__ = [
    "BatchAnalyzer",
    "BatchResult",
    "CellDiameterRange",
    "ColocalizationMatcher",
    "MaskIntersectionRule",
    "MatchResult",
    "MeanIntensityRule",
    "OverlapRule",
    "ResultAssembler",
    "TransductionAnalyzer",
    "TransductionParameters",
    "mean_intensity",
    "transduction_efficiency",
]
