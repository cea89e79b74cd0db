"""cellcoloc Preprocess — thresholding strategies and the preprocessing pipeline."""

from cellcoloc.preprocess.preprocessor import (
    ImagePreprocessor,
    PreprocessingParameters,
    rank_footprint,
    to_gray8,
)
from cellcoloc.preprocess.thresholding import (
    SUPPORTED_ALGORITHMS,
    BernsenAlgorithm,
    NiblackAlgorithm,
    OtsuAlgorithm,
    ThresholdAlgorithm,
    ThresholdLocality,
    ThresholdStrategy,
    global_otsu_mask,
    resolve_algorithm,
)

__all__ = [
    "BernsenAlgorithm",
    "ImagePreprocessor",
    "NiblackAlgorithm",
    "OtsuAlgorithm",
    "PreprocessingParameters",
    "SUPPORTED_ALGORITHMS",
    "ThresholdAlgorithm",
    "ThresholdLocality",
    "ThresholdStrategy",
    "global_otsu_mask",
    "rank_footprint",
    "resolve_algorithm",
    "to_gray8",
]
