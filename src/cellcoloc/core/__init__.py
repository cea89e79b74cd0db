"""cellcoloc Core — exceptions, image handle and result models."""

from cellcoloc.core.exceptions import (
    ChannelNotFoundError,
    ColocalizationError,
    InvalidConfigurationError,
)
from cellcoloc.core.image import MultiChannelImage
from cellcoloc.core.models import (
    Cell,
    ChannelCellAnalysis,
    ImageMetadata,
    TransductionResult,
)

__all__ = [
    "Cell",
    "ChannelCellAnalysis",
    "ChannelNotFoundError",
    "ColocalizationError",
    "ImageMetadata",
    "InvalidConfigurationError",
    "MultiChannelImage",
    "TransductionResult",
]
