"""cellcoloc Segment — region separation and cell extraction."""

from cellcoloc.segment.base_segmenter import BaseSegmenter
from cellcoloc.segment.extractor import CellExtractor, trace_boundary
from cellcoloc.segment.watershed import WatershedSegmenter

__all__ = [
    "BaseSegmenter",
    "CellExtractor",
    "trace_boundary",
    "WatershedSegmenter",
]
