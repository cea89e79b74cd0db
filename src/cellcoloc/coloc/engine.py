"""TransductionAnalyzer — full per-image colocalization pipeline."""

from __future__ import annotations

import logging

from cellcoloc.coloc.assembler import ResultAssembler
from cellcoloc.coloc.matcher import ColocalizationMatcher
from cellcoloc.coloc.parameters import TransductionParameters
from cellcoloc.core.image import MultiChannelImage
from cellcoloc.core.models import Cell, ImageMetadata, TransductionResult
from cellcoloc.preprocess.preprocessor import ImagePreprocessor
from cellcoloc.segment.base_segmenter import BaseSegmenter
from cellcoloc.segment.extractor import CellExtractor
from cellcoloc.segment.watershed import WatershedSegmenter

logger = logging.getLogger(__name__)


class TransductionAnalyzer:
    """Count morphology cells and find those positive in the transduction channel.

    Pipeline per image: validate channels, preprocess + segment + extract the
    morphology channel, preprocess the transduction channel into a
    foreground mask, match cells against it and package the result.

    Args:
        params: Analysis configuration. Defaults to TransductionParameters().
        segmenter: Region-separation backend. Defaults to WatershedSegmenter.
        extractor: Cell extractor. Defaults to CellExtractor.
        matcher: Colocalization matcher. Defaults to mask intersection.
    """

    def __init__(
        self,
        params: TransductionParameters | None = None,
        segmenter: BaseSegmenter | None = None,
        extractor: CellExtractor | None = None,
        matcher: ColocalizationMatcher | None = None,
    ) -> None:
        self._params = params or TransductionParameters()
        self._preprocessor = ImagePreprocessor(self._params.to_preprocessing_parameters())
        self._segmenter = segmenter or WatershedSegmenter()
        self._extractor = extractor or CellExtractor()
        self._matcher = matcher or ColocalizationMatcher()
        self._assembler = ResultAssembler()

    @property
    def params(self) -> TransductionParameters:
        return self._params

    def find_cells(self, image: MultiChannelImage, channel: int) -> list[Cell]:
        """Preprocess, segment and extract the cells of one channel.

        Raises:
            ChannelNotFoundError: If the channel doesn't exist.
        """
        working = self._preprocessor.prepare(image.channel(channel))
        self._segmenter.segment(working)
        cells = self._extractor.extract(working)

        if self._params.filter_by_diameter:
            diameter_range = self._params.cell_diameter_range
            kept = [c for c in cells if diameter_range.accepts(c.area)]
            if len(kept) != len(cells):
                logger.debug(
                    "Dropped %d cells outside diameter range %s",
                    len(cells) - len(kept), diameter_range,
                )
            cells = kept
        return cells

    def analyze(self, image: MultiChannelImage, file_name: str | None = None) -> TransductionResult:
        """Run the full analysis on one image.

        Args:
            image: Multi-channel source image. It is never modified.
            file_name: Name reported in the result. Defaults to ``image.name``.

        Returns:
            TransductionResult for the image.

        Raises:
            ChannelNotFoundError: If either configured channel doesn't exist.
                Raised before any pixel is read.
        """
        params = self._params
        image.validate_channel(params.target_channel)
        image.validate_channel(params.transduced_channel)

        name = file_name if file_name is not None else image.name
        cells = self.find_cells(image, params.target_channel)
        if not cells:
            logger.info("%s: 0 cells detected in channel %d", name, params.target_channel)

        transduction_image = image.channel(params.transduced_channel)
        transduction_mask = self._preprocessor.prepare(transduction_image)
        match = self._matcher.match(cells, transduction_mask, transduction_image)

        metadata = ImageMetadata(
            file_name=name,
            width=image.width,
            height=image.height,
            channel_count=image.channel_count,
        )
        result = self._assembler.assemble(match, metadata)
        logger.info(
            "%s: %d cells, %d transduced (%.1f%%)",
            name, result.target_cell_count, result.transduced_cell_count,
            result.transduction_efficiency,
        )
        return result
