"""Shared test fixtures for cellcoloc."""

import numpy as np
import pytest

from cellcoloc.coloc.parameters import TransductionParameters
from cellcoloc.core.image import MultiChannelImage


def disc(shape, center, radius):
    """Boolean disc of ``radius`` around ``center`` given as (row, col)."""
    rows, cols = np.ogrid[: shape[0], : shape[1]]
    return (rows - center[0]) ** 2 + (cols - center[1]) ** 2 <= radius**2


@pytest.fixture
def two_block_image() -> MultiChannelImage:
    """10x10 image: two 2x2 cells in channel 0, one of them lit in channel 1."""
    data = np.zeros((2, 10, 10), dtype=np.uint8)
    data[0, 1:3, 1:3] = 255
    data[0, 6:8, 6:8] = 255
    data[1, 1:3, 1:3] = 255
    return MultiChannelImage(data, name="two_blocks")


@pytest.fixture
def plain_params() -> TransductionParameters:
    """Parameters with every optional stage off and a global threshold."""
    return TransductionParameters(
        should_subtract_background=False,
        threshold_locality="global",
        should_despeckle=False,
        should_gaussian_blur=False,
    )


@pytest.fixture
def disc_image() -> MultiChannelImage:
    """64x64 image: three bright discs, two of them also lit in channel 1."""
    shape = (64, 64)
    morphology = np.full(shape, 10, dtype=np.uint8)
    transduction = np.full(shape, 5, dtype=np.uint8)
    for center in ((16, 16), (16, 46), (46, 30)):
        morphology[disc(shape, center, 7)] = 200
    for center in ((16, 16), (46, 30)):
        transduction[disc(shape, center, 6)] = 180
    return MultiChannelImage(np.stack([morphology, transduction]), name="discs")
