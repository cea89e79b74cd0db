"""Shared fixtures for CLI tests."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import tifffile
from click.testing import CliRunner


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def block_tiff(tmp_path: Path) -> Path:
    """Two-channel 10x10 TIFF: two 2x2 cells, one lit in channel 1."""
    data = np.zeros((2, 10, 10), dtype=np.uint8)
    data[0, 1:3, 1:3] = 255
    data[0, 6:8, 6:8] = 255
    data[1, 1:3, 1:3] = 255
    path = tmp_path / "blocks.tif"
    tifffile.imwrite(str(path), data, metadata={"axes": "CYX"})
    return path


@pytest.fixture
def plain_config(tmp_path: Path) -> Path:
    """YAML configuration turning off every optional preprocessing stage."""
    path = tmp_path / "plain.yaml"
    path.write_text(
        "should_subtract_background: false\n"
        "threshold_locality: global\n"
        "should_despeckle: false\n"
        "should_gaussian_blur: false\n"
    )
    return path
