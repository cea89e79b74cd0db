"""Tests for BatchAnalyzer."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest
import tifffile

from cellcoloc.coloc.batch import BatchAnalyzer, BatchResult
from cellcoloc.core.image import MultiChannelImage


def _write(path: Path, data: np.ndarray) -> Path:
    tifffile.imwrite(str(path), data, metadata={"axes": "CYX"})
    return path


class TestBatchAnalyzer:

    def test_in_memory_images(self, two_block_image, plain_params):
        single = MultiChannelImage(np.zeros((1, 10, 10), dtype=np.uint8), name="one_channel")
        calls = []

        batch = BatchAnalyzer(plain_params)
        result = batch.analyze_images(
            [two_block_image, single],
            progress_callback=lambda i, n, name: calls.append((i, n, name)),
        )

        assert isinstance(result, BatchResult)
        assert result.images_processed == 1
        assert result.images_skipped == 1
        assert result.results[0].metadata.file_name == "two_blocks"
        assert any("one_channel" in w for w in result.warnings)
        assert calls == [(1, 2, "two_blocks"), (2, 2, "one_channel")]

    def test_files_sequential(self, tmp_path, two_block_image, plain_params):
        data = np.stack([two_block_image.channel(0), two_block_image.channel(1)])
        a = _write(tmp_path / "a.tif", data)
        b = _write(tmp_path / "b.tif", np.zeros_like(data))

        result = BatchAnalyzer(plain_params).analyze_files([a, b])
        assert [r.metadata.file_name for r in result.results] == ["a.tif", "b.tif"]
        assert result.results[0].transduced_cell_count == 1
        assert "b.tif: 0 cells detected" in result.warnings
        assert result.images_skipped == 0

    def test_unreadable_file_skipped(self, tmp_path, plain_params):
        bad = tmp_path / "bad.tif"
        bad.write_bytes(b"not a tiff")
        result = BatchAnalyzer(plain_params).analyze_files([bad])
        assert result.images_processed == 0
        assert result.images_skipped == 1
        assert result.warnings[0].startswith("bad.tif: skipped")

    def test_parallel_matches_sequential(self, tmp_path, two_block_image, plain_params):
        data = np.stack([two_block_image.channel(0), two_block_image.channel(1)])
        paths = [_write(tmp_path / f"img{i}.tif", np.roll(data, i, axis=2)) for i in range(3)]

        sequential = BatchAnalyzer(plain_params).analyze_files(paths)
        parallel = BatchAnalyzer(plain_params, max_workers=2).analyze_files(paths)
        assert parallel.results == sequential.results

    def test_empty_paths_raise(self):
        with pytest.raises(ValueError, match="No images"):
            BatchAnalyzer().analyze_files([])

    def test_invalid_workers(self):
        with pytest.raises(ValueError, match="max_workers"):
            BatchAnalyzer(max_workers=0)
