"""BatchAnalyzer — run the transduction analysis over many images."""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ProcessPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Sequence

from cellcoloc.coloc.engine import TransductionAnalyzer
from cellcoloc.coloc.parameters import TransductionParameters
from cellcoloc.core.image import MultiChannelImage
from cellcoloc.core.models import TransductionResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


@dataclass(frozen=True)
class BatchResult:
    """Result of a batch analysis run.

    Attributes:
        results: Per-image results, in input order, for images that succeeded.
        images_processed: Number of images analyzed successfully.
        images_skipped: Number of images that failed and were skipped.
        elapsed_seconds: Wall-clock time in seconds.
        warnings: List of warning messages.
    """

    results: list[TransductionResult]
    images_processed: int
    images_skipped: int
    elapsed_seconds: float
    warnings: list[str] = field(default_factory=list)


def _analyze_file(path: str, params: TransductionParameters) -> TransductionResult:
    """Worker entry point: read one image file and analyze it."""
    from cellcoloc.io.tiff import read_multichannel_tiff

    image = read_multichannel_tiff(Path(path))
    return TransductionAnalyzer(params).analyze(image, file_name=Path(path).name)


def _is_fatal(exc: BaseException) -> bool:
    return isinstance(exc, (MemoryError, KeyboardInterrupt, SystemExit))


class BatchAnalyzer:
    """Analyze independent images one after another or in a process pool.

    Images that fail (missing channel, unreadable file, ...) are logged,
    recorded as warnings and skipped; the rest of the batch continues.

    Args:
        params: Analysis configuration shared by every image.
        max_workers: Worker processes for file batches. 1 = run in-process.
    """

    def __init__(self, params: TransductionParameters | None = None, max_workers: int = 1) -> None:
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._params = params or TransductionParameters()
        self._max_workers = max_workers

    def analyze_images(
        self,
        images: Sequence[MultiChannelImage],
        progress_callback: ProgressCallback | None = None,
    ) -> BatchResult:
        """Analyze in-memory images sequentially."""
        start = time.monotonic()
        analyzer = TransductionAnalyzer(self._params)
        results: list[TransductionResult] = []
        warnings: list[str] = []
        skipped = 0
        total = len(images)

        for i, image in enumerate(images):
            try:
                results.append(analyzer.analyze(image))
            except Exception as exc:
                if _is_fatal(exc):
                    raise
                self._record_failure(image.name, exc, warnings)
                skipped += 1

            if progress_callback:
                progress_callback(i + 1, total, image.name)

        return self._finish(results, warnings, skipped, start)

    def analyze_files(
        self,
        paths: Sequence[Path],
        progress_callback: ProgressCallback | None = None,
    ) -> BatchResult:
        """Read and analyze image files, in parallel when ``max_workers > 1``.

        Raises:
            ValueError: If ``paths`` is empty.
        """
        if not paths:
            raise ValueError("No images to analyze")

        start = time.monotonic()
        results: list[TransductionResult] = []
        warnings: list[str] = []
        skipped = 0
        total = len(paths)

        if self._max_workers == 1:
            for i, path in enumerate(paths):
                try:
                    results.append(_analyze_file(str(path), self._params))
                except Exception as exc:
                    if _is_fatal(exc):
                        raise
                    self._record_failure(Path(path).name, exc, warnings)
                    skipped += 1
                if progress_callback:
                    progress_callback(i + 1, total, Path(path).name)
            return self._finish(results, warnings, skipped, start)

        with ProcessPoolExecutor(max_workers=self._max_workers) as executor:
            futures: list[Future[TransductionResult]] = [
                executor.submit(_analyze_file, str(path), self._params) for path in paths
            ]
            for i, (path, future) in enumerate(zip(paths, futures)):
                try:
                    results.append(future.result())
                except Exception as exc:
                    if _is_fatal(exc):
                        raise
                    self._record_failure(Path(path).name, exc, warnings)
                    skipped += 1
                if progress_callback:
                    progress_callback(i + 1, total, Path(path).name)

        return self._finish(results, warnings, skipped, start)

    @staticmethod
    def _record_failure(name: str, exc: Exception, warnings: list[str]) -> None:
        logger.warning("Analysis failed for %s: %s", name, exc, exc_info=True)
        warnings.append(f"{name}: skipped ({exc})")

    @staticmethod
    def _finish(
        results: list[TransductionResult], warnings: list[str], skipped: int, start: float,
    ) -> BatchResult:
        for result in results:
            if result.target_cell_count == 0:
                warnings.append(f"{result.metadata.file_name}: 0 cells detected")
        elapsed = time.monotonic() - start
        return BatchResult(
            results=results,
            images_processed=len(results),
            images_skipped=skipped,
            elapsed_seconds=round(elapsed, 3),
            warnings=warnings,
        )
