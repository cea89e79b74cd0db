"""CsvColocalizationOutput — write batch results as a folder of CSV sheets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import pandas as pd

from cellcoloc.coloc.parameters import TransductionParameters
from cellcoloc.core.models import TransductionResult
from cellcoloc.report.rows import (
    DOCUMENTATION_ROWS,
    CellAnalysisRow,
    ParametersRow,
    SummaryRow,
)

logger = logging.getLogger(__name__)

DOCUMENTATION_FILE = "Documentation.csv"
SUMMARY_FILE = "Summary.csv"
CELL_ANALYSIS_FILE = "Transduced Cell Analysis.csv"
PARAMETERS_FILE = "Parameters.csv"

OUTPUT_FILES = (DOCUMENTATION_FILE, SUMMARY_FILE, CELL_ANALYSIS_FILE, PARAMETERS_FILE)


def summary_frame(results: Sequence[TransductionResult]) -> pd.DataFrame:
    """One summary row per image."""
    return pd.DataFrame(
        [SummaryRow.from_result(r).to_list() for r in results],
        columns=list(SummaryRow.COLUMNS),
    )


def cell_analysis_frame(results: Sequence[TransductionResult]) -> pd.DataFrame:
    """One row per transduced cell across all images."""
    rows = [row.to_list() for r in results for row in CellAnalysisRow.from_result(r)]
    return pd.DataFrame(rows, columns=list(CellAnalysisRow.COLUMNS))


def parameters_frame(
    results: Sequence[TransductionResult], params: TransductionParameters,
) -> pd.DataFrame:
    """The configuration used, repeated for every image."""
    rows = [
        ParametersRow.from_parameters(r.metadata.file_name, params).to_list()
        for r in results
    ]
    return pd.DataFrame(rows, columns=list(ParametersRow.COLUMNS))


class CsvColocalizationOutput:
    """Write the documentation, summary, per-cell and parameter sheets.

    Args:
        output_dir: Folder receiving the CSV files; created if missing.
        overwrite: Replace existing sheets instead of refusing.
    """

    def __init__(self, output_dir: Path, overwrite: bool = False) -> None:
        self._output_dir = Path(output_dir)
        self._overwrite = overwrite

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def write(
        self,
        results: Sequence[TransductionResult],
        params: TransductionParameters,
    ) -> list[Path]:
        """Write all sheets and return their paths.

        Raises:
            FileExistsError: If a sheet exists and overwrite is False.
            NotADirectoryError: If the output path is an existing file.
        """
        if self._output_dir.exists() and not self._output_dir.is_dir():
            raise NotADirectoryError(f"Output path is not a directory: {self._output_dir}")

        paths = [self._output_dir / name for name in OUTPUT_FILES]
        if not self._overwrite:
            existing = [p for p in paths if p.exists()]
            if existing:
                raise FileExistsError(
                    f"Output file already exists: {existing[0]}"
                )

        self._output_dir.mkdir(parents=True, exist_ok=True)

        documentation = pd.DataFrame(DOCUMENTATION_ROWS[1:], columns=list(DOCUMENTATION_ROWS[0]))
        frames = (
            documentation,
            summary_frame(results),
            cell_analysis_frame(results),
            parameters_frame(results, params),
        )
        for path, frame in zip(paths, frames):
            frame.to_csv(path, index=False)
            logger.debug("Wrote %s (%d rows)", path, len(frame))

        return paths
