"""cellcoloc Report — result rows and CSV output."""

from cellcoloc.report.csv_output import CsvColocalizationOutput
from cellcoloc.report.rows import (
    DOCUMENTATION_ROWS,
    CellAnalysisRow,
    ParametersRow,
    SummaryRow,
    round_half_up,
)

__all__ = [
    "CellAnalysisRow",
    "CsvColocalizationOutput",
    "DOCUMENTATION_ROWS",
    "ParametersRow",
    "SummaryRow",
    "round_half_up",
]
