"""YAML serialization for TransductionParameters."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from cellcoloc.coloc.parameters import TransductionParameters
from cellcoloc.core.exceptions import InvalidConfigurationError


def save_parameters(params: TransductionParameters, path: Path) -> None:
    """Save analysis parameters to a YAML file.

    Args:
        params: The parameters to serialize.
        path: File path to write.
    """
    path = Path(path)
    with open(path, "w") as f:
        yaml.safe_dump(params.to_dict(), f, default_flow_style=False, sort_keys=False)


def dump_parameters(params: TransductionParameters) -> str:
    """Render analysis parameters as a YAML document."""
    return yaml.safe_dump(params.to_dict(), default_flow_style=False, sort_keys=False)


def load_parameters(path: Path) -> TransductionParameters:
    """Load analysis parameters from a YAML file.

    Keys missing from the file keep their default values.

    Args:
        path: Path to the YAML file.

    Returns:
        Validated TransductionParameters.

    Raises:
        FileNotFoundError: If the YAML file doesn't exist.
        InvalidConfigurationError: If the file is not a mapping of known
            parameters or a value is invalid.
    """
    path = Path(path)
    with open(path) as f:
        try:
            data: Any = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise InvalidConfigurationError(f"cannot parse {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidConfigurationError(
            f"{path} must contain a mapping of parameter names to values"
        )
    return TransductionParameters.from_dict(data)
