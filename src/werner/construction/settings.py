"""Polyhedron parameter save/load for JSON files."""

from __future__ import annotations

import json
from pathlib import Path

from werner.model import CoordinationPolyhedronParams

_VALID_SECTIONS = frozenset({"polyhedra"})


def save_params(path: str | Path, params: CoordinationPolyhedronParams) -> None:
    """Save polyhedron parameters to a JSON file.

    Only non-default values are written.  The file is human-readable
    with two-space indentation.

    Args:
        path: Destination file path.
        params: The parameters to save.
    """
    data = {"polyhedra": params.to_dict()}
    Path(path).write_text(json.dumps(data, indent=2) + "\n")


def load_params(path: str | Path) -> CoordinationPolyhedronParams:
    """Load polyhedron parameters from a JSON file.

    A file without a ``"polyhedra"`` section yields the defaults.

    Args:
        path: Source file path.

    Returns:
        The parsed parameters.

    Raises:
        ValueError: If the file contains unknown keys or invalid
            values.
    """
    data = json.loads(Path(path).read_text())
    if not isinstance(data, dict):
        raise ValueError("parameter file must contain a JSON object")

    unknown = set(data) - _VALID_SECTIONS
    if unknown:
        raise ValueError(
            f"unknown top-level keys in parameter file: {sorted(unknown)}"
        )
    return CoordinationPolyhedronParams.from_dict(data.get("polyhedra", {}))
