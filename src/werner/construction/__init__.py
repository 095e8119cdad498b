"""Structure construction and parameter persistence."""

from werner.construction.builders import structure_from_bonds
from werner.construction.settings import load_params, save_params

__all__ = [
    "load_params",
    "save_params",
    "structure_from_bonds",
]
