from __future__ import annotations

from dataclasses import dataclass

from werner._constants import (
    DEFAULT_MAX_COORDINATION,
    DEFAULT_MIN_COORDINATION,
    MAX_COORDINATION_LIMIT,
    MIN_COORDINATION,
)
from werner.model._util import _field_defaults


@dataclass(frozen=True)
class CoordinationPolyhedronParams:
    """Settings for drawing coordination polyhedra.

    The coordination band restricts which detected sites get a
    polyhedron; it does not change which atoms are detected as sites.

    Attributes:
        min_coordination: Smallest coordination number drawn, in
            ``[4, 12]``.
        max_coordination: Largest coordination number drawn, in
            ``[4, 24]``.  Must not be below *min_coordination*.
        include_parent: Whether a filtered view should be drawn in the
            context of its parent structure.
    """

    min_coordination: int = DEFAULT_MIN_COORDINATION
    max_coordination: int = DEFAULT_MAX_COORDINATION
    include_parent: bool = False

    def __post_init__(self) -> None:
        if not MIN_COORDINATION <= self.min_coordination <= DEFAULT_MAX_COORDINATION:
            raise ValueError(
                f"min_coordination must be between {MIN_COORDINATION} and "
                f"{DEFAULT_MAX_COORDINATION}, got {self.min_coordination}"
            )
        if not MIN_COORDINATION <= self.max_coordination <= MAX_COORDINATION_LIMIT:
            raise ValueError(
                f"max_coordination must be between {MIN_COORDINATION} and "
                f"{MAX_COORDINATION_LIMIT}, got {self.max_coordination}"
            )
        if self.min_coordination > self.max_coordination:
            raise ValueError(
                f"min_coordination ({self.min_coordination}) must not exceed "
                f"max_coordination ({self.max_coordination})"
            )

    def in_band(self, number: int) -> bool:
        """Return ``True`` if coordination *number* is drawn."""
        return self.min_coordination <= number <= self.max_coordination

    def to_dict(self) -> dict:
        """Serialise to a JSON-compatible dictionary, omitting defaults."""
        return {
            name: getattr(self, name)
            for name, default in _field_defaults(type(self)).items()
            if getattr(self, name) != default
        }

    @classmethod
    def from_dict(cls, d: dict) -> CoordinationPolyhedronParams:
        """Deserialise from a dictionary.

        Raises:
            ValueError: If *d* contains unknown keys.
        """
        defaults = _field_defaults(cls)
        unknown = set(d) - set(defaults)
        if unknown:
            raise ValueError(
                f"unknown polyhedron parameter(s): {sorted(unknown)}"
            )
        return cls(**d)
