from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class PickingId:
    """Render-time identifier of a picked piece of geometry.

    Attributes:
        object_id: Id of the rendered object that was hit.
        group_id: Group within the object, or :attr:`NULL` when the
            pick refers to the whole object.
        instance_id: Instance of the object that was hit.
    """

    NULL: ClassVar[int] = -1
    """Group id meaning "the whole object"."""

    object_id: int
    group_id: int = -1
    instance_id: int = 0

    @property
    def is_null_group(self) -> bool:
        return self.group_id == PickingId.NULL


@dataclass(frozen=True)
class Interval:
    """Half-open range of group indices ``[start, end)``."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(
                f"interval end ({self.end}) must not precede start "
                f"({self.start})"
            )

    @classmethod
    def of_singleton(cls, value: int) -> Interval:
        return cls(value, value + 1)

    def __len__(self) -> int:
        return self.end - self.start

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.start <= value < self.end

    def __iter__(self):
        return iter(range(self.start, self.end))
