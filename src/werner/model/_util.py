"""Shared helpers for model dataclasses and lookup keys."""

from __future__ import annotations

import dataclasses

_field_defaults_cache: dict[tuple[type, frozenset[str]], dict] = {}


def _field_defaults(cls: type, *, exclude: frozenset[str] = frozenset()) -> dict:
    """Return a dict of ``{field_name: default}`` for a dataclass.

    Only fields with simple defaults are included.  Fields listed in
    *exclude* are skipped.  ``to_dict()`` methods compare current
    values against these so only non-default fields are serialised.
    Results are cached per ``(cls, exclude)`` pair.
    """
    key = (cls, exclude)
    if key not in _field_defaults_cache:
        _field_defaults_cache[key] = {
            f.name: f.default
            for f in dataclasses.fields(cls)
            if f.default is not dataclasses.MISSING
            and f.name not in exclude
        }
    return _field_defaults_cache[key]


def cantor_pairing(a: int, b: int) -> int:
    """Fold two non-negative integers into one, bijectively.

    Python integers are unbounded, so the result never collides no
    matter how large the structure grows.

    Raises:
        ValueError: If either argument is negative.
    """
    if a < 0 or b < 0:
        raise ValueError(
            f"cantor_pairing requires non-negative integers, got ({a}, {b})"
        )
    return (a + b) * (a + b + 1) // 2 + b
