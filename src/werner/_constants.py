"""Shared constants used across the model and geometry layers."""

MIN_COORDINATION: int = 4
"""Minimum number of coordinating bonds for an atom to be a site."""

DEFAULT_MIN_COORDINATION: int = 4
"""Default lower bound of the drawn coordination band."""

DEFAULT_MAX_COORDINATION: int = 12
"""Default upper bound of the drawn coordination band."""

MAX_COORDINATION_LIMIT: int = 24
"""Largest accepted upper bound for the drawn coordination band."""
