"""Colour and colourmap handling for the matplotlib preview."""

from __future__ import annotations

from collections.abc import Callable, Sequence

#: A named colour or hex string, a grey level in ``[0, 1]``, or an RGB
#: triple with components in ``[0, 1]``.
Colour = str | float | tuple[float, float, float] | list[float]

#: A registered colourmap name, or any callable mapping ``[0, 1]`` to
#: an RGB(A) sequence (a matplotlib ``Colormap`` qualifies).
CmapSpec = str | Callable[[float], Sequence[float]]

RGB = tuple[float, float, float]


def normalise_colour(colour: Colour) -> RGB:
    """Return *colour* as an ``(r, g, b)`` tuple of floats.

    Raises:
        ValueError: If the colour cannot be interpreted.
    """
    if isinstance(colour, bool):
        raise ValueError(f"Cannot interpret colour: {colour!r}")

    if isinstance(colour, (int, float)):
        grey = float(colour)
        if not 0.0 <= grey <= 1.0:
            raise ValueError(f"grey level must lie in [0, 1], got {grey}")
        return (grey, grey, grey)

    if isinstance(colour, str):
        from matplotlib.colors import to_rgb

        try:
            return to_rgb(colour)
        except ValueError:
            raise ValueError(f"Unrecognised colour name: {colour!r}") from None

    if isinstance(colour, (tuple, list)) and len(colour) == 3:
        r, g, b = (float(c) for c in colour)
        if not all(0.0 <= c <= 1.0 for c in (r, g, b)):
            raise ValueError(
                f"RGB components must lie in [0, 1], got {(r, g, b)}"
            )
        return (r, g, b)

    raise ValueError(f"Cannot interpret colour: {colour!r}")


def with_alpha(colour: Colour, alpha: float) -> tuple[float, float, float, float]:
    """Return *colour* as RGBA with the given opacity."""
    return (*normalise_colour(colour), float(alpha))


def resolve_cmap(cmap: CmapSpec) -> Callable[[float], RGB]:
    """Return a callable mapping ``[0, 1]`` to an RGB tuple.

    Raises:
        TypeError: If *cmap* is neither a string nor callable.
        KeyError: If *cmap* names no registered colourmap.
    """
    if isinstance(cmap, str):
        import matplotlib

        fn: Callable[[float], Sequence[float]] = matplotlib.colormaps[cmap]
    elif callable(cmap):
        fn = cmap
    else:
        raise TypeError(f"Unsupported cmap type: {type(cmap).__name__}")

    def _rgb(value: float) -> RGB:
        rgba = fn(value)
        return (float(rgba[0]), float(rgba[1]), float(rgba[2]))

    return _rgb
