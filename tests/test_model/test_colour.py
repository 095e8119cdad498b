"""Tests for werner.model.colour — colour and colourmap normalisation."""

import pytest

from werner.model import normalise_colour, resolve_cmap, with_alpha


class TestNormaliseColour:
    def test_name(self):
        assert normalise_colour("red") == pytest.approx((1.0, 0.0, 0.0))

    def test_hex(self):
        assert normalise_colour("#00ff00") == pytest.approx((0.0, 1.0, 0.0))

    def test_grey(self):
        assert normalise_colour(0.5) == (0.5, 0.5, 0.5)

    def test_rgb_list(self):
        assert normalise_colour([0.1, 0.2, 0.3]) == (0.1, 0.2, 0.3)

    @pytest.mark.parametrize("colour", [1.5, (0.0, 2.0, 0.0), (0.1, 0.2), "notacolour", True])
    def test_invalid(self, colour):
        with pytest.raises(ValueError):
            normalise_colour(colour)


class TestWithAlpha:
    def test_appends_alpha(self):
        assert with_alpha((0.1, 0.2, 0.3), 0.4) == (0.1, 0.2, 0.3, 0.4)


class TestResolveCmap:
    def test_named(self):
        fn = resolve_cmap("viridis")
        rgb = fn(0.0)
        assert len(rgb) == 3
        assert all(isinstance(c, float) for c in rgb)

    def test_callable(self):
        fn = resolve_cmap(lambda v: (v, 0.0, 1.0 - v, 1.0))
        assert fn(0.25) == (0.25, 0.0, 0.75)

    def test_unsupported(self):
        with pytest.raises(TypeError):
            resolve_cmap(42)
