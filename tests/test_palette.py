import pytest

from machiya.bands import Band, Span, lookup, map_range
from machiya.models import Rgb, ThermalElement
from machiya.palette import (
    PaletteSwatch,
    brighten,
    element_for_temperature,
    expand,
    interpolation_factor,
    resolve_palette,
    round_half_up,
)

from conftest import make_observation, make_pair


class TestExpand:
    def test_size_and_first_entry(self):
        colors = expand(["#000000", "#ffffff", "#ff0000", "#00ff00", "#0000ff", "#123456", "#abcdef", "#fedcba"])
        assert len(colors) == 256
        assert colors[0] == Rgb(0, 0, 0)
        assert colors[32] == Rgb(255, 255, 255)

    def test_midpoint_rounds_half_up(self):
        colors = expand(["#000000", "#ffffff"], target_size=4)
        # Two steps per seed: 0 -> 255 at t=0.5 is 127.5, rounded up
        assert colors[1] == Rgb(128, 128, 128)

    def test_last_seed_wraps_to_first(self):
        colors = expand(["#000000", "#ffffff"], target_size=4)
        assert colors[2] == Rgb(255, 255, 255)
        assert colors[3] == Rgb(128, 128, 128)

    def test_empty(self):
        assert expand([]) == ()

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.49) == 2


class TestResolvePalette:
    def test_same_element_not_interpolated(self):
        resolved = resolve_palette(make_pair(temperature=20.0))
        assert resolved.elements == (ThermalElement.WARM,)
        assert len(resolved.swatches) == 4
        assert all(len(swatch) == 256 for swatch in resolved.swatches)

    def test_two_elements_interpolated(self):
        pair = make_pair(temperature=30.0)
        pair = type(pair)(pair.city_a, make_observation(city="Tokyo", temperature=-5.0))
        resolved = resolve_palette(pair)
        assert resolved.elements == (ThermalElement.HOT, ThermalElement.FREEZING)
        assert resolved.factor == pytest.approx(0.5)
        assert all(len(swatch) == 256 for swatch in resolved.swatches)

    def test_override_wins(self):
        resolved = resolve_palette(make_pair(temperature=30.0), ThermalElement.HOLOGRAM)
        assert resolved.elements == (ThermalElement.HOLOGRAM,)

    def test_interpolation_factor_defaults(self):
        assert interpolation_factor(10.0, 10.0) == 0.5
        assert interpolation_factor(float("nan"), 15.0) == 0.5

    @pytest.mark.parametrize(
        "temperature, expected",
        [
            (40.0, ThermalElement.FIRE),
            (25.0, ThermalElement.HOT),
            (12.0, ThermalElement.COOL),
            (0.0, ThermalElement.COLD),
            (-50.0, ThermalElement.ABSOLUTEFREEZE),
        ],
    )
    def test_element_for_temperature(self, temperature, expected):
        assert element_for_temperature(temperature) is expected


class TestSwatch:
    def test_out_of_range_is_grey(self):
        swatch = PaletteSwatch((Rgb(1, 2, 3),))
        assert swatch[0] == Rgb(1, 2, 3)
        assert swatch[5] == Rgb(128, 128, 128)
        assert swatch[-1] == Rgb(128, 128, 128)

    def test_brighten_floors_channels(self):
        assert brighten(Rgb(0, 0, 0)) == Rgb(150, 150, 150)
        lifted = brighten(Rgb(40, 20, 10))
        assert min(lifted.r, lifted.g, lifted.b) >= 150


class TestBands:
    def test_lookup_inclusive_and_exclusive(self):
        bands = (Band(10, "high"), Band(0, "low"))
        assert lookup(bands, 10) == "high"
        assert lookup(bands, 10, inclusive=False) == "low"
        assert lookup(bands, -5) == "low"

    def test_map_range(self):
        assert map_range(5, 0, 10, 0, 100) == 50
        assert map_range(5, 3, 3, 7, 9) == 7

    def test_span_draw_int(self):
        from machiya.prng import Prng

        prng = Prng(11)
        for _ in range(100):
            assert 3 <= Span(3, 7).draw_int(prng) < 7
