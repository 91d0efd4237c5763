import pytest

from machiya.layers.abstract import MAX_WIND, TEXTURE_MAX_CELLS, geometric, texture, turbulence
from machiya.layers.slats import build_group
from machiya.models import AbstractLine, AbstractRect, ConditionCategory
from machiya.noise import NoiseField
from machiya.palette import PaletteSwatch, expand
from machiya.prng import Prng
from machiya.renderers.svg_document import serialize_element

from conftest import make_pair

CONDITIONS = (ConditionCategory.CLOUDY, ConditionCategory.CLEAR)
# Largest possible typhoon overlay: 120 base + 40 streaks + 40 fragments + 23 sweeps + 19 layers
MAX_GEOMETRIC_SHAPES = 242


@pytest.fixture
def swatch() -> PaletteSwatch:
    return PaletteSwatch(expand(["#000000", "#ffffff", "#ff0000", "#00ff00", "#0000ff", "#123456", "#abcdef", "#fedcba"]))


class TestGeometricWind:
    def test_negative_wind_gives_positive_sizes(self):
        shapes = geometric(make_pair(wind_speed=-40.0), Prng(3), 1080, 1350, CONDITIONS)
        assert shapes
        for shape in shapes:
            if isinstance(shape, AbstractLine):
                assert shape.stroke_width > 0
            elif isinstance(shape, AbstractRect):
                assert shape.w > 0 and shape.h > 0

    def test_extreme_wind_is_capped(self):
        shapes = geometric(make_pair(wind_speed=2e5), Prng(3), 1080, 1350, CONDITIONS)
        assert len(shapes) <= MAX_GEOMETRIC_SHAPES
        assert {"fragment", "sweep", "layer"} <= {shape.role for shape in shapes}

    def test_turbulence_frequency_is_capped(self):
        (field,) = turbulence(make_pair(wind_speed=2e5), Prng(3), 1080, 1350, CONDITIONS)
        assert field.base_frequency == pytest.approx(0.02 + MAX_WIND / 100 * 0.03)
        assert field.displacement == MAX_WIND * 2


class TestTexture:
    def test_cells_bounded(self, swatch):
        prng = Prng(4)
        noise = NoiseField(prng)
        noise.seed(4)
        cells = texture(make_pair(humidity=100.0), Prng(4), 1080, 1350, swatch, noise)
        assert len(cells) <= TEXTURE_MAX_CELLS
        for cell in cells:
            assert cell.x % 20 == 0 and cell.y % 20 == 0
            assert 0.05 <= cell.opacity <= 0.15 + 1e-9

    def test_dry_air_has_no_texture(self, swatch):
        noise = NoiseField(Prng(4))
        assert texture(make_pair(humidity=10.0), Prng(4), 1080, 1350, swatch, noise) == []


class TestSlatGroup:
    def test_structure(self, swatch):
        group = build_group(0, Prng(9), 1080, 1350, swatch)
        assert 5 <= len(group.columns) < 60
        # One horizontal bar per row boundary
        assert 6 <= len(group.rows) <= 15
        last = group.columns[-1]
        assert group.w == pytest.approx(last.x + last.w - group.x)
        for row in group.rows:
            assert row.x == group.x
            assert row.w == pytest.approx(group.w)
        assert group.h == pytest.approx(group.rows[-1].y - group.rows[0].y + group.rows[0].h)

    def test_shoji_and_rotation(self, swatch):
        group = build_group(0, Prng(9), 1080, 1350, swatch)
        shoji = group.shoji
        assert shoji.opacity == 0.3
        assert (shoji.x, shoji.y, shoji.w, shoji.h) == (group.x, group.y, group.w, group.h)
        assert group.rotation == 30.0
        cx, cy = group.center
        assert cx == pytest.approx(group.x + group.w / 2)
        assert cy == pytest.approx(group.y + group.h / 2)
        svg = serialize_element(group)
        assert svg.startswith('<g transform="rotate(30 ')
        assert 'opacity="0.3"' in svg
