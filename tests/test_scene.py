import pytest

from machiya.layers import rain as rain_layer
from machiya.models import AbstractStyle, ConditionCategory, SceneOptions, WeatherPair
from machiya.scene import _js_number, create_seed, generate_scene, run

from conftest import make_observation, make_pair


@pytest.fixture
def overcast_pair():
    return make_pair(description="overcast clouds", humidity=80.0, wind_speed=2.0)


class TestScenarios:
    def test_overcast_calm(self, overcast_pair, clock, assets):
        scene = generate_scene(overcast_pair, 42, clock, assets)
        assert scene.conditions == (ConditionCategory.CLOUDY, ConditionCategory.CLOUDY)
        assert 8 <= len(scene.clouds) < 15
        assert scene.rain == ()
        assert scene.snowflakes == ()
        assert 5 <= len(scene.slats) < 15

    def test_code_beats_description_for_rain(self, clock, assets):
        pair = make_pair(description="clear sky", condition_code=500)
        scene = generate_scene(pair, 42, clock, assets)
        assert scene.conditions == (ConditionCategory.RAIN, ConditionCategory.RAIN)
        assert 50 <= len(scene.rain) < 150
        assert scene.snowflakes == ()

    def test_rain_in_one_city_clear_in_the_other(self, clock, assets):
        pair = WeatherPair(
            make_observation(description="light rain", condition_code=500),
            make_observation(city="Tokyo", description="clear sky"),
        )
        scene = generate_scene(pair, 42, clock, assets)
        assert scene.conditions == (ConditionCategory.RAIN, ConditionCategory.CLEAR)
        assert 50 <= len(scene.rain) < 150
        assert scene.snowflakes == ()

    def test_same_seed_identical_output(self, overcast_pair, clock, assets):
        first = run(overcast_pair, seed=42, clock=clock, assets=assets)
        second = run(overcast_pair, seed=42, clock=clock, assets=assets)
        assert first == second
        assert first.startswith("<svg")

    def test_different_seed_differs(self, overcast_pair, clock, assets):
        assert run(overcast_pair, seed=42, clock=clock, assets=assets) != run(
            overcast_pair, seed=43, clock=clock, assets=assets
        )

    def test_typhoon_wind(self, clock, assets):
        pair = make_pair(wind_speed=35.0)
        scene = generate_scene(pair, 42, clock, assets)
        assert 40 <= len(scene.slats) <= 50
        roles = {shape.role for shape in scene.abstract}
        assert {"fragment", "sweep", "layer"} <= roles

    def test_snow(self, clock, assets):
        pair = make_pair(description="light snow", condition_code=600, temperature=-3.0)
        scene = generate_scene(pair, 7, clock, assets)
        assert 40 <= len(scene.snowflakes) < 80
        assert all(flake.color == "#FFFFFF" for flake in scene.snowflakes)

    def test_no_assets_no_shapes(self, overcast_pair, clock):
        from machiya.models import AssetStore

        scene = generate_scene(overcast_pair, 42, clock, AssetStore())
        assert scene.clouds == ()
        assert scene.branches == ()

    def test_stars_and_disc_always_present(self, overcast_pair, clock, assets):
        scene = generate_scene(overcast_pair, 42, clock, assets)
        assert len(scene.disc) == 1
        assert len(scene.sky) == 1
        # 03:00 is deep night
        assert scene.darkness[0].opacity == 1.0

    @pytest.mark.parametrize("style", list(AbstractStyle))
    def test_every_abstract_style_renders(self, style, overcast_pair, clock, assets):
        svg = run(overcast_pair, seed=5, clock=clock, assets=assets, options=SceneOptions(abstract_style=style))
        assert svg.endswith("</svg>")


class TestGracefulDegradation:
    def test_failing_layer_is_empty(self, clock, assets, monkeypatch, caplog):
        def boom(*args, **kwargs):
            raise RuntimeError("broken generator")

        monkeypatch.setattr(rain_layer, "generate", boom)
        pair = make_pair(description="moderate rain", condition_code=501)
        scene = generate_scene(pair, 42, clock, assets)
        assert scene.rain == ()
        assert scene.sky
        assert scene.abstract
        assert "rain" in caplog.text

    def test_malformed_seed_coerced(self, overcast_pair, clock, assets):
        assert generate_scene(overcast_pair, float("nan"), clock, assets).seed == 1
        assert generate_scene(overcast_pair, 0, clock, assets).seed == 1


class TestCreateSeed:
    def test_deterministic_and_non_negative(self, overcast_pair):
        seed = create_seed(overcast_pair, 1_700_000_000_000)
        assert seed == create_seed(overcast_pair, 1_700_000_000_000)
        assert 0 <= seed < 2**31

    def test_timestamp_changes_seed(self, overcast_pair):
        assert create_seed(overcast_pair, 1_700_000_000_000) != create_seed(overcast_pair, 1_700_000_000_001)

    def test_single_character_hash(self):
        # "1" * 6 weather fields then "5": hash of "1111115"
        obs = make_observation(temperature=1.0, humidity=1.0, pressure=1.0)
        expected = 0
        for ch in "1111115":
            expected = (expected * 31 + ord(ch)) % 2**32
        if expected >= 2**31:
            expected -= 2**32
        assert create_seed(WeatherPair(obs, obs), 5) == abs(expected) & 0x7FFFFFFF

    def test_js_number_format(self):
        assert _js_number(12.0) == "12"
        assert _js_number(12.5) == "12.5"
        assert _js_number(-3) == "-3"
