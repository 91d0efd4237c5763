import pytest

from machiya.classify import classify, higher_intensity, intensity, pair_intensity
from machiya.models import ConditionCategory, Intensity

from conftest import make_observation, make_pair


class TestClassify:
    @pytest.mark.parametrize(
        "code, expected",
        [
            (211, ConditionCategory.STORM),
            (310, ConditionCategory.RAIN),
            (502, ConditionCategory.RAIN),
            (601, ConditionCategory.SNOW),
            (741, ConditionCategory.FOG),
            (800, ConditionCategory.CLEAR),
            (802, ConditionCategory.PARTLY_CLOUDY),
            (804, ConditionCategory.CLOUDY),
        ],
    )
    def test_code(self, code, expected):
        assert classify("", code) is expected

    def test_code_beats_description(self):
        assert classify("clear sky", 500) is ConditionCategory.RAIN

    def test_category_beats_description(self):
        assert classify("clear sky", None, "Snow") is ConditionCategory.SNOW

    def test_storm_code_beats_description(self):
        assert classify("clear sky", 211) is ConditionCategory.STORM

    def test_clouds_category_with_scattered_description(self):
        assert classify("scattered clouds", None, "Clouds") is ConditionCategory.PARTLY_CLOUDY

    def test_clouds_category_partial(self):
        assert classify("broken clouds", None, "Clouds") is ConditionCategory.PARTLY_CLOUDY
        assert classify("overcast clouds", None, "Clouds") is ConditionCategory.CLOUDY

    @pytest.mark.parametrize(
        "description, expected",
        [
            ("overcast clouds", ConditionCategory.CLOUDY),
            ("few clouds", ConditionCategory.PARTLY_CLOUDY),
            ("light rain", ConditionCategory.RAIN),
            ("heavy snow", ConditionCategory.SNOW),
            ("mist", ConditionCategory.FOG),
            ("thunderstorm", ConditionCategory.STORM),
            ("windy", ConditionCategory.WINDY),
        ],
    )
    def test_description(self, description, expected):
        assert classify(description) is expected

    def test_unknown_is_partly_cloudy(self):
        assert classify("") is ConditionCategory.PARTLY_CLOUDY
        assert classify(None) is ConditionCategory.PARTLY_CLOUDY
        assert classify("volcanic ash plume") is ConditionCategory.PARTLY_CLOUDY


class TestIntensity:
    def test_rain_tiers(self):
        assert intensity(500, ConditionCategory.RAIN) is Intensity.LIGHT
        assert intensity(501, ConditionCategory.RAIN) is Intensity.MODERATE
        assert intensity(502, ConditionCategory.RAIN) is Intensity.HEAVY
        assert intensity(302, ConditionCategory.RAIN) is Intensity.HEAVY
        assert intensity(311, ConditionCategory.RAIN) is Intensity.LIGHT

    def test_snow_tiers(self):
        assert intensity(600, ConditionCategory.SNOW) is Intensity.LIGHT
        assert intensity(601, ConditionCategory.SNOW) is Intensity.MODERATE
        assert intensity(622, ConditionCategory.SNOW) is Intensity.HEAVY

    def test_missing_code_is_moderate(self):
        assert intensity(None, ConditionCategory.RAIN) is Intensity.MODERATE
        assert intensity(0, ConditionCategory.SNOW) is Intensity.MODERATE

    def test_higher_intensity(self):
        assert higher_intensity(Intensity.LIGHT, Intensity.HEAVY) is Intensity.HEAVY
        assert higher_intensity(Intensity.MODERATE, Intensity.LIGHT) is Intensity.MODERATE

    def test_pair_takes_max_over_matching_cities(self):
        pair = make_pair(condition_code=500)
        pair = type(pair)(pair.city_a, make_observation(city="Tokyo", condition_code=502))
        conditions = (ConditionCategory.RAIN, ConditionCategory.RAIN)
        assert pair_intensity(pair, conditions, ConditionCategory.RAIN) is Intensity.HEAVY

    def test_pair_ignores_non_matching_city(self):
        pair = make_pair(condition_code=500)
        pair = type(pair)(pair.city_a, make_observation(city="Tokyo", condition_code=800))
        conditions = (ConditionCategory.RAIN, ConditionCategory.CLEAR)
        assert pair_intensity(pair, conditions, ConditionCategory.RAIN) is Intensity.LIGHT
