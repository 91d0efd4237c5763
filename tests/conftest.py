from datetime import datetime

import pytest
import pytz

from machiya.clock import RenderClock
from machiya.models import AssetPath, AssetStore, VectorAsset, WeatherObservation, WeatherPair


def make_observation(**overrides) -> WeatherObservation:
    values = dict(
        city="Ottawa",
        temperature=12.0,
        humidity=55.0,
        pressure=1013.0,
        wind_speed=3.0,
        description="scattered clouds",
        condition_code=None,
        category=None,
        timezone=None,
    )
    values.update(overrides)
    return WeatherObservation(**values)


def make_pair(**overrides) -> WeatherPair:
    return WeatherPair(make_observation(**overrides), make_observation(city="Tokyo", **overrides))


@pytest.fixture
def clock() -> RenderClock:
    # 03:00 UTC; both cities fall back to UTC when no timezone is set
    return RenderClock(datetime(2026, 1, 15, 3, 0, tzinfo=pytz.utc))


@pytest.fixture
def assets() -> AssetStore:
    cloud = VectorAsset("cloud_1", (AssetPath("M0 0 L647 0 L647 167.6 Z", "#e0d47f"),), (0.0, 0.0, 647.0, 167.6))
    flake = VectorAsset("snowflake_1", (AssetPath("M9 0 H10 V22 H9 Z", "#FFFFFF"),), (0.0, 0.0, 19.44, 22.069))
    branch = VectorAsset("sakurabranch_1", (AssetPath("M0 90 L95 20 Z", "#3b2a20"),), (0.0, 0.0, 100.0, 100.0))
    return AssetStore(clouds=(cloud,), snowflakes=(flake,), branches=(branch,))
