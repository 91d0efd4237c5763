"""Snowflakes placed from the snowflake asset family."""

import logging
from collections.abc import Sequence

from machiya.bands import SNOW_BANDS
from machiya.classify import pair_intensity
from machiya.models import ConditionCategory, SnowflakeInstance, VectorAsset, WeatherPair
from machiya.prng import Prng

logger = logging.getLogger(__name__)

SNOW_COLOR = "#FFFFFF"


def generate(
    pair: WeatherPair,
    prng: Prng,
    width: int,
    height: int,
    conditions: tuple[ConditionCategory, ConditionCategory],
    assets: Sequence[VectorAsset],
) -> tuple[SnowflakeInstance, ...]:
    if ConditionCategory.SNOW not in conditions:
        return ()

    tier = pair_intensity(pair, conditions, ConditionCategory.SNOW)
    band = SNOW_BANDS[tier]
    count = band.count.draw_int(prng)
    if not assets:
        logger.debug("No snowflake assets, skipping %d flakes", count)
        return ()

    flakes = []
    for _ in range(count):
        asset = assets[prng.next_int(0, len(assets))]
        opacity = band.opacity.draw(prng)
        x = prng.next(0, width)
        y = prng.next(0, height)
        base_scale = band.scale.draw(prng)
        scale_x = base_scale * prng.next(0.9, 1.1)
        scale_y = base_scale * prng.next(0.9, 1.1)
        rotation = prng.next(0, 360)
        flakes.append(SnowflakeInstance(asset, x, y, scale_x, scale_y, rotation, opacity, SNOW_COLOR))
    logger.debug("Snow: %s intensity, %d flakes", tier.value, count)
    return tuple(flakes)
