"""Cloud field placed from the cloud asset family."""

import logging
from collections.abc import Sequence

from machiya.bands import (
    CLOUD_CLEAR_COUNT,
    CLOUD_COLOR_PREFERENCE,
    CLOUD_COUNTS,
    CLOUD_DEFAULT_OPACITY,
    CLOUD_HUMID_ABOVE,
    CLOUD_HUMID_COUNT,
    CLOUD_OPACITY,
    Span,
)
from machiya.models import CloudInstance, ConditionCategory, VectorAsset, WeatherPair
from machiya.palette import condition_color
from machiya.prng import Prng

logger = logging.getLogger(__name__)

Conditions = tuple[ConditionCategory, ConditionCategory]


def cloud_count_span(conditions: Conditions, avg_humidity: float) -> Span:
    for categories, span in CLOUD_COUNTS:
        if categories.intersection(conditions):
            return span
    if avg_humidity > CLOUD_HUMID_ABOVE:
        return CLOUD_HUMID_COUNT
    return CLOUD_CLEAR_COUNT


def cloud_opacity_span(conditions: Conditions) -> Span:
    for category, span in CLOUD_OPACITY:
        if category in conditions:
            return span
    return CLOUD_DEFAULT_OPACITY


def cloud_color_condition(conditions: Conditions) -> ConditionCategory:
    """Colour family for clouds, preferring the more colourful conditions."""
    for category in CLOUD_COLOR_PREFERENCE:
        if category in conditions:
            return category
    condition_a, condition_b = conditions
    chosen = condition_b if condition_b is not ConditionCategory.CLOUDY else condition_a
    if chosen is ConditionCategory.CLOUDY:
        return ConditionCategory.PARTLY_CLOUDY
    return chosen


def generate(
    pair: WeatherPair,
    prng: Prng,
    width: int,
    height: int,
    conditions: Conditions,
    assets: Sequence[VectorAsset],
) -> tuple[CloudInstance, ...]:
    count = cloud_count_span(conditions, pair.avg_humidity).draw_int(prng)
    if not assets:
        logger.debug("No cloud assets, skipping %d clouds", count)
        return ()

    opacity_span = cloud_opacity_span(conditions)
    color_condition = cloud_color_condition(conditions)
    clouds = []
    for _ in range(count):
        asset = assets[prng.next_int(0, len(assets))]
        opacity = opacity_span.draw(prng)
        use_alternate = prng.chance()
        color = condition_color(prng, color_condition, use_alternate)
        x = prng.next(-100, width + 100)
        y = prng.next(height * 0.1, height * 0.7)
        base_scale = prng.next(0.4, 1.2)
        scale_x = base_scale * prng.next(0.9, 1.1)
        scale_y = base_scale * prng.next(0.9, 1.1)
        rotation = prng.next(-15, 15)
        clouds.append(CloudInstance(asset, x, y, scale_x, scale_y, rotation, opacity, color))
    logger.debug("Clouds: %d (%s / %s)", count, conditions[0].value, conditions[1].value)
    return tuple(clouds)
