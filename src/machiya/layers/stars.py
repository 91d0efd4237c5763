"""Starfield."""

import logging

from machiya.bands import STARS, Span
from machiya.models import Rgb, StarLight, WeatherPair
from machiya.prng import Prng

logger = logging.getLogger(__name__)

_WHITE = Rgb(255, 255, 255)


def star_count_span(pair: WeatherPair) -> Span:
    # Clear cold nights show many stars, humid skies few
    if pair.avg_temperature < STARS.cold_below and pair.avg_humidity < STARS.clear_humidity_below:
        return STARS.cold_clear
    if pair.avg_humidity > STARS.humid_above:
        return STARS.humid
    return STARS.baseline


def generate(pair: WeatherPair, prng: Prng, width: int, height: int) -> tuple[StarLight, ...]:
    count = star_count_span(pair).draw_int(prng)
    stars = []
    for _ in range(count):
        x = prng.next(0, width)
        y = prng.next(0, height)
        size = prng.next(1, 3)
        opacity = prng.next_int(0, 255) / 255
        stars.append(StarLight(x, y, size, opacity, _WHITE))
    logger.debug("Stars: %d", count)
    return tuple(stars)
