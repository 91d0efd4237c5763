"""Rain lines."""

import logging
import math

from machiya.bands import RAIN_BANDS, RAIN_TILT_DEGREES
from machiya.classify import pair_intensity
from machiya.models import ConditionCategory, RainLine, Rgb, WeatherPair
from machiya.prng import Prng

logger = logging.getLogger(__name__)


def generate(
    pair: WeatherPair,
    prng: Prng,
    width: int,
    height: int,
    conditions: tuple[ConditionCategory, ConditionCategory],
) -> tuple[RainLine, ...]:
    if ConditionCategory.RAIN not in conditions:
        return ()

    tier = pair_intensity(pair, conditions, ConditionCategory.RAIN)
    band = RAIN_BANDS[tier]
    count = band.count.draw_int(prng)
    lines = []
    for _ in range(count):
        x = prng.next(0, width)
        y = prng.next(0, height)
        length = band.length.draw(prng)
        thickness = band.thickness.draw(prng)
        blue = prng.next(100, 200)
        color = Rgb(math.floor(blue * 0.4), math.floor(blue * 0.6), math.floor(blue))
        opacity = prng.next(0.4, 0.8)
        tilt = math.radians(prng.next(-RAIN_TILT_DEGREES, RAIN_TILT_DEGREES))
        end_x = x + math.sin(tilt) * length
        end_y = y + math.cos(tilt) * length
        lines.append(RainLine(x, y, end_x, end_y, thickness, color, opacity))
    logger.debug("Rain: %s intensity, %d lines", tier.value, count)
    return tuple(lines)
