"""Sun / moon disc."""

import logging

from machiya.bands import DISC_DAY_HOURS, DISC_MARGIN, DISC_SIZE
from machiya.models import Disc, DiscMode, DiscStyle, Rgb
from machiya.palette import DISC_COLORS, brighten
from machiya.prng import Prng

logger = logging.getLogger(__name__)


def disc_mode(hour: float) -> DiscMode:
    start, end = DISC_DAY_HOURS
    return DiscMode.SOLID if start <= hour % 24 < end else DiscMode.GLOW


def generate(prng: Prng, width: int, height: int, hour: float, style: DiscStyle = DiscStyle.GLOW) -> tuple[Disc, ...]:
    """Place one disc fully on canvas and inside the upper third.

    Args:
        hour: City A's decimal local hour; daytime gives a sun.
        style: GLOW draws the layered halo, SINGLE one brightened circle.
    """
    mode = disc_mode(hour)
    size = DISC_SIZE.draw(prng)
    half = size / 2
    low_x = half + DISC_MARGIN
    x = prng.next(low_x, max(low_x, width - half - DISC_MARGIN))
    low_y = half + DISC_MARGIN
    y = prng.next(low_y, max(low_y, height / 3))
    color = Rgb.from_hex(DISC_COLORS[prng.next_int(0, len(DISC_COLORS))])
    if style is DiscStyle.SINGLE:
        color = brighten(color)
    logger.debug("Disc %s at (%.0f, %.0f) size %.0f", mode.value, x, y, size)
    return (Disc(mode, style, x, y, size, color),)
