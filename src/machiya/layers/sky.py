"""Backdrop gradient and time-of-day darkness overlay."""

import logging

from machiya.bands import SKY_HOUR_RANGES, SKY_MODE_RANGES, SKY_TEMPERATURE_SHIFT, Span, clamp, lookup
from machiya.clock import darkness
from machiya.models import DarknessOverlay, RenderMode, Rgb, SkyGradient, WeatherPair, finite_or
from machiya.palette import PaletteSwatch
from machiya.prng import Prng

logger = logging.getLogger(__name__)


def sky_range(hour: float, mode: RenderMode, temperature: float) -> Span:
    """Swatch fraction range for one end of the gradient.

    Golden and blue hour replace the hour bucket outright. Otherwise warm
    cities lean toward the bright end of the swatch and cold ones toward
    the dark end.
    """
    if mode in SKY_MODE_RANGES:
        return SKY_MODE_RANGES[mode]
    base = lookup(SKY_HOUR_RANGES, hour % 24)
    shift = clamp((finite_or(temperature, 15.0) - 15) / 40, -SKY_TEMPERATURE_SHIFT, SKY_TEMPERATURE_SHIFT)
    return Span(clamp(base.lo + shift, 0.0, 1.0), clamp(base.hi + shift, 0.0, 1.0))


def _pick(prng: Prng, swatch: PaletteSwatch, span: Span) -> Rgb:
    return swatch.at_fraction(span.draw(prng))


def generate(
    pair: WeatherPair,
    prng: Prng,
    width: int,
    height: int,
    swatch: PaletteSwatch,
    hours: tuple[float, float],
    mode: RenderMode,
) -> tuple[SkyGradient, ...]:
    # Top of the canvas follows city A's clock, bottom follows city B's
    top = _pick(prng, swatch, sky_range(hours[0], mode, pair.city_a.temperature))
    bottom = _pick(prng, swatch, sky_range(hours[1], mode, pair.city_b.temperature))
    logger.debug("Sky gradient %s -> %s", top.hex, bottom.hex)
    return (SkyGradient(width, height, top, bottom),)


def generate_darkness(width: int, height: int, hour: float, mode: RenderMode) -> tuple[DarknessOverlay, ...]:
    opacity = darkness(hour)
    if mode is RenderMode.GOLDEN_HOUR:
        opacity /= 2
    if opacity <= 0:
        return ()
    return (DarknessOverlay(width, height, opacity),)
