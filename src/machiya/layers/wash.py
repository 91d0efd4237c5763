"""Overcast wash: a translucent full-canvas tint on grey days."""

from machiya.bands import WASH_OPACITY
from machiya.models import ConditionCategory, OverlayWash
from machiya.palette import condition_color
from machiya.prng import Prng


def generate(
    prng: Prng,
    width: int,
    height: int,
    conditions: tuple[ConditionCategory, ConditionCategory],
) -> tuple[OverlayWash, ...]:
    # Heaviest category present wins: STORM, then FOG, then CLOUDY
    for category, span in WASH_OPACITY:
        if category in conditions:
            opacity = span.draw(prng)
            color = condition_color(prng, category)
            return (OverlayWash(width, height, color, opacity),)
    return ()
