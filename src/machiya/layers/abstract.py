"""Abstract overlay in one of several statically configured styles.

GEOMETRIC scales its density with a six-tier wind ladder: every tier draws
base lines and rectangles, STRONG and above add diagonal wind streaks, STORM
and above add small debris fragments, and TYPHOON adds long sweeping lines
plus faint layered rectangles. The other styles are single-effect overlays.
Colours come from the two cities' condition palettes, alternating between
city A and city B per shape.
"""

import logging
import math

from machiya.bands import ABSTRACT_WIND_TIERS, STORM, STRONG, TYPHOON, WindTier, clamp, lookup, map_range
from machiya.models import (
    AbstractDot,
    AbstractLine,
    AbstractRect,
    AbstractShape,
    AbstractStyle,
    ConditionCategory,
    GradientBlob,
    Rgb,
    TextureCell,
    TurbulenceField,
    WeatherPair,
)
from machiya.noise import NoiseField
from machiya.palette import PaletteSwatch, condition_color, round_half_up
from machiya.prng import Prng

logger = logging.getLogger(__name__)

Conditions = tuple[ConditionCategory, ConditionCategory]

TURBULENCE_FILTER_ID = "turbulence-filter"
TEXTURE_GRID = 20
TEXTURE_THRESHOLD = 0.5
TEXTURE_MAX_CELLS = 500
TEXTURE_MIN_HUMIDITY = 30.0
TEXTURE_NOISE_SCALE = 0.01
TEXTURE_INTENSITY = 1.0
MAX_WIND = 50.0  # m/s, top of the wind ladder


def wind_tier(avg_wind: float) -> WindTier:
    return lookup(ABSTRACT_WIND_TIERS, avg_wind)


def _city_condition(prng: Prng, conditions: Conditions) -> ConditionCategory:
    return conditions[1] if prng.chance() else conditions[0]


def _line(role: str, x: float, y: float, length: float, angle: float, opacity: float,
          stroke_width: float, color: str) -> AbstractLine:
    return AbstractLine(role, x, y, x + math.cos(angle) * length, y + math.sin(angle) * length,
                        color, stroke_width, opacity)


def geometric(pair: WeatherPair, prng: Prng, width: int, height: int, conditions: Conditions) -> list[AbstractShape]:
    wind = clamp(pair.avg_wind_speed, 0.0, MAX_WIND)
    tier = wind_tier(wind)
    shapes: list[AbstractShape] = []

    for _ in range(tier.base_elements):
        x = prng.next(0, width)
        y = prng.next(0, height)
        kind = prng.next_int(0, 2)
        use_alternate = prng.chance()
        condition = conditions[1] if use_alternate else conditions[0]
        if kind == 0:
            base_length = map_range(wind, 0, 50, 50, 300)
            length = prng.next(base_length * 0.7, base_length * 1.3)
            angle = prng.next(0, math.pi * 2)
            opacity = prng.next(0.1, 0.3)
            stroke_width = map_range(wind, 0, 50, 1, 4)
            color = condition_color(prng, condition, use_alternate)
            shapes.append(_line("base", x, y, length, angle, opacity, stroke_width, color))
        else:
            base_size = map_range(wind, 0, 50, 20, 100)
            w = prng.next(base_size * 0.8, base_size * 1.2)
            h = prng.next(base_size * 0.8, base_size * 1.2)
            rotation = prng.next(0, 360)
            opacity = prng.next(0.05, 0.15)
            color = condition_color(prng, condition, use_alternate)
            shapes.append(AbstractRect("base", x, y, w, h, rotation, color, opacity))

    if tier.rank >= STRONG.rank:
        for _ in range(math.floor(map_range(wind, 15, 50, 18, 40))):
            x = prng.next(0, width)
            y = prng.next(0, height)
            length = prng.next(100, 400)
            angle = prng.next(math.pi / 6, math.pi / 3) + (math.pi if prng.chance() else 0)
            opacity = prng.next(0.05, 0.15)
            stroke_width = prng.next(1, 2)
            condition = _city_condition(prng, conditions)
            color = condition_color(prng, condition, prng.chance())
            shapes.append(_line("streak", x, y, length, angle, opacity, stroke_width, color))

    if tier.rank >= STORM.rank:
        for _ in range(math.floor(map_range(wind, 20, 50, 15, 40))):
            x = prng.next(0, width)
            y = prng.next(0, height)
            w = prng.next(5, 25)
            h = prng.next(5, 25)
            rotation = prng.next(0, 360)
            opacity = prng.next(0.1, 0.25)
            condition = _city_condition(prng, conditions)
            color = condition_color(prng, condition, prng.chance())
            shapes.append(AbstractRect("fragment", x, y, w, h, rotation, color, opacity))

    if tier.rank >= TYPHOON.rank:
        for _ in range(prng.next_int(14, 24)):
            x = prng.next(-100, width + 100)
            y = prng.next(-100, height + 100)
            length = prng.next(300, 600)
            angle = prng.next(0, math.pi * 2)
            opacity = prng.next(0.08, 0.2)
            stroke_width = prng.next(2, 5)
            condition = _city_condition(prng, conditions)
            color = condition_color(prng, condition, prng.chance())
            shapes.append(_line("sweep", x, y, length, angle, opacity, stroke_width, color))

        for _ in range(prng.next_int(10, 20)):
            x = prng.next(0, width)
            y = prng.next(0, height)
            w = prng.next(30, 120)
            h = prng.next(30, 120)
            rotation = prng.next(0, 360)
            opacity = prng.next(0.03, 0.1)
            condition = _city_condition(prng, conditions)
            color = condition_color(prng, condition, prng.chance())
            shapes.append(AbstractRect("layer", x, y, w, h, rotation, color, opacity))

    logger.debug("Geometric overlay: tier %s, %d shapes", tier.name, len(shapes))
    return shapes


def gradient_mesh(prng: Prng, width: int, height: int, conditions: Conditions) -> list[AbstractShape]:
    blobs: list[AbstractShape] = []
    for i in range(prng.next_int(3, 6)):
        x = prng.next(-100, width)
        y = prng.next(-100, height)
        w = prng.next(200, 400)
        h = prng.next(200, 400)
        condition = _city_condition(prng, conditions)
        inner = condition_color(prng, condition, False)
        outer = condition_color(prng, condition, True)
        opacity = prng.next(0.05, 0.15)
        blobs.append(GradientBlob("blob", f"mesh-gradient-{i}", x, y, w, h, inner, outer, opacity))
    return blobs


def dot_pattern(pair: WeatherPair, prng: Prng, width: int, height: int, conditions: Conditions) -> list[AbstractShape]:
    dots: list[AbstractShape] = []
    for _ in range(math.floor(map_range(pair.avg_humidity, 0, 100, 30, 100))):
        x = prng.next(0, width)
        y = prng.next(0, height)
        r = prng.next(2, 8)
        opacity = prng.next(0.1, 0.3)
        use_alternate = prng.chance()
        condition = conditions[1] if use_alternate else conditions[0]
        color = condition_color(prng, condition, use_alternate)
        dots.append(AbstractDot("dot", x, y, r, color, opacity))
    return dots


def turbulence(pair: WeatherPair, prng: Prng, width: int, height: int, conditions: Conditions) -> list[AbstractShape]:
    wind = clamp(pair.avg_wind_speed, 0.0, MAX_WIND)
    base_frequency = 0.02 + (wind / 100) * 0.03
    octaves = max(1, math.floor(map_range(pair.avg_humidity, 0, 100, 1, 3)))
    seed = prng.next_int(0, 1000)
    color = condition_color(prng, conditions[0])
    return [
        TurbulenceField("turbulence", TURBULENCE_FILTER_ID, width, height, base_frequency, octaves, seed, wind * 2, color)
    ]


def texture(
    pair: WeatherPair,
    prng: Prng,
    width: int,
    height: int,
    swatch: PaletteSwatch,
    noise: NoiseField,
) -> list[AbstractShape]:
    """Noise-sampled palette cells on a coarse grid; humid skies only."""
    humidity = pair.avg_humidity
    if humidity < TEXTURE_MIN_HUMIDITY or not len(swatch):
        return []
    samples = math.floor(map_range(humidity, TEXTURE_MIN_HUMIDITY, 100, 200, 800))
    last = len(swatch) - 1
    cells: list[AbstractShape] = []
    for _ in range(samples):
        if len(cells) >= TEXTURE_MAX_CELLS:
            break
        x = prng.next_int(0, width / TEXTURE_GRID) * TEXTURE_GRID
        y = prng.next_int(0, height / TEXTURE_GRID) * TEXTURE_GRID
        value = noise.octave_noise(x, y, octaves=1, scale=TEXTURE_NOISE_SCALE)
        if value <= TEXTURE_THRESHOLD:
            continue
        index = math.floor(map_range(value, TEXTURE_THRESHOLD, 1, 0, last))
        base = swatch[min(index, last)]
        color = Rgb(round_half_up(base.r * value), round_half_up(base.g * value), round_half_up(base.b * value))
        opacity = map_range(value, TEXTURE_THRESHOLD, 1, 0.05, 0.15) * TEXTURE_INTENSITY
        cells.append(TextureCell("texture", x, y, TEXTURE_GRID, color, opacity))
    logger.debug("Texture: %d cells from %d samples", len(cells), samples)
    return cells


def generate(
    pair: WeatherPair,
    prng: Prng,
    width: int,
    height: int,
    conditions: Conditions,
    style: AbstractStyle,
    swatch: PaletteSwatch,
    noise: NoiseField,
) -> tuple[AbstractShape, ...]:
    if style is AbstractStyle.GRADIENT_MESH:
        shapes = gradient_mesh(prng, width, height, conditions)
    elif style is AbstractStyle.DOT_PATTERN:
        shapes = dot_pattern(pair, prng, width, height, conditions)
    elif style is AbstractStyle.TURBULENCE:
        shapes = turbulence(pair, prng, width, height, conditions)
    elif style is AbstractStyle.TEXTURE:
        shapes = texture(pair, prng, width, height, swatch, noise)
    else:
        shapes = geometric(pair, prng, width, height, conditions)
    return tuple(shapes)
