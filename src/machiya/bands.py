"""Weather-to-parameter lookup tables.

Every threshold decision a generator makes is expressed as an ordered table
here, so the numbers can be read and tested without the drawing code.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from machiya.models import ConditionCategory, Intensity, RenderMode, ThermalElement
from machiya.prng import Prng

T = TypeVar("T")


@dataclass(frozen=True)
class Span:
    """Half-open range [lo, hi) drawn from the PRNG."""

    lo: float
    hi: float

    def draw(self, prng: Prng) -> float:
        return prng.next(self.lo, self.hi)

    def draw_int(self, prng: Prng) -> int:
        return prng.next_int(self.lo, self.hi)


@dataclass(frozen=True)
class Band(Generic[T]):
    threshold: float
    record: T


def lookup(bands: Sequence[Band[T]], value: float, *, inclusive: bool = True) -> T:
    """Return the record of the first band the value clears.

    ``bands`` is sorted by descending threshold and its last entry acts as the
    floor. ``inclusive`` selects ``>=`` versus ``>`` comparison.
    """
    for band in bands:
        if value >= band.threshold if inclusive else value > band.threshold:
            return band.record
    return bands[-1].record


def map_range(value: float, start1: float, stop1: float, start2: float, stop2: float) -> float:
    if stop1 == start1:
        return start2
    return start2 + (stop2 - start2) * ((value - start1) / (stop1 - start1))


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


# --- Palette ---

TEMPERATURE_ELEMENTS: tuple[Band[ThermalElement], ...] = (
    Band(35, ThermalElement.FIRE),
    Band(25, ThermalElement.HOT),
    Band(15, ThermalElement.WARM),
    Band(10, ThermalElement.COOL),
    Band(0, ThermalElement.COLD),
    Band(-10, ThermalElement.FREEZING),
    Band(-15, ThermalElement.FROSTBITE),
    Band(-25, ThermalElement.SUPERFROSTBITE),
    Band(-35, ThermalElement.EXTREMEFREEZE),
    Band(-math.inf, ThermalElement.ABSOLUTEFREEZE),
)


# --- Clock ---

RENDER_MODE_HOURS: tuple[Band[RenderMode], ...] = (
    Band(19, RenderMode.EVENING),
    Band(17, RenderMode.TWILIGHT),
    Band(7, RenderMode.DAY),
    Band(5, RenderMode.DAWN),
    Band(-math.inf, RenderMode.EVENING),
)

# Fraction of the 256-colour swatch each time-of-day bucket draws from
SKY_HOUR_RANGES: tuple[Band[Span], ...] = (
    Band(22, Span(0.00, 0.20)),  # night
    Band(20, Span(0.10, 0.30)),  # evening
    Band(19, Span(0.20, 0.40)),  # dusk
    Band(17, Span(0.35, 0.60)),  # twilight
    Band(7, Span(0.55, 1.00)),  # day
    Band(5, Span(0.20, 0.45)),  # dawn
    Band(-math.inf, Span(0.00, 0.20)),  # night
)

SKY_MODE_RANGES: dict[RenderMode, Span] = {
    RenderMode.GOLDEN_HOUR: Span(0.70, 1.00),
    RenderMode.BLUE_HOUR: Span(0.00, 0.25),
}

SKY_TEMPERATURE_SHIFT = 0.15  # Max fraction a hot or cold day moves the range


# --- Stars ---

@dataclass(frozen=True)
class StarBands:
    cold_clear: Span = Span(700, 2500)
    humid: Span = Span(0, 100)
    baseline: Span = Span(100, 1000)
    cold_below: float = 5.0
    clear_humidity_below: float = 50.0
    humid_above: float = 70.0


STARS = StarBands()


# --- Disc ---

DISC_SIZE = Span(250, 500)
DISC_MARGIN = 50
DISC_GLOW_RINGS = 15
DISC_GLOW_OPACITY = 25 / 255
DISC_DAY_HOURS = (7, 19)


# --- Clouds ---

CLOUD_COUNTS: tuple[tuple[frozenset[ConditionCategory], Span], ...] = (
    (frozenset({ConditionCategory.CLOUDY, ConditionCategory.RAIN, ConditionCategory.STORM}), Span(8, 15)),
    (frozenset({ConditionCategory.PARTLY_CLOUDY}), Span(4, 8)),
)
CLOUD_HUMID_ABOVE = 60.0
CLOUD_HUMID_COUNT = Span(3, 7)
CLOUD_CLEAR_COUNT = Span(0, 3)

CLOUD_OPACITY: tuple[tuple[ConditionCategory, Span], ...] = (
    (ConditionCategory.FOG, Span(0.3, 0.5)),
    (ConditionCategory.STORM, Span(0.6, 0.9)),
    (ConditionCategory.CLOUDY, Span(0.5, 0.8)),
    (ConditionCategory.RAIN, Span(0.4, 0.7)),
)
CLOUD_DEFAULT_OPACITY = Span(0.3, 0.6)

CLOUD_COLOR_PREFERENCE: tuple[ConditionCategory, ...] = (
    ConditionCategory.CLEAR,
    ConditionCategory.RAIN,
    ConditionCategory.PARTLY_CLOUDY,
)


# --- Overcast wash ---

WASH_OPACITY: tuple[tuple[ConditionCategory, Span], ...] = (
    (ConditionCategory.STORM, Span(0.20, 0.35)),
    (ConditionCategory.FOG, Span(0.25, 0.40)),
    (ConditionCategory.CLOUDY, Span(0.10, 0.20)),
)


# --- Rain and snow ---

@dataclass(frozen=True)
class RainBand:
    count: Span
    thickness: Span
    length: Span


RAIN_BANDS: dict[Intensity, RainBand] = {
    Intensity.HEAVY: RainBand(Span(300, 500), Span(1.5, 3.5), Span(30, 50)),
    Intensity.MODERATE: RainBand(Span(150, 300), Span(1.0, 2.5), Span(20, 40)),
    Intensity.LIGHT: RainBand(Span(50, 150), Span(0.5, 1.5), Span(10, 25)),
}
RAIN_TILT_DEGREES = 2.0


@dataclass(frozen=True)
class SnowBand:
    count: Span
    scale: Span
    opacity: Span


SNOW_BANDS: dict[Intensity, SnowBand] = {
    Intensity.HEAVY: SnowBand(Span(150, 300), Span(0.5, 2.0), Span(0.7, 1.0)),
    Intensity.MODERATE: SnowBand(Span(80, 150), Span(0.3, 1.5), Span(0.6, 0.9)),
    Intensity.LIGHT: SnowBand(Span(40, 80), Span(0.2, 1.0), Span(0.5, 0.8)),
}


# --- Slat / shoji grids ---

MAX_SLAT_GROUPS = 50

# Average wind (m/s), compared with ">": calm → typhoon
SLAT_GROUP_COUNTS: tuple[Band[Span], ...] = (
    Band(30, Span(40, MAX_SLAT_GROUPS)),  # typhoon
    Band(15, Span(30, MAX_SLAT_GROUPS)),  # storm
    Band(10, Span(25, MAX_SLAT_GROUPS)),  # strong
    Band(5, Span(20, 40)),  # moderate
    Band(2, Span(10, 30)),  # light
    Band(-math.inf, Span(5, 15)),  # calm
)
SLAT_ROTATION = 30.0
SHOJI_OPACITY = 0.3


# --- Abstract overlay ---

@dataclass(frozen=True)
class WindTier:
    name: str
    rank: int
    base_elements: int


CALM = WindTier("CALM", 0, 30)
LIGHT = WindTier("LIGHT", 1, 40)
MODERATE = WindTier("MODERATE", 2, 56)
STRONG = WindTier("STRONG", 3, 70)
STORM = WindTier("STORM", 4, 90)
TYPHOON = WindTier("TYPHOON", 5, 120)

ABSTRACT_WIND_TIERS: tuple[Band[WindTier], ...] = (
    Band(30, TYPHOON),
    Band(20, STORM),
    Band(15, STRONG),
    Band(10, MODERATE),
    Band(5, LIGHT),
    Band(-math.inf, CALM),
)


# --- Branches ---

BRANCH_COUNT = Span(1, 4)
BRANCH_EDGE_OFFSET = 50
BRANCH_Y_MARGIN = 50
BRANCH_SCALE = Span(0.1, 0.2)
BRANCH_ROTATION = Span(-15, 15)
