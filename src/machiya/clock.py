"""Render clock — one captured UTC instant, viewed from each city's timezone."""

import logging
from dataclasses import dataclass
from datetime import datetime

import pytz

from machiya.bands import RENDER_MODE_HOURS, lookup
from machiya.models import RenderMode, WeatherObservation, WeatherPair
from machiya.prng import Prng

logger = logging.getLogger(__name__)

GOLDEN_HOUR_ABOVE = 25.0  # °C average
GOLDEN_HOUR_CHANCE = 0.98
BLUE_HOUR_BELOW = -10.0
BLUE_HOUR_CHANCE = 0.95


@dataclass(frozen=True)
class RenderClock:
    """The instant a scene is rendered for. Naive datetimes are taken as UTC."""

    utc: datetime

    @classmethod
    def now(cls) -> "RenderClock":
        return cls(datetime.now(pytz.utc))

    def local_hour(self, tz_name: str | None) -> float:
        """Decimal local hour (18.5 == 18:30) in the named IANA zone; UTC when unknown."""
        instant = self.utc if self.utc.tzinfo else pytz.utc.localize(self.utc)
        try:
            tz = pytz.timezone(tz_name) if tz_name else pytz.utc
        except pytz.UnknownTimeZoneError:
            logger.warning("Unknown timezone %r, using UTC", tz_name)
            tz = pytz.utc
        local = instant.astimezone(tz)
        return local.hour + local.minute / 60

    def city_hour(self, obs: WeatherObservation) -> float:
        return self.local_hour(obs.timezone)

    def pair_hours(self, pair: WeatherPair) -> tuple[float, float]:
        return (self.city_hour(pair.city_a), self.city_hour(pair.city_b))


def hour_mode(hour: float) -> RenderMode:
    return lookup(RENDER_MODE_HOURS, hour)


def render_mode(prng: Prng, hour: float, avg_temperature: float) -> RenderMode:
    """Time-of-day mode, occasionally replaced by a golden or blue hour.

    The PRNG is only drawn from when the temperature gate is open, so mild
    weather leaves the stream untouched.
    """
    if avg_temperature > GOLDEN_HOUR_ABOVE and prng.next() > GOLDEN_HOUR_CHANCE:
        return RenderMode.GOLDEN_HOUR
    if avg_temperature < BLUE_HOUR_BELOW and prng.next() > BLUE_HOUR_CHANCE:
        return RenderMode.BLUE_HOUR
    return hour_mode(hour)


def darkness(hour: float) -> float:
    """Opacity of the black night overlay: 0.0 at midday, 1.0 in deep night."""
    hour = hour % 24
    if hour >= 22 or hour < 4:
        return 1.0
    if hour >= 20:
        return 0.75 + ((hour - 20) / 2) * 0.25
    if hour < 5:
        return 1.0 - (hour - 4) * 0.25
    if hour < 7:
        return 0.75 * (1 - (hour - 5) / 2)
    if hour < 17:
        return 0.0
    return 0.75 * ((hour - 17) / 3)
