"""OpenWeather current-conditions client."""

import logging

import httpx
from timezonefinder import TimezoneFinder

from machiya import config
from machiya.models import WeatherObservation, WeatherPair

logger = logging.getLogger(__name__)

_tf = TimezoneFinder()


class WeatherFetchError(Exception):
    """Weather API call or payload failure."""


def parse_observation(payload: dict, city: str | None = None) -> WeatherObservation:
    """Convert one OpenWeather current-weather payload into a WeatherObservation.

    Args:
        payload: Decoded JSON body of `/data/2.5/weather` with `units=metric`.
        city: Display name. Falls back to the payload's `name`.

    Returns:
        WeatherObservation with the city's IANA timezone when coordinates are present.

    Raises:
        WeatherFetchError: When a required field is missing or malformed.
    """
    try:
        main = payload["main"]
        weather = payload["weather"][0]
        wind = payload.get("wind") or {}
        coord = payload.get("coord")
        tz_name = None
        if coord:
            tz_name = _tf.timezone_at(lat=float(coord["lat"]), lng=float(coord["lon"]))
        code = weather.get("id")
        return WeatherObservation(
            city=city or payload.get("name", ""),
            temperature=float(main["temp"]),
            humidity=float(main["humidity"]),
            pressure=float(main["pressure"]),
            wind_speed=float(wind.get("speed", 0.0)),
            description=weather.get("description", ""),
            condition_code=int(code) if code is not None else None,
            category=weather.get("main"),
            timezone=tz_name,
        )
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise WeatherFetchError(f"Malformed weather payload: {e!r}") from e


def fetch_observation(api_key: str, query: str) -> WeatherObservation:
    params = {"q": query, "appid": api_key, "units": "metric"}
    try:
        resp = httpx.get(config.OPENWEATHER_URL, params=params, timeout=config.HTTP_TIMEOUT)
        resp.raise_for_status()
        payload = resp.json()
    except httpx.HTTPError as e:
        raise WeatherFetchError(f"Weather request failed for {query}: {e}") from e
    except ValueError as e:
        raise WeatherFetchError(f"Weather response for {query} is not JSON") from e
    obs = parse_observation(payload, city=query.split(",")[0])
    logger.info("%s: %.1f°C, %s (%s)", obs.city, obs.temperature, obs.description, obs.timezone)
    return obs


def fetch_weather_pair(
    api_key: str,
    query_a: str = config.CITY_A_QUERY,
    query_b: str = config.CITY_B_QUERY,
) -> WeatherPair:
    """Fetch current conditions for both cities.

    Raises:
        WeatherFetchError: On HTTP failure or an unexpected payload shape.
    """
    return WeatherPair(fetch_observation(api_key, query_a), fetch_observation(api_key, query_b))
