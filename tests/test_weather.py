import httpx
import pytest

from machiya import weather
from machiya.models import ConditionCategory
from machiya.classify import classify_observation
from machiya.weather import WeatherFetchError, fetch_weather_pair, parse_observation

TOKYO_PAYLOAD = {
    "coord": {"lon": 139.6917, "lat": 35.6895},
    "weather": [{"id": 500, "main": "Rain", "description": "light rain"}],
    "main": {"temp": 18.4, "humidity": 82, "pressure": 1009},
    "wind": {"speed": 4.1},
    "name": "Tokyo",
}


def _response(status: int, payload: dict | None = None) -> httpx.Response:
    request = httpx.Request("GET", "https://api.openweathermap.org/data/2.5/weather")
    return httpx.Response(status, json=payload if payload is not None else {}, request=request)


class TestParseObservation:
    def test_fields(self):
        obs = parse_observation(TOKYO_PAYLOAD)
        assert obs.city == "Tokyo"
        assert obs.temperature == 18.4
        assert obs.humidity == 82
        assert obs.pressure == 1009
        assert obs.wind_speed == 4.1
        assert obs.condition_code == 500
        assert obs.category == "Rain"
        assert obs.timezone == "Asia/Tokyo"
        assert classify_observation(obs) is ConditionCategory.RAIN

    def test_missing_wind_defaults_to_calm(self):
        payload = {k: v for k, v in TOKYO_PAYLOAD.items() if k != "wind"}
        assert parse_observation(payload).wind_speed == 0.0

    def test_missing_main_raises(self):
        payload = {k: v for k, v in TOKYO_PAYLOAD.items() if k != "main"}
        with pytest.raises(WeatherFetchError):
            parse_observation(payload)

    def test_empty_weather_list_raises(self):
        with pytest.raises(WeatherFetchError):
            parse_observation({**TOKYO_PAYLOAD, "weather": []})


class TestFetchWeatherPair:
    def test_requests_metric_units(self, monkeypatch):
        calls = []

        def fake_get(url, params=None, timeout=None):
            calls.append(params)
            return _response(200, TOKYO_PAYLOAD)

        monkeypatch.setattr(weather.httpx, "get", fake_get)
        pair = fetch_weather_pair("secret", "Ottawa,CA", "Tokyo,JP")
        assert [c["q"] for c in calls] == ["Ottawa,CA", "Tokyo,JP"]
        assert all(c["units"] == "metric" and c["appid"] == "secret" for c in calls)
        assert pair.city_a.city == "Ottawa"
        assert pair.city_b.city == "Tokyo"

    def test_http_error_mapped(self, monkeypatch):
        monkeypatch.setattr(weather.httpx, "get", lambda *args, **kwargs: _response(401))
        with pytest.raises(WeatherFetchError):
            fetch_weather_pair("bad-key")

    def test_transport_error_mapped(self, monkeypatch):
        def fake_get(*args, **kwargs):
            raise httpx.ConnectError("connection refused")

        monkeypatch.setattr(weather.httpx, "get", fake_get)
        with pytest.raises(WeatherFetchError):
            fetch_weather_pair("secret")
