"""Runtime constants. Secrets come from the environment (see .env)."""

from pathlib import Path

from machiya.models import AbstractStyle, DiscStyle

_ROOT = Path(__file__).parent.parent.parent

CANVAS_WIDTH = 1080
CANVAS_HEIGHT = 1350

CITY_A_QUERY = "Ottawa,CA"
CITY_B_QUERY = "Tokyo,JP"

OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"
OPENWEATHER_API_KEY_ENV = "OPENWEATHER_API_KEY"
HTTP_TIMEOUT = 10

ASSET_DIR = _ROOT / "resources" / "svg-assets"
RESULTS_DIR = _ROOT / "results"

ABSTRACT_STYLE = AbstractStyle.GEOMETRIC
DISC_STYLE = DiscStyle.GLOW
