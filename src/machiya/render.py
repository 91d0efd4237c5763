"""CLI entry point for artwork generation.

Set OPENWEATHER_API_KEY in .env, then run:
    uv run python -m machiya.render
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

from machiya import config  # noqa: E402
from machiya.models import SceneOptions  # noqa: E402
from machiya.renderers.static import save_scene_svg  # noqa: E402
from machiya.scene import run  # noqa: E402
from machiya.weather import fetch_weather_pair  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

pair = fetch_weather_pair(os.environ[config.OPENWEATHER_API_KEY_ENV], config.CITY_A_QUERY, config.CITY_B_QUERY)
options = SceneOptions(
    width=config.CANVAS_WIDTH,
    height=config.CANVAS_HEIGHT,
    abstract_style=config.ABSTRACT_STYLE,
    disc_style=config.DISC_STYLE,
)
svg = run(pair, options=options)
path = save_scene_svg(svg)
print(f"Saved: {path}")
