"""Scene orchestration — one seed, one PRNG stream, every layer in a fixed order."""

import logging
import math
from collections.abc import Callable
from typing import TypeVar

from machiya.assets import load_asset_store
from machiya.classify import classify_observation
from machiya.clock import RenderClock, render_mode
from machiya.layers import abstract, branches, clouds, disc, rain, sky, slats, snow, stars, wash
from machiya.models import AssetStore, Scene, SceneOptions, WeatherPair
from machiya.noise import NoiseField
from machiya.palette import pick_swatch, resolve_palette
from machiya.prng import Prng, coerce_seed
from machiya.renderers.svg_document import compose

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _guarded(name: str, build: Callable[[], tuple[T, ...]]) -> tuple[T, ...]:
    """Run one generator; a failure leaves its layer empty instead of aborting the scene."""
    try:
        return build()
    except Exception:
        logger.exception("Layer %r failed, rendering without it", name)
        return ()


def _js_number(value: float) -> str:
    # Integral floats print without a fractional part ("12", not "12.0")
    number = float(value)
    if math.isfinite(number) and number == int(number):
        return str(int(number))
    return repr(number) if math.isfinite(number) else "NaN"


def create_seed(pair: WeatherPair, now_ms: int) -> int:
    """Derive a seed from both cities' readings plus a millisecond timestamp.

    Args:
        pair: Current observations.
        now_ms: Wall-clock milliseconds since the epoch, the entropy source.

    Returns:
        Non-negative 31-bit seed.
    """
    parts = []
    for obs in pair.cities:
        parts.extend(_js_number(v) for v in (obs.temperature, obs.humidity, obs.pressure))
    text = "".join(parts) + str(int(now_ms))
    h = 0
    for ch in text:
        h = (((h << 5) - h) + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h) & 0x7FFFFFFF


def generate_scene(
    pair: WeatherPair,
    seed: int,
    clock: RenderClock,
    assets: AssetStore,
    options: SceneOptions | None = None,
) -> Scene:
    """Build every layer of one artwork.

    Generators run in a fixed order because they share one PRNG stream;
    reordering them changes every downstream draw.

    Args:
        pair: Both cities' observations.
        seed: Integer seed; malformed values coerce to 1.
        clock: The single instant this scene is rendered for.
        assets: Cloud, snowflake and branch shapes.
        options: Canvas size and static style choices.

    Returns:
        Scene holding every placed element.
    """
    options = options or SceneOptions()
    width, height = options.width, options.height
    seed = coerce_seed(seed)

    prng = Prng(seed)
    noise = NoiseField(prng)
    snapshot = prng.state
    noise.seed(seed)
    prng.restore(snapshot)

    conditions = (classify_observation(pair.city_a), classify_observation(pair.city_b))
    hours = clock.pair_hours(pair)
    mode = render_mode(prng, hours[0], pair.avg_temperature)

    resolved = resolve_palette(pair, options.palette_element)
    swatch = pick_swatch(prng, resolved)
    logger.info(
        "Scene seed=%d mode=%s palette=%s conditions=%s/%s",
        seed,
        mode.value,
        "+".join(e.value for e in resolved.elements),
        conditions[0].value,
        conditions[1].value,
    )

    star_layer = _guarded("stars", lambda: stars.generate(pair, prng, width, height))
    disc_layer = _guarded("disc", lambda: disc.generate(prng, width, height, hours[0], options.disc_style))
    cloud_layer = _guarded(
        "clouds", lambda: clouds.generate(pair, prng, width, height, conditions, assets.clouds)
    )
    slat_layer = _guarded("slats", lambda: slats.generate(pair, prng, width, height, swatch))
    sky_layer = _guarded("sky", lambda: sky.generate(pair, prng, width, height, swatch, hours, mode))
    darkness_layer = _guarded("darkness", lambda: sky.generate_darkness(width, height, hours[0], mode))
    wash_layer = _guarded("wash", lambda: wash.generate(prng, width, height, conditions))
    snow_layer = _guarded(
        "snow", lambda: snow.generate(pair, prng, width, height, conditions, assets.snowflakes)
    )
    rain_layer = _guarded("rain", lambda: rain.generate(pair, prng, width, height, conditions))
    abstract_layer = _guarded(
        "abstract",
        lambda: abstract.generate(pair, prng, width, height, conditions, options.abstract_style, swatch, noise),
    )
    branch_layer = _guarded("branches", lambda: branches.generate(prng, width, height, assets.branches))

    return Scene(
        width=width,
        height=height,
        seed=seed,
        render_mode=mode,
        palette_elements=resolved.elements,
        conditions=conditions,
        local_hours=hours,
        sky=sky_layer,
        darkness=darkness_layer,
        stars=star_layer,
        disc=disc_layer,
        wash=wash_layer,
        clouds=cloud_layer,
        slats=slat_layer,
        snowflakes=snow_layer,
        rain=rain_layer,
        abstract=abstract_layer,
        branches=branch_layer,
    )


def render_scene(
    pair: WeatherPair,
    seed: int,
    clock: RenderClock,
    assets: AssetStore,
    options: SceneOptions | None = None,
) -> str:
    return compose(generate_scene(pair, seed, clock, assets, options)).to_svg()


def run(
    pair: WeatherPair,
    seed: int | None = None,
    clock: RenderClock | None = None,
    assets: AssetStore | None = None,
    options: SceneOptions | None = None,
) -> str:
    """Top-level entry point: takes a WeatherPair and returns the SVG text.

    Args:
        pair: Both cities' observations.
        seed: Fixed seed. Derived from the weather and clock when None.
        clock: Render instant. Captured now when None.
        assets: Asset store. Loaded from the default directory when None.
        options: Canvas and style choices.

    Returns:
        Serialised SVG document.
    """
    clock = clock or RenderClock.now()
    if seed is None:
        seed = create_seed(pair, int(clock.utc.timestamp() * 1000))
    if assets is None:
        assets = load_asset_store()
    return render_scene(pair, seed, clock, assets, options)
