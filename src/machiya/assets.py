"""SVG asset store loaded from a resources directory."""

import logging
import re
from pathlib import Path

from machiya import config
from machiya.models import AssetPath, AssetStore, VectorAsset

logger = logging.getLogger(__name__)

_PATH_RE = re.compile(r'<path[^>]*\bd="([^"]+)"[^>]*>')
_FILL_RE = re.compile(r'\bfill="([^"]+)"')
_VIEWBOX_RE = re.compile(r'viewBox="([^"]+)"')

# family prefix -> (default fill, fallback viewBox)
FAMILIES: dict[str, tuple[str, tuple[float, float, float, float]]] = {
    "cloud": ("#e0d47f", (0.0, 0.0, 647.0, 167.6)),
    "snowflake": ("#FFFFFF", (0.0, 0.0, 19.44, 22.069)),
    "sakurabranch": ("#000000", (0.0, 0.0, 100.0, 100.0)),
}


def parse_view_box(text: str, fallback: tuple[float, float, float, float]) -> tuple[float, float, float, float]:
    match = _VIEWBOX_RE.search(text)
    if not match:
        return fallback
    try:
        values = tuple(float(v) for v in match.group(1).replace(",", " ").split())
    except ValueError:
        return fallback
    if len(values) != 4 or values[2] <= 0 or values[3] <= 0:
        return fallback
    return values  # type: ignore[return-value]


def parse_asset(name: str, text: str, family: str) -> VectorAsset:
    """Extract path data, fills and viewBox from one SVG file's text."""
    default_fill, fallback_box = FAMILIES[family]
    paths = []
    for match in _PATH_RE.finditer(text):
        fill = _FILL_RE.search(match.group(0))
        paths.append(AssetPath(match.group(1), fill.group(1) if fill else default_fill))
    return VectorAsset(name, tuple(paths), parse_view_box(text, fallback_box))


def _load_family(directory: Path, family: str) -> tuple[VectorAsset, ...]:
    assets = []
    for path in sorted(directory.glob(f"{family}_*.svg")):
        try:
            text = path.read_text(encoding="utf-8")
        except OSError:
            logger.warning("Cannot read asset %s", path)
            continue
        asset = parse_asset(path.stem, text, family)
        if not asset.paths:
            logger.warning("Asset %s has no paths, skipped", path.name)
            continue
        assets.append(asset)
    return tuple(assets)


def load_asset_store(directory: Path | None = None) -> AssetStore:
    """Load cloud, snowflake and branch shapes.

    Args:
        directory: Folder holding `cloud_*.svg`, `snowflake_*.svg` and
            `sakurabranch_*.svg`. Defaults to resources/svg-assets.

    Returns:
        AssetStore; empty when the directory is missing.
    """
    directory = Path(directory) if directory is not None else config.ASSET_DIR
    if not directory.is_dir():
        logger.warning("Asset directory %s not found, rendering without assets", directory)
        return AssetStore()
    store = AssetStore(
        clouds=_load_family(directory, "cloud"),
        snowflakes=_load_family(directory, "snowflake"),
        branches=_load_family(directory, "sakurabranch"),
    )
    logger.debug(
        "Assets: %d clouds, %d snowflakes, %d branches",
        len(store.clouds),
        len(store.snowflakes),
        len(store.branches),
    )
    return store
