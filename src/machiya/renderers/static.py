"""SVG file output."""

from datetime import datetime
from pathlib import Path

import pytz

from machiya import config


def save_scene_svg(svg: str, output_path: Path | None = None) -> Path:
    """Save a rendered scene as an SVG file.

    Args:
        svg: Serialised SVG document.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        when_str = datetime.now(pytz.utc).strftime("%Y_%m_%d_%H_%M_%S")
        output_path = config.RESULTS_DIR / f"machiya__{when_str}.svg"

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(svg, encoding="utf-8")
    return output_path
