"""Wind-driven slat / shoji grids."""

import logging

from machiya.bands import SHOJI_OPACITY, SLAT_GROUP_COUNTS, SLAT_ROTATION, Span, lookup
from machiya.models import Shoji, SlatGroup, SlatPanel, WeatherPair
from machiya.palette import PaletteSwatch
from machiya.prng import Prng

logger = logging.getLogger(__name__)


def group_count_span(avg_wind: float) -> Span:
    return lookup(SLAT_GROUP_COUNTS, avg_wind, inclusive=False)


def build_group(index: int, prng: Prng, width: int, height: int, swatch: PaletteSwatch) -> SlatGroup:
    """One grid: a row of vertical bars, horizontal bars spanning it, and a backing panel."""
    x = prng.next_int(0, width / 2)
    y = prng.next_int(height / 6, height / 2)
    color = swatch[prng.next_int(0, len(swatch))]
    slat_width = prng.next_int(1, 3)
    slat_height = prng.next_int(height / 4, min(height * 0.75, height * 2))
    gridspace = prng.next_int(2, 10)
    column_count = prng.next_int(5, 60)
    row_count = prng.next_int(5, 15)

    columns = []
    current_x = x
    for _ in range(column_count):
        columns.append(SlatPanel(current_x, y, slat_width, slat_height))
        current_x += gridspace + slat_width
    w = current_x - gridspace - x

    rows = []
    step = slat_height / row_count
    current_y = float(y)
    for _ in range(row_count + 1):
        rows.append(SlatPanel(x, current_y, w, slat_width))
        current_y += step
    h = rows[-1].y - rows[0].y + slat_width

    shoji_color = swatch[prng.next_int(0, len(swatch))]
    shoji = Shoji(x, y, w, h, shoji_color, SHOJI_OPACITY)
    return SlatGroup(index, x, y, w, h, color, tuple(columns), tuple(rows), shoji, SLAT_ROTATION)


def generate(pair: WeatherPair, prng: Prng, width: int, height: int, swatch: PaletteSwatch) -> tuple[SlatGroup, ...]:
    count = group_count_span(pair.avg_wind_speed).draw_int(prng)
    groups = tuple(build_group(i, prng, width, height, swatch) for i in range(count))
    logger.debug("Slat groups: %d (wind %.1f m/s)", count, pair.avg_wind_speed)
    return groups
