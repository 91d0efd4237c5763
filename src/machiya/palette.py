"""Colour palette resolution.

Two families of colour live here:

* condition colours, small per-category hex lists drawn by clouds, the
  overcast wash and the abstract overlay;
* thermal-element palettes, four rows of eight seed colours per element,
  expanded to 256-entry swatches and cross-interpolated when the two cities
  fall in different temperature bands.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass

from machiya.bands import TEMPERATURE_ELEMENTS, lookup
from machiya.models import ConditionCategory, Rgb, ThermalElement, WeatherPair, finite_or
from machiya.prng import Prng

logger = logging.getLogger(__name__)

SWATCH_SIZE = 256
_FALLBACK_GREY = Rgb(128, 128, 128)

# (primary, secondary) per condition; picks are uniform over five entries
CONDITION_COLORS: dict[ConditionCategory, tuple[tuple[str, ...], tuple[str, ...]]] = {
    ConditionCategory.CLEAR: (
        ("#FFD700", "#FFE135", "#ADFF2F", "#9ACD32", "#7CFC00"),
        ("#FFA500", "#FF8C00", "#32CD32", "#00FF00", "#90EE90"),
    ),
    ConditionCategory.CLOUDY: (
        ("#B0C4DE", "#87CEEB", "#D3D3D3", "#C0C0C0", "#A9A9A9"),
        ("#E0E6FA", "#DDA0DD", "#F0F8FF", "#E6E6FA", "#DCDCDC"),
    ),
    ConditionCategory.RAIN: (
        ("#4682B4", "#5F9EA0", "#20B2AA", "#00CED1", "#48D1CC"),
        ("#1E90FF", "#00BFFF", "#87CEEB", "#B0E0E6", "#ADD8E6"),
    ),
    ConditionCategory.SNOW: (
        ("#E6E6FA", "#F0F8FF", "#F8F8FF", "#FFFFFF", "#E0E0E0"),
        ("#B0C4DE", "#C0C0C0", "#D3D3D3", "#DCDCDC", "#E6E6FA"),
    ),
    ConditionCategory.FOG: (
        ("#C0C0C0", "#D3D3D3", "#DCDCDC", "#E0E0E0", "#F5F5F5"),
        ("#A9A9A9", "#808080", "#778899", "#708090", "#B0C4DE"),
    ),
    ConditionCategory.STORM: (
        ("#2F4F4F", "#36454F", "#708090", "#778899", "#191970"),
        ("#000080", "#000033", "#1C1C1C", "#2F2F2F", "#404040"),
    ),
    ConditionCategory.WINDY: (
        ("#E8E8E8", "#F0F0F0", "#F5F5F5", "#FAFAFA", "#FFFFFF"),
        ("#D3D3D3", "#DCDCDC", "#E0E0E0", "#F8F8FF", "#F0F8FF"),
    ),
    ConditionCategory.PARTLY_CLOUDY: (
        ("#87CEEB", "#B0E0E6", "#E0F6FF", "#F0F8FF", "#E6E6FA"),
        ("#4682B4", "#5F9EA0", "#ADD8E6", "#D3D3D3", "#F5F5F5"),
    ),
}

# Whites, pale blues, pale yellows for the sun/moon disc
DISC_COLORS: tuple[str, ...] = (
    "#FFFFFF",
    "#F8F8FF",
    "#F0F8FF",
    "#E0F6FF",
    "#E6E6FA",
    "#B0E0E6",
    "#FFF8DC",
    "#FFFACD",
    "#FFEFD5",
    "#FFE4B5",
)

ELEMENT_PALETTES: dict[ThermalElement, tuple[tuple[str, ...], ...]] = {
    ThermalElement.FIRE: (
        ("#FF0000", "#FF4500", "#FF6347", "#FF6B00", "#FF8C00", "#FFA500", "#FFD700", "#FFFF00"),
        ("#DC143C", "#FF1493", "#FF4500", "#FF6347", "#FF7F50", "#FF8C00", "#FFA500", "#FFB347"),
        ("#8B0000", "#A52A2A", "#B22222", "#DC143C", "#FF0000", "#FF4500", "#FF6347", "#FF7F50"),
        ("#FF4500", "#FF6347", "#FF7F50", "#FF8C00", "#FFA500", "#FFD700", "#FFFF00", "#FFE135"),
    ),
    ThermalElement.HOT: (
        ("#FF8C00", "#FFA500", "#FFB347", "#FFD700", "#FFE135", "#FFF44F", "#FFE4B5", "#FFDAB9"),
        ("#FF7F50", "#FF6347", "#FF8C00", "#FFA500", "#FFB347", "#FFD700", "#FFE135", "#FFF44F"),
        ("#FF6B35", "#F7931E", "#FFD23F", "#FF6B00", "#FF8C00", "#FFA500", "#FFB347", "#FFD700"),
        ("#FFA500", "#FFB347", "#FFD700", "#FFE135", "#FFF44F", "#FFE4B5", "#FFDAB9", "#FFEFD5"),
    ),
    ThermalElement.WARM: (
        ("#FFD700", "#FFE135", "#FFF44F", "#FFE4B5", "#FFDAB9", "#FFEFD5", "#FFF8DC", "#F5DEB3"),
        ("#FFB347", "#FFD700", "#FFE135", "#FFF44F", "#FFE4B5", "#FFDAB9", "#FFEFD5", "#FFF8DC"),
        ("#FFA500", "#FFB347", "#FFD700", "#FFE135", "#FFF44F", "#FFE4B5", "#FFDAB9", "#FFEFD5"),
        ("#FFE4B5", "#FFDAB9", "#FFEFD5", "#FFF8DC", "#F5DEB3", "#DEB887", "#D2B48C", "#BC8F8F"),
    ),
    ThermalElement.COOL: (
        ("#87CEEB", "#B0E0E6", "#ADD8E6", "#E0F6FF", "#F0F8FF", "#F5FFFA", "#E6E6FA", "#E0E0FF"),
        ("#4682B4", "#5F9EA0", "#87CEEB", "#B0E0E6", "#ADD8E6", "#E0F6FF", "#F0F8FF", "#F5FFFA"),
        ("#1E90FF", "#00BFFF", "#87CEEB", "#B0E0E6", "#ADD8E6", "#E0F6FF", "#F0F8FF", "#E6E6FA"),
        ("#B0E0E6", "#ADD8E6", "#E0F6FF", "#F0F8FF", "#F5FFFA", "#E6E6FA", "#E0E0FF", "#F8F8FF"),
    ),
    ThermalElement.COLD: (
        ("#4682B4", "#5F9EA0", "#20B2AA", "#00CED1", "#48D1CC", "#40E0D0", "#7B68EE", "#9370DB"),
        ("#1E90FF", "#00BFFF", "#87CEEB", "#4682B4", "#5F9EA0", "#20B2AA", "#00CED1", "#48D1CC"),
        ("#0000CD", "#191970", "#000080", "#4169E1", "#6495ED", "#7B68EE", "#9370DB", "#8A2BE2"),
        ("#708090", "#778899", "#B0C4DE", "#C0C0C0", "#D3D3D3", "#DCDCDC", "#E0E0E0", "#F5F5F5"),
    ),
    ThermalElement.FREEZING: (
        ("#0000CD", "#191970", "#000080", "#4169E1", "#6495ED", "#7B68EE", "#9370DB", "#8A2BE2"),
        ("#00FFFF", "#00CED1", "#48D1CC", "#40E0D0", "#00FA9A", "#00FF7F", "#3CB371", "#2E8B57"),
        ("#1E3A8A", "#1E40AF", "#2563EB", "#3B82F6", "#60A5FA", "#93C5FD", "#DBEAFE", "#EFF6FF"),
        ("#B0C4DE", "#C0C0C0", "#D3D3D3", "#DCDCDC", "#E0E0E0", "#F5F5F5", "#F8F8FF", "#FFFFFF"),
    ),
    ThermalElement.FROSTBITE: (
        ("#000080", "#191970", "#000033", "#000066", "#000099", "#0000CC", "#0000FF", "#1E3A8A"),
        ("#008B8B", "#00CED1", "#48D1CC", "#20B2AA", "#008080", "#00FFFF", "#40E0D0", "#00CED1"),
        ("#1E3A8A", "#1E40AF", "#2563EB", "#3B82F6", "#60A5FA", "#93C5FD", "#DBEAFE", "#EFF6FF"),
        ("#708090", "#778899", "#B0C4DE", "#C0C0C0", "#D3D3D3", "#DCDCDC", "#E0E0E0", "#F5F5F5"),
    ),
    ThermalElement.SUPERFROSTBITE: (
        ("#000033", "#000066", "#000099", "#0000CC", "#000080", "#191970", "#0000FF", "#1E3A8A"),
        ("#4B0082", "#6A0DAD", "#8B008B", "#9400D3", "#9932CC", "#BA55D3", "#DA70D6", "#DDA0DD"),
        ("#2F4F4F", "#36454F", "#708090", "#778899", "#B0C4DE", "#C0C0C0", "#D3D3D3", "#DCDCDC"),
        ("#1C1C1C", "#2F2F2F", "#404040", "#525252", "#696969", "#808080", "#A9A9A9", "#C0C0C0"),
    ),
    ThermalElement.EXTREMEFREEZE: (
        ("#000011", "#000022", "#000033", "#000044", "#000055", "#000066", "#000077", "#000088"),
        ("#2E0854", "#4B0082", "#6A0DAD", "#8B008B", "#9400D3", "#9932CC", "#BA55D3", "#DA70D6"),
        ("#1A1A2E", "#16213E", "#0F3460", "#533483", "#2F4F4F", "#36454F", "#708090", "#778899"),
        ("#000000", "#0A0A0A", "#141414", "#1E1E1E", "#282828", "#323232", "#3C3C3C", "#464646"),
    ),
    ThermalElement.ABSOLUTEFREEZE: (
        ("#000000", "#000011", "#000022", "#000033", "#000044", "#000055", "#000066", "#000077"),
        ("#1A0033", "#2E0854", "#4B0082", "#6A0DAD", "#8B008B", "#9400D3", "#9932CC", "#BA55D3"),
        ("#000000", "#0A0A0A", "#141414", "#1A1A2E", "#16213E", "#0F3460", "#533483", "#2F4F4F"),
        ("#000000", "#050505", "#0A0A0A", "#0F0F0F", "#141414", "#191919", "#1E1E1E", "#232323"),
    ),
    ThermalElement.WATER: (
        ("#1E90FF", "#00BFFF", "#87CEEB", "#4682B4", "#5F9EA0", "#20B2AA", "#00CED1", "#48D1CC"),
        ("#0000CD", "#191970", "#000080", "#4169E1", "#6495ED", "#7B68EE", "#9370DB", "#8A2BE2"),
        ("#00FFFF", "#00CED1", "#48D1CC", "#40E0D0", "#00FA9A", "#00FF7F", "#3CB371", "#2E8B57"),
        ("#1E3A8A", "#1E40AF", "#2563EB", "#3B82F6", "#60A5FA", "#93C5FD", "#DBEAFE", "#EFF6FF"),
    ),
    ThermalElement.EARTH: (
        ("#8B4513", "#A0522D", "#CD853F", "#D2691E", "#DEB887", "#F4A460", "#D2B48C", "#BC8F8F"),
        ("#228B22", "#32CD32", "#3CB371", "#66CDAA", "#90EE90", "#98FB98", "#ADFF2F", "#9ACD32"),
        ("#556B2F", "#6B8E23", "#808000", "#9ACD32", "#ADFF2F", "#7CFC00", "#7FFF00", "#00FF00"),
        ("#654321", "#8B4513", "#A0522D", "#CD853F", "#D2691E", "#DEB887", "#F4A460", "#D2B48C"),
    ),
    ThermalElement.WIND: (
        ("#C0C0C0", "#D3D3D3", "#DCDCDC", "#F5F5F5", "#FFFFFF", "#F8F8FF", "#F0F8FF", "#E6E6FA"),
        ("#A9A9A9", "#808080", "#696969", "#778899", "#708090", "#B0C4DE", "#D3D3D3", "#E0E0E0"),
        ("#2F4F4F", "#708090", "#778899", "#B0C4DE", "#C0C0C0", "#D3D3D3", "#DCDCDC", "#F5F5F5"),
        ("#E8E8E8", "#F0F0F0", "#F5F5F5", "#FAFAFA", "#FFFFFF", "#F8F8FF", "#F0F8FF", "#E6E6FA"),
    ),
    ThermalElement.WOOD: (
        ("#8B4513", "#A0522D", "#CD853F", "#D2691E", "#DA70D6", "#DDA0DD", "#EE82EE", "#FF69B4"),
        ("#654321", "#8B4513", "#A0522D", "#CD853F", "#D2691E", "#DEB887", "#F4A460", "#D2B48C"),
        ("#4B0082", "#8B008B", "#9400D3", "#9932CC", "#BA55D3", "#DA70D6", "#DDA0DD", "#EE82EE"),
        ("#8B4513", "#A0522D", "#CD853F", "#D2691E", "#DEB887", "#F4A460", "#D2B48C", "#BC8F8F"),
    ),
    ThermalElement.METAL: (
        ("#C0C0C0", "#A9A9A9", "#808080", "#696969", "#778899", "#708090", "#B0C4DE", "#D3D3D3"),
        ("#FFD700", "#FFA500", "#FF8C00", "#FF7F50", "#FF6347", "#FF4500", "#FF1493", "#DC143C"),
        ("#2F4F4F", "#708090", "#778899", "#B0C4DE", "#C0C0C0", "#D3D3D3", "#DCDCDC", "#F5F5F5"),
        ("#E8E8E8", "#F0F0F0", "#F5F5F5", "#FAFAFA", "#FFFFFF", "#F8F8FF", "#F0F8FF", "#E6E6FA"),
    ),
    ThermalElement.HOLOGRAM: (
        ("#FF0000", "#FF7F00", "#FFFF00", "#00FF00", "#0000FF", "#4B0082", "#9400D3", "#FF1493"),
        ("#FF69B4", "#FF1493", "#DC143C", "#FF4500", "#FF8C00", "#FFD700", "#ADFF2F", "#00FF7F"),
        ("#00FFFF", "#00CED1", "#1E90FF", "#0000FF", "#4B0082", "#9400D3", "#FF1493", "#FF69B4"),
        ("#FFD700", "#FFA500", "#FF8C00", "#FF7F50", "#FF6347", "#FF4500", "#FF1493", "#DC143C"),
    ),
}


def round_half_up(value: float) -> int:
    """Round .5 away from negative infinity, matching ``Math.round`` semantics."""
    return math.floor(value + 0.5)


def lerp_rgb(a: Rgb, b: Rgb, t: float) -> Rgb:
    return Rgb(
        round_half_up(a.r + (b.r - a.r) * t),
        round_half_up(a.g + (b.g - a.g) * t),
        round_half_up(a.b + (b.b - a.b) * t),
    )


@dataclass(frozen=True)
class PaletteSwatch:
    """Fixed-length colour gradient. Out-of-range reads return mid grey."""

    colors: tuple[Rgb, ...]

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, index: int) -> Rgb:
        if 0 <= index < len(self.colors):
            return self.colors[index]
        return _FALLBACK_GREY

    def at_fraction(self, fraction: float) -> Rgb:
        """Colour at a position in [0, 1] along the swatch."""
        if not self.colors:
            return _FALLBACK_GREY
        index = math.floor(fraction * len(self.colors))
        return self[min(max(index, 0), len(self.colors) - 1)]


@dataclass(frozen=True)
class ResolvedPalette:
    elements: tuple[ThermalElement, ...]  # One element, or (city A, city B) when blended
    factor: float  # 0 = all city A, 1 = all city B
    swatches: tuple[PaletteSwatch, ...]


def condition_color(prng: Prng, category: ConditionCategory, use_alternate: bool = False) -> str:
    primary, secondary = CONDITION_COLORS.get(category, CONDITION_COLORS[ConditionCategory.PARTLY_CLOUDY])
    colors = secondary if use_alternate else primary
    return colors[prng.next_int(0, len(colors))]


def element_for_temperature(temperature: float) -> ThermalElement:
    return lookup(TEMPERATURE_ELEMENTS, finite_or(temperature, 15.0))


def element_palette(element: ThermalElement) -> tuple[tuple[str, ...], ...]:
    return ELEMENT_PALETTES.get(element, ELEMENT_PALETTES[ThermalElement.COOL])


def expand(raw: Sequence[str], target_size: int = SWATCH_SIZE) -> tuple[Rgb, ...]:
    """Stretch a short seed palette into a ``target_size`` gradient.

    Each seed colour blends toward the next one (the last wraps to the first)
    over ``target_size / len(raw)`` steps; the result is cut to exactly
    ``target_size`` entries.
    """
    if not raw or target_size <= 0:
        return ()
    seeds = [Rgb.from_hex(value) for value in raw]
    steps = target_size / len(seeds)
    colors: list[Rgb] = []
    for i, current in enumerate(seeds):
        following = seeds[(i + 1) % len(seeds)]
        j = 0
        while j < steps:
            colors.append(lerp_rgb(current, following, j / steps))
            j += 1
    return tuple(colors[:target_size])


def interpolation_factor(temp_a: float, temp_b: float) -> float:
    """Distance-weighted blend factor between the two cities' palettes."""
    temp_a = finite_or(temp_a, 15.0)
    temp_b = finite_or(temp_b, 15.0)
    if abs(temp_a - temp_b) == 0:
        return 0.5
    average = (temp_a + temp_b) / 2
    dist_a = abs(average - temp_a)
    dist_b = abs(average - temp_b)
    total = dist_a + dist_b
    return dist_a / total if total > 0 else 0.5


def interpolate_palettes(a: Sequence[Rgb], b: Sequence[Rgb], t: float, target_size: int) -> tuple[Rgb, ...]:
    if not a or not b:
        return tuple(a or b)[:target_size]
    result = []
    for i in range(target_size):
        ca = a[min(math.floor(i / target_size * len(a)), len(a) - 1)]
        cb = b[min(math.floor(i / target_size * len(b)), len(b) - 1)]
        result.append(lerp_rgb(ca, cb, t))
    return tuple(result)


def interpolate_two_element_palettes(
    element_a: ThermalElement,
    element_b: ThermalElement,
    t: float,
    target_size: int = SWATCH_SIZE,
) -> tuple[PaletteSwatch, ...]:
    rows_a = element_palette(element_a)
    rows_b = element_palette(element_b)
    return tuple(
        PaletteSwatch(interpolate_palettes(expand(row_a, target_size), expand(row_b, target_size), t, target_size))
        for row_a, row_b in zip(rows_a, rows_b)
    )


def resolve_palette(pair: WeatherPair, override: ThermalElement | None = None) -> ResolvedPalette:
    """Pick the swatch set for a scene.

    Args:
        pair: Both cities' observations.
        override: Forces one element's rows, bypassing temperature.

    Returns:
        ResolvedPalette with four 256-entry swatches.
    """
    if override is not None:
        swatches = tuple(PaletteSwatch(expand(row)) for row in element_palette(override))
        return ResolvedPalette((override,), 0.0, swatches)

    temp_a = pair.city_a.temperature
    temp_b = pair.city_b.temperature
    element_a = element_for_temperature(temp_a)
    element_b = element_for_temperature(temp_b)
    if element_a is element_b:
        swatches = tuple(PaletteSwatch(expand(row)) for row in element_palette(element_a))
        return ResolvedPalette((element_a,), 0.0, swatches)

    factor = interpolation_factor(temp_a, temp_b)
    logger.debug("Interpolating %s and %s palettes (t=%.2f)", element_a.value, element_b.value, factor)
    return ResolvedPalette(
        (element_a, element_b),
        factor,
        interpolate_two_element_palettes(element_a, element_b, factor),
    )


def pick_swatch(prng: Prng, resolved: ResolvedPalette) -> PaletteSwatch:
    if not resolved.swatches:
        return PaletteSwatch((_FALLBACK_GREY,))
    return resolved.swatches[prng.next_int(0, len(resolved.swatches))]


def brighten(color: Rgb) -> Rgb:
    """Lift a dark colour so a disc stays visible, then floor every channel at 150."""
    r, g, b = color.r, color.g, color.b
    luminance = (r * 0.299 + g * 0.587 + b * 0.114) / 255
    if 0 < luminance < 0.5:
        scale = 0.6 / luminance
        r = min(255, math.floor(r * scale))
        g = min(255, math.floor(g * scale))
        b = min(255, math.floor(b * scale))
    return Rgb(max(150, r), max(150, g), max(150, b))
