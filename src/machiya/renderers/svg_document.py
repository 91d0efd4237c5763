"""Depth compositor and SVG serialiser.

Paint order is fixed:

  background → darkness → stars → disc → overcast wash →
  depth-sorted {slats, clouds, snowflakes} → rain → abstract → branches

Only the middle group is sorted (ascending y, stable). Everything except the
branch ornaments is clipped to the canvas; branches go in a trailing
unclipped group so they can protrude past the frame and stay topmost.
"""

from __future__ import annotations

from collections.abc import Iterable

from machiya.bands import DISC_GLOW_OPACITY, DISC_GLOW_RINGS
from machiya.models import (
    AbstractDot,
    AbstractLine,
    AbstractRect,
    BranchInstance,
    CloudInstance,
    DarknessOverlay,
    DepthElement,
    Disc,
    DiscStyle,
    GradientBlob,
    OverlayWash,
    PlacedElement,
    RainLine,
    Scene,
    SceneDocument,
    SkyGradient,
    SlatGroup,
    SnowflakeInstance,
    StarLight,
    TextureCell,
    TurbulenceField,
    VectorAsset,
)

SKY_GRADIENT_ID = "sky-gradient"


def fmt(value: float) -> str:
    """Compact, platform-stable number text: 3 decimals, trailing zeros stripped."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def depth_sort(
    slats: Iterable[SlatGroup],
    clouds: Iterable[CloudInstance],
    snowflakes: Iterable[SnowflakeInstance],
) -> list[DepthElement]:
    """Concatenate the depth-tagged kinds and sort by y; ties keep insertion order."""
    merged: list[DepthElement] = [*slats, *clouds, *snowflakes]
    return sorted(merged, key=lambda element: element.y)


def _asset_paths(asset: VectorAsset, fill: str | None = None) -> str:
    return "".join(f'<path d="{p.d}" fill="{fill or p.fill}"/>' for p in asset.paths)


def _centred_asset(element: CloudInstance | SnowflakeInstance) -> str:
    asset = element.asset
    transform = f"translate({fmt(element.x)}, {fmt(element.y)})"
    if element.rotation != 0:
        transform += f" rotate({fmt(element.rotation)})"
    transform += f" scale({fmt(element.scale_x)}, {fmt(element.scale_y)})"
    transform += f" translate({fmt(-asset.width / 2)}, {fmt(-asset.height / 2)})"
    return (
        f'<g transform="{transform}" opacity="{fmt(element.opacity)}">'
        f"{_asset_paths(asset, element.color)}</g>"
    )


def _rect(x: float, y: float, w: float, h: float, fill: str, extra: str = "") -> str:
    return f'<rect x="{fmt(x)}" y="{fmt(y)}" width="{fmt(w)}" height="{fmt(h)}" fill="{fill}"{extra}/>'


def _circle(cx: float, cy: float, r: float, fill: str, opacity: float | None = None) -> str:
    opacity_attr = "" if opacity is None else f' opacity="{fmt(opacity)}"'
    return f'<circle cx="{fmt(cx)}" cy="{fmt(cy)}" r="{fmt(r)}" fill="{fill}"{opacity_attr}/>'


def _rotated(x: float, y: float, rotation: float) -> str:
    return f' transform="rotate({fmt(rotation)} {fmt(x)} {fmt(y)})"'


def serialize_element(element: PlacedElement) -> str:
    """Serialise one placed element. Unknown kinds raise TypeError."""
    if isinstance(element, SkyGradient):
        return _rect(0, 0, element.width, element.height, f"url(#{SKY_GRADIENT_ID})")

    if isinstance(element, DarknessOverlay):
        return _rect(0, 0, element.width, element.height, "#000000", f' opacity="{fmt(element.opacity)}"')

    if isinstance(element, StarLight):
        return _circle(element.x, element.y, element.size / 2, element.color.hex, element.opacity)

    if isinstance(element, Disc):
        color = element.color.hex
        core = _circle(element.x, element.y, element.size / 2, color)
        if element.style is DiscStyle.SINGLE:
            return core
        # Halo rings grow quadratically: size + i * (i / 4)
        rings = "".join(
            _circle(element.x, element.y, (element.size + i * (i / 4)) / 2, color, DISC_GLOW_OPACITY)
            for i in range(DISC_GLOW_RINGS)
        )
        return f'<g class="disc-{element.mode.value.lower()}">{rings}{core}</g>'

    if isinstance(element, OverlayWash):
        return _rect(0, 0, element.width, element.height, element.color, f' opacity="{fmt(element.opacity)}"')

    if isinstance(element, (CloudInstance, SnowflakeInstance)):
        return _centred_asset(element)

    if isinstance(element, SlatGroup):
        cx, cy = element.center
        shoji = element.shoji
        parts = [_rect(shoji.x, shoji.y, shoji.w, shoji.h, shoji.color.hex, f' opacity="{fmt(shoji.opacity)}"')]
        fill = element.color.hex
        parts.extend(_rect(p.x, p.y, p.w, p.h, fill) for p in element.columns)
        parts.extend(_rect(p.x, p.y, p.w, p.h, fill) for p in element.rows)
        return f'<g transform="rotate({fmt(element.rotation)} {fmt(cx)} {fmt(cy)})">{"".join(parts)}</g>'

    if isinstance(element, RainLine):
        return (
            f'<line x1="{fmt(element.x)}" y1="{fmt(element.y)}" x2="{fmt(element.end_x)}" y2="{fmt(element.end_y)}"'
            f' stroke="{element.color.hex}" stroke-width="{fmt(element.thickness)}" opacity="{fmt(element.opacity)}"/>'
        )

    if isinstance(element, AbstractLine):
        return (
            f'<line x1="{fmt(element.x1)}" y1="{fmt(element.y1)}" x2="{fmt(element.x2)}" y2="{fmt(element.y2)}"'
            f' stroke="{element.color}" stroke-width="{fmt(element.stroke_width)}" opacity="{fmt(element.opacity)}"/>'
        )

    if isinstance(element, AbstractRect):
        extra = f' opacity="{fmt(element.opacity)}"' + _rotated(element.x, element.y, element.rotation)
        return _rect(element.x, element.y, element.w, element.h, element.color, extra)

    if isinstance(element, AbstractDot):
        return _circle(element.x, element.y, element.r, element.color, element.opacity)

    if isinstance(element, GradientBlob):
        return _rect(element.x, element.y, element.w, element.h, f"url(#{element.gradient_id})")

    if isinstance(element, TurbulenceField):
        extra = f' filter="url(#{element.filter_id})" opacity="{fmt(element.opacity)}"'
        return _rect(0, 0, element.width, element.height, element.color, extra)

    if isinstance(element, TextureCell):
        return _rect(element.x, element.y, element.size, element.size, element.color.hex,
                     f' opacity="{fmt(element.opacity)}"')

    if isinstance(element, BranchInstance):
        asset = element.asset
        min_x, min_y, vb_w, vb_h = asset.view_box
        transform = f"translate({fmt(element.x)}, {fmt(element.y)})"
        if element.rotation != 0:
            transform += f" rotate({fmt(element.rotation)})"
        if element.flip_horizontal:
            transform += f" scale({fmt(-element.scale)}, {fmt(element.scale)})"
        else:
            transform += f" scale({fmt(element.scale)})"
        transform += f" translate({fmt(-(min_x + vb_w / 2))}, {fmt(-(min_y + vb_h / 2))})"
        # Branches keep the fills authored in the asset
        return f'<g transform="{transform}">{_asset_paths(asset)}</g>'

    raise TypeError(f"Cannot serialise element of type {type(element).__name__}")


def element_defs(element: PlacedElement) -> list[str]:
    """Defs an element references (gradients, filters); most kinds need none."""
    if isinstance(element, SkyGradient):
        return [
            f'<linearGradient id="{SKY_GRADIENT_ID}" x1="0%" y1="0%" x2="0%" y2="100%">'
            f'<stop offset="0%" stop-color="{element.top.hex}" stop-opacity="1"/>'
            f'<stop offset="100%" stop-color="{element.bottom.hex}" stop-opacity="1"/>'
            "</linearGradient>"
        ]
    if isinstance(element, GradientBlob):
        return [
            f'<radialGradient id="{element.gradient_id}">'
            f'<stop offset="0%" stop-color="{element.inner}" stop-opacity="{fmt(element.opacity)}"/>'
            f'<stop offset="100%" stop-color="{element.outer}" stop-opacity="0"/>'
            "</radialGradient>"
        ]
    if isinstance(element, TurbulenceField):
        return [
            f'<filter id="{element.filter_id}" x="0%" y="0%" width="100%" height="100%">'
            f'<feTurbulence type="turbulence" baseFrequency="{fmt(element.base_frequency)}"'
            f' numOctaves="{element.octaves}" seed="{element.seed}" result="turbulence"/>'
            f'<feDisplacementMap in="SourceGraphic" in2="turbulence" scale="{fmt(element.displacement)}"'
            ' xChannelSelector="R" yChannelSelector="G"/>'
            "</filter>"
        ]
    return []


def compose(scene: Scene) -> SceneDocument:
    """Flatten a Scene into a SceneDocument in the fixed paint order."""
    ordered: list[PlacedElement] = [
        *scene.sky,
        *scene.darkness,
        *scene.stars,
        *scene.disc,
        *scene.wash,
        *depth_sort(scene.slats, scene.clouds, scene.snowflakes),
        *scene.rain,
        *scene.abstract,
    ]
    defs: list[str] = []
    for element in ordered:
        defs.extend(element_defs(element))
    return SceneDocument(
        width=scene.width,
        height=scene.height,
        defs=tuple(defs),
        primitives=tuple(serialize_element(e) for e in ordered),
        overlay=tuple(serialize_element(b) for b in scene.branches),
    )
