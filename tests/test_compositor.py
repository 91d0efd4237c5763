import pytest

from machiya.models import (
    BranchInstance,
    CloudInstance,
    ConditionCategory,
    DarknessOverlay,
    Disc,
    DiscMode,
    DiscStyle,
    RainLine,
    RenderMode,
    Rgb,
    Scene,
    Shoji,
    SkyGradient,
    SlatGroup,
    SnowflakeInstance,
    StarLight,
)
from machiya.renderers.svg_document import compose, depth_sort, fmt, serialize_element

WHITE = Rgb(255, 255, 255)


def _cloud(asset, y: float, color: str = "#cccccc") -> CloudInstance:
    return CloudInstance(asset, 100.0, y, 0.5, 0.5, 0.0, 0.6, color)


def _scene(assets, **layers) -> Scene:
    return Scene(
        width=200,
        height=300,
        seed=1,
        render_mode=RenderMode.EVENING,
        palette_elements=(),
        conditions=(ConditionCategory.CLEAR, ConditionCategory.CLEAR),
        local_hours=(3.0, 3.0),
        **layers,
    )


class TestDepthSort:
    def test_sorted_by_y(self, assets):
        cloud = assets.clouds[0]
        ordered = depth_sort((), (_cloud(cloud, 50), _cloud(cloud, 10), _cloud(cloud, 30)), ())
        assert [e.y for e in ordered] == [10, 30, 50]

    def test_sorted_across_kinds(self, assets):
        slat = SlatGroup(0, 10.0, 50.0, 20.0, 20.0, WHITE, (), (), Shoji(10.0, 50.0, 20.0, 20.0, WHITE))
        cloud = _cloud(assets.clouds[0], 10)
        flake = SnowflakeInstance(assets.snowflakes[0], 5.0, 30.0, 1.0, 1.0, 0.0, 0.8, "#FFFFFF")
        assert depth_sort((slat,), (cloud,), (flake,)) == [cloud, flake, slat]

    def test_ties_keep_insertion_order(self, assets):
        cloud = assets.clouds[0]
        first = _cloud(cloud, 20, "#111111")
        second = _cloud(cloud, 20, "#222222")
        assert depth_sort((), (first, second), ()) == [first, second]


class TestCompose:
    def test_fixed_paint_order(self, assets):
        scene = _scene(
            assets,
            sky=(SkyGradient(200, 300, Rgb(0, 0, 0), Rgb(10, 10, 10)),),
            darkness=(DarknessOverlay(200, 300, 0.8),),
            stars=(StarLight(5, 5, 2, 0.5, WHITE),),
            disc=(Disc(DiscMode.GLOW, DiscStyle.GLOW, 100, 80, 250, WHITE),),
            clouds=(_cloud(assets.clouds[0], 120),),
            rain=(RainLine(10, 10, 11, 40, 1.0, Rgb(40, 60, 100), 0.5),),
        )
        svg = compose(scene).to_svg()
        markers = [
            'fill="url(#sky-gradient)"',
            'fill="#000000" opacity="0.8"',
            'r="1" fill="#ffffff" opacity="0.5"',
            'class="disc-glow"',
            'fill="#cccccc"',
            "<line x1",
        ]
        positions = [svg.index(marker) for marker in markers]
        assert positions == sorted(positions)

    def test_branches_outside_clip(self, assets):
        branch = BranchInstance(assets.branches[0], -10.0, 150.0, 0.15, 5.0, True)
        scene = _scene(assets, branches=(branch,))
        document = compose(scene)
        assert document.overlay
        svg = document.to_svg()
        clipped_end = svg.index("</g>")
        assert svg.index('<g id="ornaments">') > clipped_end
        assert svg.index("scale(-0.15, 0.15)") > clipped_end
        # Branch paths keep their authored fill
        assert 'fill="#3b2a20"' in svg

    def test_clip_path_defined(self, assets):
        svg = compose(_scene(assets)).to_svg()
        assert '<clipPath id="canvas-clip">' in svg
        assert 'clip-path="url(#canvas-clip)"' in svg

    def test_unknown_element_raises(self):
        with pytest.raises(TypeError):
            serialize_element(object())


class TestFmt:
    @pytest.mark.parametrize(
        "value, expected",
        [(1.0, "1"), (0.12345, "0.123"), (-0.0001, "0"), (250.5, "250.5"), (0, "0")],
    )
    def test_compact(self, value, expected):
        assert fmt(value) == expected
