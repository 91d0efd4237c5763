"""Data model definitions — explicit boundaries between weather input, generators, and the compositor."""

import math
from dataclasses import dataclass, field
from enum import Enum


class ConditionCategory(str, Enum):
    CLEAR = "CLEAR"
    CLOUDY = "CLOUDY"
    PARTLY_CLOUDY = "PARTLY_CLOUDY"
    RAIN = "RAIN"
    SNOW = "SNOW"
    FOG = "FOG"
    STORM = "STORM"
    WINDY = "WINDY"


class Intensity(str, Enum):
    LIGHT = "LIGHT"
    MODERATE = "MODERATE"
    HEAVY = "HEAVY"


class ThermalElement(str, Enum):
    FIRE = "FIRE"
    HOT = "HOT"
    WARM = "WARM"
    COOL = "COOL"
    COLD = "COLD"
    FREEZING = "FREEZING"
    FROSTBITE = "FROSTBITE"
    SUPERFROSTBITE = "SUPERFROSTBITE"
    EXTREMEFREEZE = "EXTREMEFREEZE"
    ABSOLUTEFREEZE = "ABSOLUTEFREEZE"
    # Non-thermal palettes, only reachable through SceneOptions.palette_element
    WATER = "WATER"
    EARTH = "EARTH"
    WIND = "WIND"
    WOOD = "WOOD"
    METAL = "METAL"
    HOLOGRAM = "HOLOGRAM"


class RenderMode(str, Enum):
    DAWN = "DAWN"
    DAY = "DAY"
    TWILIGHT = "TWILIGHT"
    EVENING = "EVENING"
    GOLDEN_HOUR = "GOLDEN_HOUR"
    BLUE_HOUR = "BLUE_HOUR"


class DiscMode(str, Enum):
    SOLID = "SOLID"  # sun
    GLOW = "GLOW"  # moon


class DiscStyle(str, Enum):
    GLOW = "GLOW"  # layered halo + core
    SINGLE = "SINGLE"  # one brightened circle


class AbstractStyle(str, Enum):
    GEOMETRIC = "GEOMETRIC"
    GRADIENT_MESH = "GRADIENT_MESH"
    DOT_PATTERN = "DOT_PATTERN"
    TURBULENCE = "TURBULENCE"
    TEXTURE = "TEXTURE"


def finite_or(value: float | None, default: float) -> float:
    """Return value as float, or default when it is missing or non-finite."""
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


@dataclass(frozen=True)
class WeatherObservation:
    """Current conditions for one city. Produced by the weather collaborator."""

    city: str
    temperature: float  # °C
    humidity: float  # 0-100
    pressure: float  # hPa
    wind_speed: float  # m/s
    description: str  # Free text ("overcast clouds")
    condition_code: int | None = None  # OpenWeather condition id (500, 804, ...)
    category: str | None = None  # OpenWeather "main" ("Rain", "Clouds", ...)
    timezone: str | None = None  # IANA zone name ("Asia/Tokyo")


@dataclass(frozen=True)
class WeatherPair:
    """The unit of "current conditions": city A and city B."""

    city_a: WeatherObservation
    city_b: WeatherObservation

    @property
    def cities(self) -> tuple[WeatherObservation, WeatherObservation]:
        return (self.city_a, self.city_b)

    @property
    def avg_temperature(self) -> float:
        return (finite_or(self.city_a.temperature, 15.0) + finite_or(self.city_b.temperature, 15.0)) / 2

    @property
    def avg_humidity(self) -> float:
        return (finite_or(self.city_a.humidity, 50.0) + finite_or(self.city_b.humidity, 50.0)) / 2

    @property
    def avg_wind_speed(self) -> float:
        return (finite_or(self.city_a.wind_speed, 0.0) + finite_or(self.city_b.wind_speed, 0.0)) / 2


@dataclass(frozen=True)
class Rgb:
    """Integer RGB triple, channels clamped to [0, 255]."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            object.__setattr__(self, name, max(0, min(255, int(getattr(self, name)))))

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @classmethod
    def from_hex(cls, value: str) -> "Rgb":
        """Parse "#RRGGBB" (case-insensitive). Malformed input yields black."""
        digits = value.lstrip("#")
        if len(digits) != 6:
            return cls(0, 0, 0)
        try:
            return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
        except ValueError:
            return cls(0, 0, 0)


@dataclass(frozen=True)
class AssetPath:
    d: str  # SVG path commands
    fill: str  # Fill hint from the source file


@dataclass(frozen=True)
class VectorAsset:
    """A reusable SVG shape (cloud, snowflake, branch). Never mutated."""

    name: str
    paths: tuple[AssetPath, ...]
    view_box: tuple[float, float, float, float]  # (min_x, min_y, width, height)

    @property
    def width(self) -> float:
        return self.view_box[2]

    @property
    def height(self) -> float:
        return self.view_box[3]


@dataclass(frozen=True)
class AssetStore:
    """Read-only asset families, loaded once at process start."""

    clouds: tuple[VectorAsset, ...] = ()
    snowflakes: tuple[VectorAsset, ...] = ()
    branches: tuple[VectorAsset, ...] = ()


@dataclass(frozen=True)
class SceneOptions:
    width: int = 1080
    height: int = 1350  # 4:5 portrait, assumed by downstream display
    abstract_style: AbstractStyle = AbstractStyle.GEOMETRIC
    disc_style: DiscStyle = DiscStyle.GLOW
    palette_element: ThermalElement | None = None  # Forces one element's palette


# --- Placed elements (closed union, serialised by renderers.svg_document) ---


@dataclass(frozen=True)
class SkyGradient:
    width: float
    height: float
    top: Rgb
    bottom: Rgb


@dataclass(frozen=True)
class DarknessOverlay:
    width: float
    height: float
    opacity: float  # 0.0 (day) .. 1.0 (deep night)


@dataclass(frozen=True)
class StarLight:
    x: float
    y: float
    size: float  # Diameter
    opacity: float
    color: Rgb


@dataclass(frozen=True)
class Disc:
    """Sun or moon."""

    mode: DiscMode
    style: DiscStyle
    x: float
    y: float
    size: float  # Diameter of the core
    color: Rgb


@dataclass(frozen=True)
class OverlayWash:
    width: float
    height: float
    color: str
    opacity: float


@dataclass(frozen=True)
class CloudInstance:
    asset: VectorAsset
    x: float
    y: float
    scale_x: float
    scale_y: float
    rotation: float
    opacity: float
    color: str


@dataclass(frozen=True)
class SnowflakeInstance:
    asset: VectorAsset
    x: float
    y: float
    scale_x: float
    scale_y: float
    rotation: float
    opacity: float
    color: str


@dataclass(frozen=True)
class SlatPanel:
    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class Shoji:
    x: float
    y: float
    w: float
    h: float
    color: Rgb
    opacity: float = 0.3


@dataclass(frozen=True)
class SlatGroup:
    """A shoji grid: backing panel plus horizontal and vertical slats, rotated as a unit."""

    index: int
    x: float
    y: float  # Depth coordinate
    w: float
    h: float
    color: Rgb
    columns: tuple[SlatPanel, ...]
    rows: tuple[SlatPanel, ...]
    shoji: Shoji
    rotation: float = 30.0

    @property
    def center(self) -> tuple[float, float]:
        return (self.shoji.x + self.w / 2, self.shoji.y + self.h / 2)


@dataclass(frozen=True)
class RainLine:
    x: float
    y: float
    end_x: float
    end_y: float
    thickness: float
    color: Rgb
    opacity: float


@dataclass(frozen=True)
class AbstractLine:
    role: str
    x1: float
    y1: float
    x2: float
    y2: float
    color: str
    stroke_width: float
    opacity: float


@dataclass(frozen=True)
class AbstractRect:
    role: str
    x: float
    y: float
    w: float
    h: float
    rotation: float
    color: str
    opacity: float


@dataclass(frozen=True)
class AbstractDot:
    role: str
    x: float
    y: float
    r: float
    color: str
    opacity: float


@dataclass(frozen=True)
class GradientBlob:
    role: str
    gradient_id: str
    x: float
    y: float
    w: float
    h: float
    inner: str
    outer: str
    opacity: float


@dataclass(frozen=True)
class TurbulenceField:
    role: str
    filter_id: str
    width: float
    height: float
    base_frequency: float
    octaves: int
    seed: int
    displacement: float
    color: str
    opacity: float = 0.15


@dataclass(frozen=True)
class TextureCell:
    role: str
    x: float
    y: float
    size: float
    color: Rgb
    opacity: float


@dataclass(frozen=True)
class BranchInstance:
    asset: VectorAsset
    x: float
    y: float
    scale: float
    rotation: float
    flip_horizontal: bool


AbstractShape = AbstractLine | AbstractRect | AbstractDot | GradientBlob | TurbulenceField | TextureCell
DepthElement = CloudInstance | SlatGroup | SnowflakeInstance
PlacedElement = (
    SkyGradient
    | DarknessOverlay
    | StarLight
    | Disc
    | OverlayWash
    | CloudInstance
    | SlatGroup
    | SnowflakeInstance
    | RainLine
    | AbstractShape
    | BranchInstance
)


@dataclass(frozen=True)
class Scene:
    """Everything one generation pass produced. The sole input to the compositor."""

    width: int
    height: int
    seed: int
    render_mode: RenderMode
    palette_elements: tuple[ThermalElement, ...]  # One entry, or two when interpolated
    conditions: tuple[ConditionCategory, ConditionCategory]
    local_hours: tuple[float, float]
    sky: tuple[SkyGradient, ...] = ()
    darkness: tuple[DarknessOverlay, ...] = ()
    stars: tuple[StarLight, ...] = ()
    disc: tuple[Disc, ...] = ()
    wash: tuple[OverlayWash, ...] = ()
    clouds: tuple[CloudInstance, ...] = ()
    slats: tuple[SlatGroup, ...] = ()
    snowflakes: tuple[SnowflakeInstance, ...] = ()
    rain: tuple[RainLine, ...] = ()
    abstract: tuple[AbstractShape, ...] = ()
    branches: tuple[BranchInstance, ...] = ()


@dataclass(frozen=True)
class SceneDocument:
    """Serialised output of the compositor. Write-once."""

    width: int
    height: int
    defs: tuple[str, ...]
    primitives: tuple[str, ...]  # Inside the clipped group, paint order
    overlay: tuple[str, ...] = field(default=())  # Unclipped, painted last

    def to_svg(self) -> str:
        clip_id = "canvas-clip"
        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.width}" height="{self.height}"'
            f' viewBox="0 0 {self.width} {self.height}">',
            "  <defs>",
            f'    <clipPath id="{clip_id}">',
            f'      <rect x="0" y="0" width="{self.width}" height="{self.height}"/>',
            "    </clipPath>",
        ]
        parts.extend(f"    {d}" for d in self.defs)
        parts.append("  </defs>")
        parts.append(f'  <g clip-path="url(#{clip_id})">')
        parts.extend(f"    {p}" for p in self.primitives)
        parts.append("  </g>")
        if self.overlay:
            parts.append('  <g id="ornaments">')
            parts.extend(f"    {p}" for p in self.overlay)
            parts.append("  </g>")
        parts.append("</svg>")
        return "\n".join(parts)

