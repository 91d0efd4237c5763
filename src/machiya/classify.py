"""Weather condition classification — OpenWeather code, category, or free-text description to a ConditionCategory."""

from machiya.models import ConditionCategory, Intensity, WeatherObservation, WeatherPair

_PARTIAL_WORDS = ("broken", "few", "scattered")

_CATEGORY_MAP: dict[str, ConditionCategory] = {
    "clear": ConditionCategory.CLEAR,
    "rain": ConditionCategory.RAIN,
    "drizzle": ConditionCategory.RAIN,
    "snow": ConditionCategory.SNOW,
    "mist": ConditionCategory.FOG,
    "fog": ConditionCategory.FOG,
    "haze": ConditionCategory.FOG,
    "thunderstorm": ConditionCategory.STORM,
}

# Ordered keyword scan; first hit wins
_DESCRIPTION_KEYWORDS: tuple[tuple[tuple[str, ...], ConditionCategory], ...] = (
    (("clear", "sunny"), ConditionCategory.CLEAR),
    (("rain", "drizzle", "shower"), ConditionCategory.RAIN),
    (("snow", "sleet"), ConditionCategory.SNOW),
    (("fog", "mist", "haze"), ConditionCategory.FOG),
    (("storm", "thunder"), ConditionCategory.STORM),
)

_LIGHT_RAIN = frozenset({300, 301, 310, 311, 500, 520})
_HEAVY_RAIN = frozenset(set(range(302, 315)) | {502, 503, 504, 522, 531})
_LIGHT_SNOW = frozenset({600, 612, 615, 620})
_HEAVY_SNOW = frozenset({602, 622})

_INTENSITY_ORDER = {Intensity.LIGHT: 1, Intensity.MODERATE: 2, Intensity.HEAVY: 3}


def condition_from_code(code: int) -> ConditionCategory:
    if 200 <= code < 300:
        return ConditionCategory.STORM
    if 300 <= code < 400 or 500 <= code < 600:
        return ConditionCategory.RAIN
    if 600 <= code < 700:
        return ConditionCategory.SNOW
    if 700 <= code < 800:
        return ConditionCategory.FOG
    if code == 800:
        return ConditionCategory.CLEAR
    if code == 804:
        return ConditionCategory.CLOUDY
    # 801-803 and anything unrecognised
    return ConditionCategory.PARTLY_CLOUDY


def _from_category(category: str, desc: str) -> ConditionCategory | None:
    main = category.lower()
    if main == "clouds":
        if any(word in desc for word in _PARTIAL_WORDS):
            return ConditionCategory.PARTLY_CLOUDY
        return ConditionCategory.CLOUDY
    return _CATEGORY_MAP.get(main)


def _from_description(desc: str) -> ConditionCategory:
    for words, result in _DESCRIPTION_KEYWORDS:
        if any(word in desc for word in words):
            return result
    if "wind" in desc and "snow" not in desc and "rain" not in desc:
        return ConditionCategory.WINDY
    if any(f"{word} clouds" in desc for word in _PARTIAL_WORDS):
        return ConditionCategory.PARTLY_CLOUDY
    if "overcast" in desc:
        return ConditionCategory.CLOUDY
    if "cloud" in desc:
        if any(word in desc for word in _PARTIAL_WORDS):
            return ConditionCategory.PARTLY_CLOUDY
        return ConditionCategory.CLOUDY
    return ConditionCategory.PARTLY_CLOUDY


def classify(
    description: str | None,
    code: int | None = None,
    category: str | None = None,
) -> ConditionCategory:
    """Map OpenWeather fields to a ConditionCategory.

    Precedence is condition code, then the "main" category, then keywords in
    the description. Input that matches nothing is PARTLY_CLOUDY.

    Args:
        description: Human-readable text such as "overcast clouds".
        code: Numeric OpenWeather condition id.
        category: OpenWeather "main" group such as "Clouds".

    Returns:
        The condition category. Never raises.
    """
    desc = (description or "").lower()
    if code is not None:
        return condition_from_code(int(code))
    if category:
        found = _from_category(category, desc)
        if found is not None:
            return found
    return _from_description(desc)


def classify_observation(obs: WeatherObservation) -> ConditionCategory:
    return classify(obs.description, obs.condition_code, obs.category)


def intensity(code: int | None, category: ConditionCategory) -> Intensity:
    """Precipitation intensity tier. Only RAIN and SNOW are tiered."""
    if not code:
        return Intensity.MODERATE
    if category is ConditionCategory.RAIN:
        if code in _LIGHT_RAIN:
            return Intensity.LIGHT
        if code in _HEAVY_RAIN:
            return Intensity.HEAVY
    elif category is ConditionCategory.SNOW:
        if code in _LIGHT_SNOW:
            return Intensity.LIGHT
        if code in _HEAVY_SNOW:
            return Intensity.HEAVY
    return Intensity.MODERATE


def higher_intensity(a: Intensity, b: Intensity) -> Intensity:
    return a if _INTENSITY_ORDER[a] >= _INTENSITY_ORDER[b] else b


def pair_intensity(
    pair: WeatherPair,
    conditions: tuple[ConditionCategory, ConditionCategory],
    category: ConditionCategory,
) -> Intensity:
    """Intensity of whichever cities are in ``category``; the higher one when both are."""
    tiers = [
        intensity(obs.condition_code, category)
        for obs, condition in zip(pair.cities, conditions)
        if condition is category
    ]
    if not tiers:
        return Intensity.MODERATE
    result = tiers[0]
    for tier in tiers[1:]:
        result = higher_intensity(result, tier)
    return result
