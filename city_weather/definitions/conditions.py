"""
Weather condition classification shared by the list and detail views.
"""

from typing import Optional, Tuple, List

from pydantic import BaseModel, ConfigDict


class ConditionTheme(BaseModel):
    """
    Presentation theme for a weather condition.

    Attributes:
        name: Theme key
        keywords: Lower-case substrings that select this theme
        icon: Emoji shown next to the condition
        background: Gradient as a (from, to) pair of colour tokens
    """

    model_config = ConfigDict(frozen=True)

    name: str
    keywords: Tuple[str, ...]
    icon: str
    background: Tuple[str, str]


# Order matters: the first group with a matching keyword wins.
CONDITION_THEMES: List[ConditionTheme] = [
    ConditionTheme(
        name="clear",
        keywords=("clear", "sunny"),
        icon="☀️",
        background=("yellow-100", "blue-200"),
    ),
    ConditionTheme(
        name="cloudy",
        keywords=("cloud",),
        icon="☁️",
        background=("gray-100", "gray-300"),
    ),
    ConditionTheme(
        name="rainy",
        keywords=("rain", "drizzle"),
        icon="🌧️",
        background=("blue-200", "blue-400"),
    ),
    ConditionTheme(
        name="snowy",
        keywords=("snow",),
        icon="❄️",
        background=("blue-50", "gray-200"),
    ),
    ConditionTheme(
        name="stormy",
        keywords=("thunder", "storm"),
        icon="⚡",
        background=("gray-400", "gray-700"),
    ),
]

DEFAULT_THEME = ConditionTheme(
    name="default",
    keywords=(),
    icon="🌤️",
    background=("blue-100", "blue-200"),
)


def classify_condition(condition: Optional[str]) -> ConditionTheme:
    """
    Map a free-text condition to its theme by case-insensitive substring match.
    """
    if not condition:
        return DEFAULT_THEME

    condition_lower = condition.lower()
    for theme in CONDITION_THEMES:
        if any(keyword in condition_lower for keyword in theme.keywords):
            return theme

    return DEFAULT_THEME
