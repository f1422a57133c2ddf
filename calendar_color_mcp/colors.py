"""Google Calendar's fixed 11-color event palette."""

from typing import Any, Iterable, Optional

# Event color ids 1..11 of the Calendar API event palette
COLOR_NAMES: dict[int, str] = {
    1: "Lavender",
    2: "Sage",
    3: "Grape",
    4: "Flamingo",
    5: "Banana",
    6: "Tangerine",
    7: "Turquoise",
    8: "Graphite",
    9: "Peacock",
    10: "Basil",
    11: "Tomato",
}

JAPANESE_COLOR_NAMES: dict[int, str] = {
    1: "薄紫",
    2: "緑",
    3: "紫",
    4: "赤",
    5: "黄",
    6: "オレンジ",
    7: "水色",
    8: "灰色",
    9: "青",
    10: "濃い緑",
    11: "濃い赤",
}

NAME_TO_ID: dict[str, int] = {
    **{name: color_id for color_id, name in COLOR_NAMES.items()},
    **{name: color_id for color_id, name in JAPANESE_COLOR_NAMES.items()},
}

# Color the calendar itself shows for events without an explicit colorId
DEFAULT_COLOR_ID = 9


def default_color_id() -> int:
    return DEFAULT_COLOR_ID


def is_valid_id(color_id: Any) -> bool:
    """True for integers 1..11. Booleans, floats and strings are never ids."""
    return isinstance(color_id, int) and not isinstance(color_id, bool) and color_id in COLOR_NAMES


def color_name(color_id: Any) -> Optional[str]:
    if not is_valid_id(color_id):
        return None
    return COLOR_NAMES[color_id]


def name_to_id(name: Any) -> Optional[int]:
    """Exact, case-sensitive lookup across the English and Japanese names."""
    if not isinstance(name, str):
        return None
    return NAME_TO_ID.get(name)


def resolve(color: Any) -> Optional[int]:
    """Map one color spec entry (id or name) to its id, or None if unknown."""
    if isinstance(color, str):
        return name_to_id(color)
    if is_valid_id(color):
        return color
    return None


def normalize(colors: Optional[Iterable[Any]]) -> list[int]:
    """
    Convert a mixed list of ids and names into canonical color ids.

    Unknown entries are dropped, duplicates collapse to their first
    occurrence. Fractional numbers are never truncated into ids.
    """
    if not colors:
        return []
    resolved = (resolve(color) for color in colors)
    return list(dict.fromkeys(color_id for color_id in resolved if color_id is not None))


def effective_color_id(color_id: Optional[int]) -> int:
    """The event's own color if it is a palette id, otherwise the default."""
    return color_id if is_valid_id(color_id) else DEFAULT_COLOR_ID


def format_color_list(color_ids: Iterable[int]) -> str:
    """Render ids as 'Name(id), Name(id)'."""
    return ", ".join(f"{COLOR_NAMES.get(color_id, 'Unknown')}({color_id})" for color_id in color_ids)
