"""Include/exclude filtering of events by color."""

import logging
from typing import Any, Iterable, Optional, Sequence

from .. import colors
from ..errors import InvalidParameterError
from ..models import CalendarEvent

logger = logging.getLogger(__name__)


def _resolve_spec(spec: Optional[Sequence[Any]], parameter_name: str) -> Optional[list[int]]:
    """
    Turn a user-supplied color list into ids.

    None or an empty list means "not given". Any entry that is neither a
    palette id nor a known color name is rejected.
    """
    if not spec:
        return None

    invalid = [color for color in spec if colors.resolve(color) is None]
    if invalid:
        raise InvalidParameterError(
            f"Invalid color in {parameter_name}: {', '.join(repr(c) for c in invalid)}. "
            "Use a color id (1-11) or one of: " + ", ".join(colors.COLOR_NAMES.values())
        )
    return colors.normalize(spec)


class ColorFilter:
    """
    Filter events by effective color id.

    When both lists are given, `include_colors` alone decides what is
    kept and `exclude_colors` is ignored.
    """

    def __init__(
        self,
        include_colors: Optional[Sequence[Any]] = None,
        exclude_colors: Optional[Sequence[Any]] = None,
    ):
        self.include_color_ids = _resolve_spec(include_colors, "include_colors")
        self.exclude_color_ids = _resolve_spec(exclude_colors, "exclude_colors")

    @property
    def has_filters(self) -> bool:
        return bool(self.include_color_ids or self.exclude_color_ids)

    def should_include(self, event: CalendarEvent) -> bool:
        color_id = colors.effective_color_id(event.color_id)
        if self.include_color_ids:
            return color_id in self.include_color_ids
        if self.exclude_color_ids:
            return color_id not in self.exclude_color_ids
        return True

    def apply(self, events: Iterable[CalendarEvent]) -> list[CalendarEvent]:
        events = list(events)
        if not self.has_filters:
            return events

        kept = [event for event in events if self.should_include(event)]
        logger.debug(
            "Color filter kept %d of %d events (include=%s, exclude=%s)",
            len(kept),
            len(events),
            self.include_color_ids,
            self.exclude_color_ids,
        )
        return kept

    def summary(self) -> dict:
        return {
            "include_colors": colors.format_color_list(self.include_color_ids)
            if self.include_color_ids
            else None,
            "exclude_colors": colors.format_color_list(self.exclude_color_ids)
            if self.exclude_color_ids
            else None,
            "has_filters": self.has_filters,
        }
