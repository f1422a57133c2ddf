"""Time spent per color, with a ranked breakdown and summary."""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from .. import colors
from ..models import CalendarEvent
from .duration import event_duration_hours

logger = logging.getLogger(__name__)

UNTITLED = "(no title)"
UNKNOWN_TIME = "Unknown time"


def round_half_up(value: float, digits: int) -> float:
    """Round on the decimal representation, 2.125 -> 2.13 rather than 2.12."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def color_label(color_id) -> str:
    """Breakdown key: palette name, or 'Unknown (<id>)' for ids outside 1..11."""
    color_id = color_id if color_id is not None else colors.default_color_id()
    return colors.color_name(color_id) or f"Unknown ({color_id})"


def format_start(event: CalendarEvent) -> str:
    """
    'YYYY-MM-DD HH:MM' for timed events, 'YYYY-MM-DD (All-day)' for date-only
    events. A timed start at exactly midnight is also labelled all-day, so a
    real meeting starting at 00:00 shows up that way too.
    """
    start = event.start
    if start.date_time is not None:
        moment = start.date_time
        if (moment.hour, moment.minute, moment.second) == (0, 0, 0):
            return f"{moment.strftime('%Y-%m-%d')} (All-day)"
        return moment.strftime("%Y-%m-%d %H:%M")
    if start.date is not None:
        return f"{start.date.isoformat()} (All-day)"
    return UNKNOWN_TIME


def _breakdown_by_color(events: Sequence[CalendarEvent]) -> dict[str, dict]:
    breakdown: dict[str, dict] = {}

    for event in events:
        label = color_label(event.color_id)
        bucket = breakdown.setdefault(label, {"total_hours": 0.0, "event_count": 0, "events": []})

        duration = event_duration_hours(event)
        bucket["total_hours"] += duration
        bucket["event_count"] += 1
        bucket["events"].append(
            {
                "title": event.summary or UNTITLED,
                "duration": duration,
                "start_time": format_start(event),
            }
        )

    # Rank on unrounded totals; sorted() is stable so ties keep first-seen order
    ranked = dict(sorted(breakdown.items(), key=lambda item: -item[1]["total_hours"]))
    for bucket in ranked.values():
        bucket["total_hours"] = round_half_up(bucket["total_hours"], 2)
    return ranked


def _summarize(breakdown: dict[str, dict], event_count: int) -> dict:
    total_hours = round_half_up(sum(bucket["total_hours"] for bucket in breakdown.values()), 2)
    summary: dict = {"total_hours": total_hours, "total_events": event_count}

    if breakdown:
        name, bucket = next(iter(breakdown.items()))
        percentage = (
            round_half_up(bucket["total_hours"] / total_hours * 100, 1) if total_hours > 0 else 0.0
        )
        summary["most_used_color"] = {
            "name": name,
            "hours": bucket["total_hours"],
            "percentage": percentage,
        }

    return summary


def analyze_events(events: Sequence[CalendarEvent]) -> dict:
    """
    Aggregate already-filtered events by color.

    Returns:
        dict with 'color_breakdown' (name -> total_hours, event_count,
        events) ordered by hours descending, and 'summary' (total_hours,
        total_events, and most_used_color when there is at least one event).
    """
    events = list(events)
    breakdown = _breakdown_by_color(events)
    summary = _summarize(breakdown, len(events))
    logger.debug("Aggregated %d events into %d colors", len(events), len(breakdown))
    return {"color_breakdown": breakdown, "summary": summary}
