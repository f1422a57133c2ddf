"""Per-event duration in hours."""

import logging

from ..models import CalendarEvent

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600.0
HOURS_PER_DAY = 24.0


def event_duration_hours(event: CalendarEvent) -> float:
    """
    Return how many hours an event spans.

    - Timed events (both ends have `date_time`): exact fractional hours.
    - All-day events (both ends have `date` only): whole days x 24. The
      API's end date is exclusive, so a pair with start == end yields 0.
    - Anything else (missing ends, one timed end and one all-day end): 0.0.
    """
    start, end = event.start, event.end

    if start.date_time is not None and end.date_time is not None:
        if (start.date_time.tzinfo is None) != (end.date_time.tzinfo is None):
            logger.debug("Mixed naive/aware datetimes on %r, treating as unknown time", event.summary)
            return 0.0
        hours = (end.date_time - start.date_time).total_seconds() / SECONDS_PER_HOUR
        logger.debug("Timed event %r: %s -> %s = %s hours", event.summary, start.date_time, end.date_time, hours)
        return hours

    if (
        start.date_time is None
        and end.date_time is None
        and start.date is not None
        and end.date is not None
    ):
        days = (end.date - start.date).days
        hours = days * HOURS_PER_DAY
        logger.debug("All-day event %r: %s -> %s = %d days", event.summary, start.date, end.date, days)
        return hours

    logger.debug("Unknown time for event %r", event.summary)
    return 0.0
