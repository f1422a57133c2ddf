"""The analyze_calendar workflow: validate, fetch, filter, aggregate, render."""

import logging
from datetime import date
from typing import Any, Optional, Sequence

from ..errors import AuthenticationRequiredError, InvalidParameterError
from .aggregator import analyze_events
from .attendance import filter_attended
from .color_filter import ColorFilter
from .presenter import format_analysis

logger = logging.getLogger(__name__)


def parse_date_range(start_date: Optional[str], end_date: Optional[str]) -> tuple[date, date]:
    """
    Parse 'YYYY-MM-DD' bounds.

    Raises:
        InvalidParameterError: If a bound is missing, unparseable, or the
            range is reversed.
    """
    if not start_date or not end_date:
        raise InvalidParameterError("Both start date and end date must be provided")

    try:
        start = date.fromisoformat(str(start_date).strip())
        end = date.fromisoformat(str(end_date).strip())
    except ValueError as e:
        raise InvalidParameterError(f"Invalid date format: {e}") from e

    if end < start:
        raise InvalidParameterError("End date must be on or after start date")
    return start, end


class CalendarAnalyzer:
    """
    Color-based time analysis for one user's calendar.

    Args:
        event_source: Object with fetch_events(start, end) and
            current_user_email(), e.g. GoogleCalendarClient.
        auth_session: Object with is_authenticated(), e.g. GoogleAuthSession.
    """

    def __init__(self, event_source, auth_session):
        self.event_source = event_source
        self.auth_session = auth_session

    def analyze(
        self,
        start_date: Optional[str],
        end_date: Optional[str],
        include_colors: Optional[Sequence[Any]] = None,
        exclude_colors: Optional[Sequence[Any]] = None,
    ) -> dict:
        """
        Run the full analysis for [start_date, end_date] (inclusive).

        Argument validation happens before any API call.

        Raises:
            InvalidParameterError: Bad dates or color lists.
            AuthenticationRequiredError: No usable credential.
            CalendarAccessError: The Calendar API call failed.
        """
        start, end = parse_date_range(start_date, end_date)
        color_filter = ColorFilter(include_colors=include_colors, exclude_colors=exclude_colors)

        if not self.auth_session.is_authenticated():
            raise AuthenticationRequiredError()

        events = self.event_source.fetch_events(start, end)
        user_email = self._user_email()

        attended = filter_attended(events, user_email)
        filtered = color_filter.apply(attended)
        logger.info(
            "Analyzing %s..%s: %d fetched, %d attended, %d after color filter",
            start,
            end,
            len(events),
            len(attended),
            len(filtered),
        )

        result = analyze_events(filtered)
        filter_summary = color_filter.summary()

        return {
            "period": {
                "start_date": start.isoformat(),
                "end_date": end.isoformat(),
                "days": (end - start).days + 1,
            },
            "color_filter": filter_summary,
            "analysis": result["color_breakdown"],
            "summary": result["summary"],
            "formatted_output": format_analysis(result, filter_summary),
        }

    def _user_email(self) -> Optional[str]:
        # Attendance falls back to self flags when the email is unavailable
        try:
            return self.event_source.current_user_email()
        except AuthenticationRequiredError:
            raise
        except Exception as e:
            logger.warning("Could not resolve the user's email: %s", e)
            return None
