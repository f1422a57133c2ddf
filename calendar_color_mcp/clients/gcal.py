"""Google Calendar API client: events for a date range and the user's identity."""

import logging
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any, Optional

from google.auth.exceptions import RefreshError
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..errors import AuthenticationRequiredError, CalendarAccessError, CalendarColorError
from ..models import Attendee, CalendarEvent, EventTime, Organizer

logger = logging.getLogger(__name__)

PAGE_SIZE = 250


def _describe_http_error(e: HttpError) -> str:
    """Convert Google API HttpError to a human-readable message."""
    code = e.resp.status
    if code == 403:
        return "Permission denied. Ensure the Calendar API is enabled for this OAuth client."
    if code == 404:
        return "Calendar not found. Check GOOGLE_CALENDAR_ID."
    if code == 429:
        return "Google Calendar API rate limit hit. Wait a moment and retry."
    return f"Google Calendar API error {code}: {e}"


# ---------------------------------------------------------------------------
# API payload conversion
# ---------------------------------------------------------------------------

def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    try:
        # RFC 3339; older Pythons reject the 'Z' suffix
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable dateTime %r", value)
        return None


def _parse_date(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.debug("Unparseable date %r", value)
        return None


def _parse_color_id(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug("Non-numeric colorId %r", value)
        return None


def _event_time(raw: Optional[dict]) -> EventTime:
    raw = raw or {}
    return EventTime(
        date_time=_parse_datetime(raw.get("dateTime")),
        date=_parse_date(raw.get("date")),
    )


def event_from_api(raw: dict) -> CalendarEvent:
    """Build a CalendarEvent from one item of events.list."""
    organizer = raw.get("organizer")
    return CalendarEvent(
        summary=raw.get("summary"),
        start=_event_time(raw.get("start")),
        end=_event_time(raw.get("end")),
        color_id=_parse_color_id(raw.get("colorId")),
        attendees=tuple(
            Attendee(
                email=a.get("email"),
                response_status=a.get("responseStatus"),
                is_self=bool(a.get("self", False)),
            )
            for a in raw.get("attendees") or []
        ),
        organizer=Organizer(
            email=organizer.get("email"),
            display_name=organizer.get("displayName"),
            is_self=bool(organizer.get("self", False)),
        )
        if organizer
        else None,
    )


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class GoogleCalendarClient:
    """
    Read-only access to one calendar of the authenticated user.

    Args:
        session: GoogleAuthSession providing credentials.
        calendar_id: Calendar to read ('primary' by default).
        tz: Zone in which requested dates start and end.
    """

    def __init__(self, session, calendar_id: str = "primary", tz: Optional[tzinfo] = None):
        self.session = session
        self.calendar_id = calendar_id
        self.tz = tz

    def _service(self):
        creds = self.session.credentials()
        return build("calendar", "v3", credentials=creds, cache_discovery=False)

    def _execute(self, request, action: str) -> dict:
        """Run one API request, translating failures into our error types."""
        try:
            return request.execute()
        except HttpError as e:
            if e.resp.status == 401:
                raise AuthenticationRequiredError(f"Google rejected the stored token while {action}") from e
            logger.error("Calendar API error while %s: %s", action, e)
            raise CalendarAccessError(_describe_http_error(e)) from e
        except RefreshError as e:
            raise AuthenticationRequiredError(f"Token refresh failed while {action}: {e}") from e
        except CalendarColorError:
            raise
        except Exception as e:
            logger.error("Calendar request failed while %s: %s", action, e)
            raise CalendarAccessError(f"Failed while {action}: {e}") from e

    def time_window(self, start_date: date, end_date: date) -> tuple[str, str]:
        """RFC 3339 bounds covering start_date 00:00 up to the day after end_date."""
        tz = self.tz or datetime.now().astimezone().tzinfo
        time_min = datetime.combine(start_date, time.min, tzinfo=tz)
        time_max = datetime.combine(end_date + timedelta(days=1), time.min, tzinfo=tz)
        return time_min.isoformat(), time_max.isoformat()

    def list_raw_events(self, start_date: date, end_date: date) -> list[dict]:
        """All event dicts in the range, following pagination."""
        service = self._service()
        time_min, time_max = self.time_window(start_date, end_date)

        items: list[dict] = []
        page_token = None
        while True:
            result = self._execute(
                service.events().list(
                    calendarId=self.calendar_id,
                    timeMin=time_min,
                    timeMax=time_max,
                    maxResults=PAGE_SIZE,
                    singleEvents=True,
                    orderBy="startTime",
                    pageToken=page_token,
                ),
                "listing events",
            )
            items.extend(result.get("items", []))
            page_token = result.get("nextPageToken")
            if not page_token:
                break

        logger.debug("Fetched %d events for %s..%s", len(items), start_date, end_date)
        return items

    def fetch_events(self, start_date: date, end_date: date) -> list[CalendarEvent]:
        """Events between start_date and end_date, inclusive."""
        events = []
        for raw in self.list_raw_events(start_date, end_date):
            if not isinstance(raw, dict):
                raise CalendarAccessError("Malformed event in Calendar API response")
            event = event_from_api(raw)
            logger.debug(
                "Event %r color_id=%s start=%s end=%s",
                event.summary,
                event.color_id,
                event.start,
                event.end,
            )
            events.append(event)
        return events

    def current_user_email(self) -> Optional[str]:
        """The primary calendar's id, which is the account's email address."""
        service = self._service()
        calendar = self._execute(service.calendars().get(calendarId="primary"), "reading the user's email")
        email = calendar.get("id")
        logger.debug("Retrieved user email: %s", email)
        return email
