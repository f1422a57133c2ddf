"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import date, datetime
from pathlib import Path

import pytest

# Make the package importable without installing it
sys.path.insert(0, str(Path(__file__).parent.parent))

from calendar_color_mcp.models import Attendee, CalendarEvent, EventTime, Organizer  # noqa: E402

USER_EMAIL = "me@example.com"


def timed_event(summary, color_id, start, end, **kwargs) -> CalendarEvent:
    return CalendarEvent(
        summary=summary,
        color_id=color_id,
        start=EventTime(date_time=start),
        end=EventTime(date_time=end),
        **kwargs,
    )


def all_day_event(summary, color_id, start, end, **kwargs) -> CalendarEvent:
    return CalendarEvent(
        summary=summary,
        color_id=color_id,
        start=EventTime(date=date.fromisoformat(start)),
        end=EventTime(date=date.fromisoformat(end)),
        **kwargs,
    )


def unknown_time_event(summary, color_id, **kwargs) -> CalendarEvent:
    return CalendarEvent(summary=summary, color_id=color_id, **kwargs)


class FakeEventSource:
    """Stands in for GoogleCalendarClient; records calls."""

    def __init__(self, events=(), user_email=USER_EMAIL, email_error=None, fetch_error=None):
        self.events = list(events)
        self.user_email = user_email
        self.email_error = email_error
        self.fetch_error = fetch_error
        self.fetch_calls = []

    def fetch_events(self, start_date, end_date):
        self.fetch_calls.append((start_date, end_date))
        if self.fetch_error:
            raise self.fetch_error
        return list(self.events)

    def current_user_email(self):
        if self.email_error:
            raise self.email_error
        return self.user_email


class FakeAuthSession:
    def __init__(self, authenticated=True, auth_url="https://accounts.example.com/auth"):
        self.authenticated = authenticated
        self.url = auth_url

    def is_authenticated(self):
        return self.authenticated

    def auth_url(self):
        return self.url


@pytest.fixture
def sample_events():
    """Events covering every time representation and a few colors."""
    return [
        timed_event("Standup", 2, datetime(2025, 1, 1, 9, 0), datetime(2025, 1, 1, 10, 30)),
        timed_event("Review", 2, datetime(2025, 1, 2, 9, 0), datetime(2025, 1, 2, 11, 0)),
        timed_event("Planning", 2, datetime(2025, 1, 3, 13, 0), datetime(2025, 1, 3, 14, 30)),
        all_day_event("Offsite", 3, "2025-01-01", "2025-01-02"),
        timed_event("Deep work", 4, datetime(2025, 1, 1, 13, 0), datetime(2025, 1, 1, 17, 0)),
        unknown_time_event("Someday", 5),
    ]


@pytest.fixture
def self_organizer():
    return Organizer(email=USER_EMAIL, is_self=True)


@pytest.fixture
def make_attendee():
    def _make(email=USER_EMAIL, status="accepted", is_self=False):
        return Attendee(email=email, response_status=status, is_self=is_self)

    return _make
