"""Calendar event value objects consumed by the analysis pipeline."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ACCEPTED = "accepted"


class EventTime(BaseModel):
    """
    One endpoint of an event.

    Timed events carry `date_time`; all-day events carry `date` only.
    Both empty means the time is unknown.
    """

    model_config = ConfigDict(frozen=True)

    date_time: Optional[dt.datetime] = None
    date: Optional[dt.date] = None


class Attendee(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: Optional[str] = None
    response_status: Optional[str] = None  # accepted, declined, tentative, needsAction
    is_self: bool = False

    @property
    def accepted(self) -> bool:
        return self.response_status == ACCEPTED


class Organizer(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: Optional[str] = None
    display_name: Optional[str] = None
    is_self: bool = False

    @property
    def display_name_or_email(self) -> Optional[str]:
        return self.display_name or self.email


class CalendarEvent(BaseModel):
    """A single calendar occurrence as returned for a date range."""

    model_config = ConfigDict(frozen=True)

    summary: Optional[str] = None
    start: EventTime = Field(default_factory=EventTime)
    end: EventTime = Field(default_factory=EventTime)
    # None means "not set on the event"; the default color is applied at read time
    color_id: Optional[int] = None
    attendees: tuple[Attendee, ...] = ()
    organizer: Optional[Organizer] = None
