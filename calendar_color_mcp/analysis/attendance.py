"""Decide which events the authenticated user actually took part in."""

import logging
from typing import Iterable, Optional

from ..models import Attendee, CalendarEvent

logger = logging.getLogger(__name__)


def find_user_attendee(event: CalendarEvent, user_email: Optional[str]) -> Optional[Attendee]:
    """First attendee flagged as self or whose email matches the user's."""
    for attendee in event.attendees:
        if attendee.is_self or (user_email and attendee.email == user_email):
            return attendee
    return None


def attended(event: CalendarEvent, user_email: Optional[str]) -> bool:
    """
    Rules, first match wins:
        1. The user organized the event.
        2. No attendee list: a private/solo event.
        3. The user's own attendee record says "accepted". A guest list
           without the user, or any other response, means not attended.

    `user_email` may be None; only the self flags are used then.
    """
    if event.organizer is not None and event.organizer.is_self:
        return True

    if not event.attendees:
        return True

    attendee = find_user_attendee(event, user_email)
    if attendee is None:
        return False
    return attendee.accepted


def attendance_status(event: CalendarEvent, user_email: Optional[str]) -> str:
    """Human-readable reason behind `attended`, used in debug output."""
    if event.organizer is not None and event.organizer.is_self:
        return "Organizer"
    if not event.attendees:
        return "Private event"

    attendee = find_user_attendee(event, user_email)
    if attendee is None:
        return "Not invited"
    return {
        "accepted": "Accepted",
        "declined": "Declined",
        "tentative": "Tentative",
        "needsAction": "Needs action",
    }.get(attendee.response_status or "", attendee.response_status or "Unknown")


def filter_attended(events: Iterable[CalendarEvent], user_email: Optional[str]) -> list[CalendarEvent]:
    """Keep attended events, in their original order."""
    kept = []
    for event in events:
        if attended(event, user_email):
            kept.append(event)
        else:
            logger.debug("Skipping %r: %s", event.summary, attendance_status(event, user_email))
    return kept
