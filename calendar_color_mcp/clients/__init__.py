from .gcal import GoogleCalendarClient, event_from_api

__all__ = ["GoogleCalendarClient", "event_from_api"]
