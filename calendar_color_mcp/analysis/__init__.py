from .aggregator import analyze_events, format_start, round_half_up
from .attendance import attended, filter_attended
from .color_filter import ColorFilter
from .duration import event_duration_hours
from .presenter import format_analysis
from .service import CalendarAnalyzer, parse_date_range

__all__ = [
    "analyze_events",
    "format_start",
    "round_half_up",
    "attended",
    "filter_attended",
    "ColorFilter",
    "event_duration_hours",
    "format_analysis",
    "CalendarAnalyzer",
    "parse_date_range",
]
