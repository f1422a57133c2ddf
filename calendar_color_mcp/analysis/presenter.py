"""Plain-text rendering of an analysis result."""

from typing import Optional

from .aggregator import round_half_up

MAIN_EVENT_LIMIT = 3


def format_duration(hours: float) -> str:
    """1.5 -> '1 hours 30 minutes'."""
    whole_hours, minutes = divmod(int(round_half_up(hours * 60, 0)), 60)
    return f"{whole_hours} hours {minutes} minutes"


def format_analysis(result: dict, filter_summary: Optional[dict] = None) -> str:
    output = ["📊 Color-Based Time Analysis Results:", "=" * 50, ""]

    if filter_summary and filter_summary.get("has_filters"):
        output.append("🎨 Color Filter Settings:")
        output.append(f"  Include colors: {filter_summary.get('include_colors') or 'All colors'}")
        output.append(f"  Exclude colors: {filter_summary.get('exclude_colors') or 'None'}")
        output.append("")

    for name, data in result["color_breakdown"].items():
        output.append(f"🎨 {name}:")
        output.append(f"  Time: {format_duration(data['total_hours'])}")
        output.append(f"  Event count: {data['event_count']} events")
        if data["events"]:
            titles = ", ".join(e["title"] for e in data["events"][:MAIN_EVENT_LIMIT])
            output.append(f"  Main events: {titles}")
        output.append("")

    summary = result["summary"]
    output.append("📈 Summary:")
    output.append(f"  Total time: {summary['total_hours']} hours")
    output.append(f"  Total events: {summary['total_events']} events")

    most_used = summary.get("most_used_color")
    if most_used:
        output.append(
            f"  Most used color: {most_used['name']} "
            f"({most_used['hours']} hours, {most_used['percentage']}%)"
        )

    return "\n".join(output)
