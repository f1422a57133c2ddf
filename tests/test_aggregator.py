import json
from datetime import datetime

import pytest

from calendar_color_mcp.analysis import analyze_events, format_start, round_half_up

from conftest import all_day_event, timed_event, unknown_time_event


def test_groups_sorted_by_hours(sample_events):
    result = analyze_events(sample_events)
    breakdown = result["color_breakdown"]

    assert list(breakdown) == ["Grape", "Sage", "Flamingo", "Banana"]
    assert breakdown["Grape"]["total_hours"] == 24.0
    assert breakdown["Sage"] == {
        "total_hours": 5.0,
        "event_count": 3,
        "events": [
            {"title": "Standup", "duration": 1.5, "start_time": "2025-01-01 09:00"},
            {"title": "Review", "duration": 2.0, "start_time": "2025-01-02 09:00"},
            {"title": "Planning", "duration": 1.5, "start_time": "2025-01-03 13:00"},
        ],
    }
    assert breakdown["Flamingo"]["total_hours"] == 4.0
    assert breakdown["Banana"]["events"][0]["start_time"] == "Unknown time"


def test_summary(sample_events):
    summary = analyze_events(sample_events)["summary"]
    assert summary == {
        "total_hours": 33.0,
        "total_events": 6,
        "most_used_color": {"name": "Grape", "hours": 24.0, "percentage": 72.7},
    }


def test_mixed_event_types():
    events = [
        timed_event("Meeting", 2, datetime(2025, 1, 1, 9, 0), datetime(2025, 1, 1, 10, 30)),
        all_day_event("Conference", 3, "2025-01-01", "2025-01-02"),
        all_day_event("Training", 4, "2025-01-01", "2025-01-03"),
        unknown_time_event("Unknown", 5),
        timed_event(None, 6, datetime(2025, 1, 1, 14, 0), datetime(2025, 1, 1, 15, 0)),
        timed_event("Default color", None, datetime(2025, 1, 1, 16, 0), datetime(2025, 1, 1, 17, 0)),
    ]
    result = analyze_events(events)
    breakdown = result["color_breakdown"]

    assert list(breakdown) == ["Flamingo", "Grape", "Sage", "Tangerine", "Peacock", "Banana"]
    assert breakdown["Tangerine"]["events"][0]["title"] == "(no title)"
    assert result["summary"]["total_hours"] == 75.5
    assert result["summary"]["most_used_color"]["name"] == "Flamingo"


def test_unknown_color_ids_get_their_own_bucket():
    events = [timed_event("Odd", 15, datetime(2025, 1, 1, 9, 0), datetime(2025, 1, 1, 10, 0))]
    assert list(analyze_events(events)["color_breakdown"]) == ["Unknown (15)"]


def test_ties_keep_first_seen_order():
    events = [
        timed_event("a", 6, datetime(2025, 1, 1, 9, 0), datetime(2025, 1, 1, 10, 0)),
        timed_event("b", 1, datetime(2025, 1, 1, 10, 0), datetime(2025, 1, 1, 11, 0)),
        timed_event("c", 11, datetime(2025, 1, 1, 11, 0), datetime(2025, 1, 1, 12, 0)),
    ]
    assert list(analyze_events(events)["color_breakdown"]) == ["Tangerine", "Lavender", "Tomato"]


@pytest.mark.parametrize(
    "end,expected",
    [
        (datetime(2025, 1, 1, 11, 7, 30), 2.13),
        (datetime(2025, 1, 1, 9, 0, 18), 0.01),
        (datetime(2025, 1, 1, 9, 0, 1), 0.0),
    ],
)
def test_group_totals_round_half_up_to_two_places(end, expected):
    events = [timed_event("x", 2, datetime(2025, 1, 1, 9, 0), end)]
    result = analyze_events(events)
    assert result["color_breakdown"]["Sage"]["total_hours"] == expected
    assert result["summary"]["total_hours"] == expected


def test_per_event_durations_stay_unrounded():
    events = [timed_event("x", 2, datetime(2025, 1, 1, 9, 0), datetime(2025, 1, 1, 9, 20))]
    duration = analyze_events(events)["color_breakdown"]["Sage"]["events"][0]["duration"]
    assert duration == pytest.approx(1 / 3)


def test_total_is_the_sum_of_rounded_group_totals():
    # three 20-minute groups: each 0.333.. rounds to 0.33, the total shows 0.99, not 1.0
    events = [
        timed_event("a", 1, datetime(2025, 1, 1, 9, 0), datetime(2025, 1, 1, 9, 20)),
        timed_event("b", 2, datetime(2025, 1, 1, 10, 0), datetime(2025, 1, 1, 10, 20)),
        timed_event("c", 3, datetime(2025, 1, 1, 11, 0), datetime(2025, 1, 1, 11, 20)),
    ]
    summary = analyze_events(events)["summary"]
    assert summary["total_hours"] == 0.99
    assert summary["most_used_color"] == {"name": "Lavender", "hours": 0.33, "percentage": 33.3}


def test_zero_hours_gives_zero_percent():
    events = [unknown_time_event("a", 1), unknown_time_event("b", 2)]
    summary = analyze_events(events)["summary"]
    assert summary["total_hours"] == 0.0
    assert summary["total_events"] == 2
    assert summary["most_used_color"]["percentage"] == 0


def test_single_event_is_one_hundred_percent():
    events = [timed_event("x", 2, datetime(2025, 1, 1, 9, 0), datetime(2025, 1, 1, 10, 30))]
    assert analyze_events(events)["summary"]["most_used_color"]["percentage"] == 100.0


def test_empty_input_has_no_most_used_color():
    result = analyze_events([])
    assert result["color_breakdown"] == {}
    assert result["summary"] == {"total_hours": 0, "total_events": 0}
    assert "most_used_color" not in result["summary"]


def test_analysis_is_repeatable(sample_events):
    first = json.dumps(analyze_events(sample_events), sort_keys=False)
    second = json.dumps(analyze_events(sample_events), sort_keys=False)
    assert first == second


@pytest.mark.parametrize(
    "event,label",
    [
        (timed_event("x", 1, datetime(2025, 1, 1, 10, 0), datetime(2025, 1, 1, 11, 0)), "2025-01-01 10:00"),
        (timed_event("x", 1, datetime(2025, 1, 1, 23, 0), datetime(2025, 1, 2, 1, 0)), "2025-01-01 23:00"),
        # midnight starts are shown as all-day, even for real meetings
        (timed_event("x", 1, datetime(2025, 1, 1, 0, 0), datetime(2025, 1, 1, 1, 0)), "2025-01-01 (All-day)"),
        (all_day_event("x", 1, "2025-01-01", "2025-01-02"), "2025-01-01 (All-day)"),
        (unknown_time_event("x", 1), "Unknown time"),
    ],
)
def test_format_start(event, label):
    assert format_start(event) == label


@pytest.mark.parametrize(
    "value,digits,expected",
    [(2.125, 2, 2.13), (0.005, 2, 0.01), (72.72727, 1, 72.7), (33.35, 1, 33.4), (0, 2, 0.0)],
)
def test_round_half_up(value, digits, expected):
    assert round_half_up(value, digits) == expected
