"""Tests for derived stats: best buckets, top projects and streaks."""

from datetime import date, timedelta

import pytest

from wrapped.models import AggregatedStats, DayPick, HourPick, LanguagePick, ProjectRank, ToolPick
from wrapped.stats import best_bucket, calculate_derived, calculate_streaks, top_projects


def test_best_bucket_picks_maximum():
    assert best_bucket({"Go": 2, "Python": 7, "Rust": 3}) == ("Python", 7)


def test_best_bucket_empty_is_none():
    assert best_bucket({}) is None


def test_top_projects_sorted_and_limited():
    counts = {"a": 1, "b": 9, "c": 4, "d": 7, "e": 2, "f": 5}

    ranked = top_projects(counts)

    assert [p.name for p in ranked] == ["b", "d", "f", "c", "e"]
    assert ranked[0] == ProjectRank(name="b", sessions=9)


def test_top_projects_stable_on_ties():
    counts = {"first": 3, "second": 5, "third": 3, "fourth": 3}

    ranked = top_projects(counts)

    assert [p.name for p in ranked] == ["second", "first", "third", "fourth"]


@pytest.mark.parametrize("n", [0, 1, 3, 5, 8])
def test_top_projects_length(n):
    counts = {f"p{i}": i + 1 for i in range(n)}

    ranked = top_projects(counts)

    assert len(ranked) == min(5, n)
    assert [p.sessions for p in ranked] == sorted((p.sessions for p in ranked), reverse=True)


def test_streaks_empty():
    assert calculate_streaks([], today=date(2024, 1, 1)) == (0, 0)


def test_streaks_scenario_with_trailing_run():
    dates = ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-10"]

    assert calculate_streaks(dates, today=date(2024, 1, 11)) == (3, 1)


def test_streaks_current_requires_recent_activity():
    dates = ["2024-01-01", "2024-01-02", "2024-01-03", "2024-01-10"]

    assert calculate_streaks(dates, today=date(2024, 1, 12)) == (3, 0)


def test_streaks_current_when_active_today():
    dates = ["2024-02-27", "2024-02-28", "2024-02-29", "2024-03-01"]

    assert calculate_streaks(dates, today=date(2024, 3, 1)) == (4, 4)


def test_streaks_single_day():
    assert calculate_streaks(["2024-05-05"], today=date(2024, 12, 31)) == (1, 0)


def test_streaks_accepts_unsorted_duplicates_and_dates():
    dates = [date(2024, 1, 3), "2024-01-01", "2024-01-02", "2024-01-02"]

    assert calculate_streaks(dates, today=date(2024, 1, 4)) == (3, 3)


def test_streaks_longest_not_last():
    start = date(2024, 4, 1)
    dates = [start + timedelta(days=i) for i in range(6)] + [date(2024, 5, 1), date(2024, 5, 2)]

    longest, current = calculate_streaks(dates, today=date(2024, 5, 3))

    assert (longest, current) == (6, 2)


@pytest.mark.parametrize("offsets,today_offset", [
    ([0], 0),
    ([0, 1, 2, 5, 6], 7),
    ([0, 2, 4, 6], 30),
    ([0, 1, 2, 3, 10, 11], 11),
])
def test_streak_bounds(offsets, today_offset):
    base = date(2024, 1, 1)
    dates = [base + timedelta(days=o) for o in offsets]

    longest, current = calculate_streaks(dates, today=base + timedelta(days=today_offset))

    assert longest >= 1
    assert longest >= current >= 0


def test_calculate_derived():
    stats = AggregatedStats(
        total_sessions=6,
        tool_usage={"Read": 10, "Edit": 4},
        language_stats={"Python": 3, "Go": 1},
        project_stats={"api": 4, "web": 2},
        daily_activity={"2024-06-01": 1, "2024-06-02": 4, "2024-06-03": 1},
        hourly_activity={9: 1, 14: 5},
    )

    derived = calculate_derived(stats, today=date(2024, 6, 4))

    assert derived.most_productive_day == DayPick(date="2024-06-02", sessions=4)
    assert derived.most_productive_hour == HourPick(hour=14, sessions=5)
    assert derived.favorite_language == LanguagePick(language="Python", count=3)
    assert derived.most_used_tool == ToolPick(tool="Read", count=10)
    assert derived.top_projects == [ProjectRank("api", 4), ProjectRank("web", 2)]
    assert derived.longest_streak == 3
    assert derived.current_streak == 3


def test_calculate_derived_empty():
    derived = calculate_derived(AggregatedStats(), today=date(2024, 1, 1))

    assert derived.most_productive_day is None
    assert derived.most_productive_hour is None
    assert derived.favorite_language is None
    assert derived.most_used_tool is None
    assert derived.top_projects == []
    assert derived.longest_streak == 0
    assert derived.current_streak == 0
