"""Tests for folding sessions into aggregated stats."""

from collections import Counter
from datetime import datetime, timedelta, timezone
from itertools import permutations

import pytest

from wrapped.aggregator import StatsAccumulator, aggregate
from wrapped.models import SessionStats
from wrapped.parser import iter_sessions

UTC = timezone.utc


def make_session(**kwargs):
    defaults = {"start_time": datetime(2024, 6, 1, 10, tzinfo=UTC)}
    defaults.update(kwargs)
    for key in ("files_accessed", "files_modified", "files_created", "languages"):
        if key in defaults:
            defaults[key] = frozenset(defaults[key])
    if "tool_usage" in defaults:
        defaults["tool_usage"] = Counter(defaults["tool_usage"])
    return SessionStats(**defaults)


@pytest.fixture
def sessions():
    a = make_session(
        session_id="a", project="api", message_count=10, user_messages=4, assistant_messages=6,
        duration=30, thinking_blocks=2, tool_usage={"Edit": 3, "Read": 5},
        files_accessed={"/x/a.py", "/x/b.py"}, files_modified={"/x/a.py"},
        languages={"Python"}, git_branch="main",
        start_time=datetime(2024, 6, 1, 23, 30, tzinfo=UTC),
    )
    b = make_session(
        session_id="b", project="api", message_count=4, user_messages=2, assistant_messages=2,
        duration=12, tool_usage={"Edit": 1, "Bash": 2},
        files_accessed={"/x/a.py", "/x/c.ts"}, files_modified={"/x/a.py", "/x/c.ts"},
        files_created={"/x/c.ts"}, languages={"Python", "TypeScript"}, git_branch="main",
        start_time=datetime(2024, 6, 2, 9, 0, tzinfo=UTC),
    )
    c = make_session(
        session_id="c", project="web", message_count=1, assistant_messages=1,
        tool_usage={"Read": 1}, files_accessed={"/y/index.html"},
        languages={"HTML"}, git_branch="feature", lines_added=40, lines_removed=3,
        start_time=datetime(2024, 6, 2, 9, 45, tzinfo=UTC),
    )
    return [a, b, c]


def test_aggregate_empty():
    stats = aggregate([])

    assert stats.total_sessions == 0
    assert stats.total_files_accessed == 0
    assert stats.daily_activity == {}
    assert stats.hourly_activity == {}


def test_aggregate_sums_scalars(sessions):
    stats = aggregate(sessions, tz=UTC)

    assert stats.total_sessions == 3
    assert stats.total_messages == 15
    assert stats.total_user_messages == 6
    assert stats.total_assistant_messages == 9
    assert stats.total_duration == 42
    assert stats.total_thinking_blocks == 2
    assert stats.total_tool_calls == 12
    assert stats.total_lines_added == 40
    assert stats.total_lines_removed == 3


def test_set_totals_are_global_unions(sessions):
    stats = aggregate(sessions, tz=UTC)

    assert stats.total_files_accessed == 4
    assert stats.total_files_modified == 2
    assert stats.total_files_created == 1
    assert stats.total_git_branches == 2

    # Strictly less than the per-session sum when paths repeat
    assert stats.total_files_accessed < sum(len(s.files_accessed) for s in sessions)
    assert stats.total_git_branches < sum(1 for s in sessions if s.git_branch)


def test_histograms(sessions):
    stats = aggregate(sessions, tz=UTC)

    assert stats.tool_usage == {"Edit": 4, "Read": 6, "Bash": 2}
    assert stats.language_stats == {"Python": 2, "TypeScript": 1, "HTML": 1}
    assert stats.project_stats == {"api": 2, "web": 1}
    assert stats.daily_activity == {"2024-06-01": 1, "2024-06-02": 2}
    assert stats.hourly_activity == {9: 2, 23: 1}


def test_time_buckets_follow_time_zone(sessions):
    plus_two = timezone(timedelta(hours=2))

    stats = aggregate(sessions, tz=plus_two)

    # 2024-06-01 23:30 UTC is 01:30 on 2024-06-02 at UTC+2
    assert stats.daily_activity == {"2024-06-02": 3}
    assert stats.hourly_activity == {1: 1, 11: 2}


def test_session_without_start_time_is_not_bucketed():
    stats = aggregate([make_session(start_time=None, message_count=3)], tz=UTC)

    assert stats.total_sessions == 1
    assert stats.total_messages == 3
    assert stats.daily_activity == {}
    assert stats.hourly_activity == {}


def test_session_without_project_is_not_counted_in_projects():
    stats = aggregate([make_session(project=None)], tz=UTC)

    assert stats.project_stats == {}


def test_order_independent(sessions):
    results = [aggregate(list(order), tz=UTC) for order in permutations(sessions)]

    assert all(r == results[0] for r in results)


def test_merge_matches_sequential_fold(sessions):
    a, b, c = sessions
    left = StatsAccumulator().add(a, tz=UTC)
    right = StatsAccumulator().add(b, tz=UTC).add(c, tz=UTC)

    merged = left.merge(right).finalize()

    assert merged == aggregate(sessions, tz=UTC)
    assert right.merge(left).finalize() == merged


def test_merge_is_associative(sessions):
    a, b, c = (StatsAccumulator().add(s, tz=UTC) for s in sessions)

    assert a.merge(b).merge(c).finalize() == a.merge(b.merge(c)).finalize()


def test_merge_does_not_mutate_inputs(sessions):
    left = StatsAccumulator().add(sessions[0], tz=UTC)
    right = StatsAccumulator().add(sessions[1], tz=UTC)

    left.merge(right)

    assert left.sessions == 1
    assert left.files_accessed == {"/x/a.py", "/x/b.py"}


def test_aggregate_from_logs(projects_dir):
    stats = aggregate(iter_sessions(projects_dir, year=2024, tz=UTC), tz=UTC)

    assert stats.total_sessions == 2
    assert stats.total_messages == 5
    assert stats.total_duration == 36
    assert stats.total_files_accessed == 2
    assert stats.total_files_modified == 2
    assert stats.total_files_created == 1
    assert stats.total_git_branches == 2
    assert stats.project_stats == {"/work/api": 2}
    assert stats.daily_activity == {"2024-03-01": 1, "2024-03-02": 1}
    assert stats.hourly_activity == {9: 1, 22: 1}
