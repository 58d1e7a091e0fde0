"""Derived statistics: best buckets, project ranking and streaks."""

from datetime import date
from typing import Iterable, Optional, Tuple

from .models import (
    AggregatedStats,
    DayPick,
    DerivedStats,
    HourPick,
    LanguagePick,
    ProjectRank,
    ToolPick,
)

TOP_PROJECTS_LIMIT = 5


def best_bucket(mapping: dict) -> Optional[Tuple[object, int]]:
    """Return the (key, count) pair with the highest count.

    The first key whose count is strictly greater than the running
    maximum wins, so ties go to whichever key the mapping yields first.
    That order is an accident of how the mapping was built; callers
    should not rely on a particular winner among tied keys.
    """
    best = None
    max_count = 0
    for key, count in mapping.items():
        if count > max_count:
            max_count = count
            best = (key, count)
    return best


def top_projects(project_stats: dict, limit: int = TOP_PROJECTS_LIMIT) -> list:
    """Rank projects by session count, keeping original order on ties."""
    ranked = sorted(project_stats.items(), key=lambda kv: kv[1], reverse=True)
    return [ProjectRank(name=name, sessions=count) for name, count in ranked[:limit]]


def calculate_streaks(dates: Iterable, today: date) -> Tuple[int, int]:
    """Compute the longest and current runs of consecutive active days.

    Args:
        dates: Active days as date objects or ISO date strings.
        today: Reference day for deciding whether the last run is current.

    Returns:
        (longest_streak, current_streak). The current streak is the final
        run if the last active day is today or yesterday, otherwise 0.
    """
    days = sorted({d if isinstance(d, date) else date.fromisoformat(d) for d in dates})
    if not days:
        return 0, 0

    longest = 1
    run = 1
    for prev, curr in zip(days, days[1:]):
        if (curr - prev).days == 1:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    longest = max(longest, run)

    current = run if (today - days[-1]).days <= 1 else 0
    return longest, current


def calculate_derived(stats: AggregatedStats, today: Optional[date] = None) -> DerivedStats:
    """Compute the values that need the complete aggregate."""
    today = today or date.today()

    day = best_bucket(stats.daily_activity)
    hour = best_bucket(stats.hourly_activity)
    language = best_bucket(stats.language_stats)
    tool = best_bucket(stats.tool_usage)
    longest, current = calculate_streaks(stats.daily_activity.keys(), today)

    return DerivedStats(
        most_productive_day=DayPick(*day) if day else None,
        most_productive_hour=HourPick(int(hour[0]), hour[1]) if hour else None,
        favorite_language=LanguagePick(*language) if language else None,
        most_used_tool=ToolPick(*tool) if tool else None,
        top_projects=top_projects(stats.project_stats),
        longest_streak=longest,
        current_streak=current,
    )
