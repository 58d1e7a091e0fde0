"""Fold per-session statistics into cumulative totals."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Iterable, Optional

from .date_utils import localize
from .models import AggregatedStats, SessionStats


@dataclass
class StatsAccumulator:
    """Running state of the aggregation fold.

    Every field is either a sum, a set union or a per-key sum, so two
    accumulators built from disjoint batches of sessions can be merged
    in any order and give the same result as one sequential fold.
    """
    sessions: int = 0
    messages: int = 0
    user_messages: int = 0
    assistant_messages: int = 0
    duration: int = 0
    thinking_blocks: int = 0
    tool_calls: int = 0
    lines_added: int = 0
    lines_removed: int = 0
    files_accessed: set = field(default_factory=set)
    files_modified: set = field(default_factory=set)
    files_created: set = field(default_factory=set)
    git_branches: set = field(default_factory=set)
    tool_usage: Counter = field(default_factory=Counter)
    language_stats: Counter = field(default_factory=Counter)
    project_stats: Counter = field(default_factory=Counter)
    daily_activity: Counter = field(default_factory=Counter)
    hourly_activity: Counter = field(default_factory=Counter)

    def add(self, session: SessionStats, tz: Optional[tzinfo] = None) -> "StatsAccumulator":
        """Fold one session in. Returns self."""
        self.sessions += 1
        self.messages += session.message_count
        self.user_messages += session.user_messages
        self.assistant_messages += session.assistant_messages
        self.duration += session.duration
        self.thinking_blocks += session.thinking_blocks
        self.tool_calls += sum(session.tool_usage.values())
        self.lines_added += session.lines_added
        self.lines_removed += session.lines_removed

        self.files_accessed.update(session.files_accessed)
        self.files_modified.update(session.files_modified)
        self.files_created.update(session.files_created)
        if session.git_branch:
            self.git_branches.add(session.git_branch)

        self.tool_usage.update(session.tool_usage)
        # Languages and projects count sessions, not files or calls
        self.language_stats.update(session.languages)
        if session.project:
            self.project_stats[session.project] += 1

        if session.start_time is not None:
            start = localize(session.start_time, tz)
            self.daily_activity[start.date().isoformat()] += 1
            self.hourly_activity[start.hour] += 1

        return self

    def merge(self, other: "StatsAccumulator") -> "StatsAccumulator":
        """Combine two partial folds into a new accumulator."""
        merged = StatsAccumulator()
        for acc in (self, other):
            merged.sessions += acc.sessions
            merged.messages += acc.messages
            merged.user_messages += acc.user_messages
            merged.assistant_messages += acc.assistant_messages
            merged.duration += acc.duration
            merged.thinking_blocks += acc.thinking_blocks
            merged.tool_calls += acc.tool_calls
            merged.lines_added += acc.lines_added
            merged.lines_removed += acc.lines_removed
            merged.files_accessed |= acc.files_accessed
            merged.files_modified |= acc.files_modified
            merged.files_created |= acc.files_created
            merged.git_branches |= acc.git_branches
            merged.tool_usage.update(acc.tool_usage)
            merged.language_stats.update(acc.language_stats)
            merged.project_stats.update(acc.project_stats)
            merged.daily_activity.update(acc.daily_activity)
            merged.hourly_activity.update(acc.hourly_activity)
        return merged

    def finalize(self) -> AggregatedStats:
        """Collapse sets to counts and freeze the result."""
        return AggregatedStats(
            total_sessions=self.sessions,
            total_messages=self.messages,
            total_user_messages=self.user_messages,
            total_assistant_messages=self.assistant_messages,
            total_duration=self.duration,
            total_thinking_blocks=self.thinking_blocks,
            total_tool_calls=self.tool_calls,
            total_lines_added=self.lines_added,
            total_lines_removed=self.lines_removed,
            total_files_accessed=len(self.files_accessed),
            total_files_modified=len(self.files_modified),
            total_files_created=len(self.files_created),
            total_git_branches=len(self.git_branches),
            tool_usage=dict(self.tool_usage),
            language_stats=dict(self.language_stats),
            project_stats=dict(self.project_stats),
            daily_activity=dict(sorted(self.daily_activity.items())),
            hourly_activity=dict(sorted(self.hourly_activity.items())),
        )


def aggregate(sessions: Iterable[SessionStats], tz: Optional[tzinfo] = None) -> AggregatedStats:
    """Aggregate sessions into cumulative statistics.

    Args:
        sessions: Per-session statistics, in any order.
        tz: Zone used to bucket start times into days and hours
            (local time when None).
    """
    acc = StatsAccumulator()
    for session in sessions:
        acc.add(session, tz=tz)
    return acc.finalize()
