"""Data models for wrapped usage statistics."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Union


@dataclass(frozen=True)
class ToolUse:
    """A tool invocation inside a message."""
    name: str
    input: dict


@dataclass(frozen=True)
class Thinking:
    """A thinking block. Only its presence matters."""


@dataclass(frozen=True)
class OtherContent:
    """Any content item we do not track (text, images, tool results...)."""
    kind: str = ""


ContentItem = Union[ToolUse, Thinking, OtherContent]


@dataclass(frozen=True)
class RawEvent:
    """One line of a session log."""
    type: str
    user_type: Optional[str] = None
    content: Optional[tuple] = None  # tuple of ContentItem
    tool_use_result: Optional[dict] = None
    timestamp: Optional[str] = None
    session_id: Optional[str] = None
    cwd: Optional[str] = None
    git_branch: Optional[str] = None


@dataclass
class SessionStats:
    """Statistics reduced from a single session."""
    session_id: Optional[str] = None
    project: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    duration: int = 0  # minutes
    message_count: int = 0
    user_messages: int = 0
    assistant_messages: int = 0
    tool_calls: list = field(default_factory=list)
    tool_usage: Counter = field(default_factory=Counter)
    files_accessed: frozenset = frozenset()
    files_modified: frozenset = frozenset()
    files_created: frozenset = frozenset()
    languages: frozenset = frozenset()
    bash_commands: list = field(default_factory=list)
    git_branch: Optional[str] = None
    thinking_blocks: int = 0
    lines_added: int = 0
    lines_removed: int = 0
    source: Optional[str] = None


@dataclass(frozen=True)
class AggregatedStats:
    """Cumulative totals across every session in scope.

    Set-valued fields (files, branches) are unioned across sessions and
    only then collapsed to counts, so a file touched in two sessions
    counts once.
    """
    total_sessions: int = 0
    total_messages: int = 0
    total_user_messages: int = 0
    total_assistant_messages: int = 0
    total_duration: int = 0
    total_thinking_blocks: int = 0
    total_tool_calls: int = 0
    total_lines_added: int = 0
    total_lines_removed: int = 0
    total_files_accessed: int = 0
    total_files_modified: int = 0
    total_files_created: int = 0
    total_git_branches: int = 0
    tool_usage: dict = field(default_factory=dict)
    language_stats: dict = field(default_factory=dict)
    project_stats: dict = field(default_factory=dict)
    daily_activity: dict = field(default_factory=dict)
    hourly_activity: dict = field(default_factory=dict)


@dataclass(frozen=True)
class DayPick:
    date: str
    sessions: int


@dataclass(frozen=True)
class HourPick:
    hour: int
    sessions: int


@dataclass(frozen=True)
class LanguagePick:
    language: str
    count: int


@dataclass(frozen=True)
class ToolPick:
    tool: str
    count: int


@dataclass(frozen=True)
class ProjectRank:
    name: str
    sessions: int


@dataclass(frozen=True)
class DerivedStats:
    """Values selected or ranked from the aggregate after the fold."""
    most_productive_day: Optional[DayPick] = None
    most_productive_hour: Optional[HourPick] = None
    favorite_language: Optional[LanguagePick] = None
    most_used_tool: Optional[ToolPick] = None
    top_projects: list = field(default_factory=list)
    longest_streak: int = 0
    current_streak: int = 0


@dataclass(frozen=True)
class Insight:
    """An achievement or badge earned by the final stats."""
    type: str  # "achievement" or "badge"
    title: str
    description: str

    def to_dict(self) -> dict:
        return {"type": self.type, "title": self.title, "description": self.description}


@dataclass
class WrappedReport:
    """The finished report handed to renderers."""
    year: int
    stats: AggregatedStats
    derived: DerivedStats
    insights: list
    generated_at: datetime

    def to_dict(self) -> dict:
        """Serialize to the JSON report layout (camelCase keys)."""
        s = self.stats
        d = self.derived
        stats = {
            "totalSessions": s.total_sessions,
            "totalMessages": s.total_messages,
            "totalUserMessages": s.total_user_messages,
            "totalAssistantMessages": s.total_assistant_messages,
            "totalDuration": s.total_duration,
            "totalThinkingBlocks": s.total_thinking_blocks,
            "totalToolCalls": s.total_tool_calls,
            "totalLinesAdded": s.total_lines_added,
            "totalLinesRemoved": s.total_lines_removed,
            "totalFilesAccessed": s.total_files_accessed,
            "totalFilesModified": s.total_files_modified,
            "totalFilesCreated": s.total_files_created,
            "totalGitBranches": s.total_git_branches,
            "toolUsage": dict(s.tool_usage),
            "languageStats": dict(s.language_stats),
            "projectStats": dict(s.project_stats),
            "dailyActivity": dict(s.daily_activity),
            "hourlyActivity": {str(h): n for h, n in s.hourly_activity.items()},
            "mostProductiveDay": _pick(d.most_productive_day, "date", "sessions"),
            "mostProductiveHour": _pick(d.most_productive_hour, "hour", "sessions"),
            "favoriteLanguage": _pick(d.favorite_language, "language", "count"),
            "mostUsedTool": _pick(d.most_used_tool, "tool", "count"),
            "topProjects": [{"name": p.name, "sessions": p.sessions} for p in d.top_projects],
            "longestStreak": d.longest_streak,
            "currentStreak": d.current_streak,
        }
        return {
            "year": self.year,
            "stats": stats,
            "insights": [i.to_dict() for i in self.insights],
            "generatedAt": self.generated_at.isoformat(),
        }


def _pick(value, *attrs) -> Optional[dict]:
    if value is None:
        return None
    return {attr: getattr(value, attr) for attr in attrs}


@dataclass
class Recap:
    """Short AI-written summary of a year."""
    headline: str
    highlights: list
