"""Wrapped - Your year in code, from Claude Code sessions.

Wrapped reads Claude Code session logs (or a store of manually recorded
session summaries) and aggregates them into a yearly report: totals,
favorite language and tool, top projects, busiest day and hour, streaks
and achievements.

Basic usage:
    from wrapped import generate_from_logs, render_terminal

    report = generate_from_logs(2024)
    print(render_terminal(report))

From analyzed sessions:
    from wrapped import iter_sessions, build_report, save_report

    sessions = iter_sessions(year=2024)
    report = build_report(sessions, 2024)
    save_report(report, "./output")  # writes wrapped_2024.json
"""

__version__ = "0.1.0"

from .models import (
    AggregatedStats,
    DerivedStats,
    Insight,
    RawEvent,
    Recap,
    SessionStats,
    WrappedReport,
)
from .exceptions import (
    WrappedError,
    NoSessionsError,
    PersistenceError,
    ReportWriteError,
    SessionStoreError,
)
from .parser import (
    analyze_session,
    find_session_files,
    iter_sessions,
    parse_session,
    read_events,
)
from .aggregator import StatsAccumulator, aggregate
from .stats import calculate_derived, calculate_streaks
from .insights import evaluate_insights
from .collector import SessionStore, session_from_record
from .report import build_report, generate_from_logs, generate_from_store, save_report
from .renderer import render_html, render_terminal, save_html
from .recap import summarize_year
from .cli import main

__all__ = [
    # Models
    "AggregatedStats",
    "DerivedStats",
    "Insight",
    "RawEvent",
    "Recap",
    "SessionStats",
    "WrappedReport",
    # Errors
    "WrappedError",
    "NoSessionsError",
    "PersistenceError",
    "ReportWriteError",
    "SessionStoreError",
    # Parser
    "analyze_session",
    "find_session_files",
    "iter_sessions",
    "parse_session",
    "read_events",
    # Aggregation
    "StatsAccumulator",
    "aggregate",
    "calculate_derived",
    "calculate_streaks",
    "evaluate_insights",
    # Recorded sessions
    "SessionStore",
    "session_from_record",
    # Report
    "build_report",
    "generate_from_logs",
    "generate_from_store",
    "save_report",
    # Renderer
    "render_html",
    "render_terminal",
    "save_html",
    "summarize_year",
    # CLI
    "main",
]
