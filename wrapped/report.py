"""Assemble and persist the yearly report."""

import json
import logging
from datetime import date, datetime, timezone, tzinfo
from pathlib import Path
from typing import Iterable, Optional

from .aggregator import aggregate
from .collector import SessionStore, session_from_record
from .exceptions import NoSessionsError, ReportWriteError
from .insights import evaluate_insights
from .models import SessionStats, WrappedReport
from .parser import iter_sessions
from .stats import calculate_derived

logger = logging.getLogger(__name__)


def build_report(
    sessions: Iterable[SessionStats],
    year: int,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
    now: Optional[datetime] = None,
) -> WrappedReport:
    """Aggregate sessions and compute derived stats and insights.

    Args:
        sessions: Per-session stats already filtered to the year.
        year: Report year.
        today: Reference day for the current streak. Defaults to today.
        tz: Zone for day/hour bucketing (local time when None).
        now: Generation timestamp. Defaults to the current UTC time.

    Raises:
        NoSessionsError: If sessions is empty.
    """
    sessions = list(sessions)
    if not sessions:
        raise NoSessionsError(year)

    stats = aggregate(sessions, tz=tz)
    derived = calculate_derived(stats, today=today)
    insights = evaluate_insights(stats, derived)
    logger.debug("Aggregated %d sessions, %d insights", stats.total_sessions, len(insights))

    return WrappedReport(
        year=year,
        stats=stats,
        derived=derived,
        insights=insights,
        generated_at=now or datetime.now(timezone.utc),
    )


def generate_from_logs(
    year: int,
    projects_dir: Optional[Path] = None,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> WrappedReport:
    """Build a report from Claude Code session logs."""
    return build_report(iter_sessions(projects_dir, year=year, tz=tz), year, today=today, tz=tz)


def generate_from_store(
    year: int,
    store: SessionStore,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
) -> WrappedReport:
    """Build a report from manually recorded session summaries."""
    records = store.sessions_for_year(year, tz=tz)
    return build_report((session_from_record(r) for r in records), year, today=today, tz=tz)


def save_report(report: WrappedReport, output_dir="./output") -> Path:
    """Write the report as wrapped_<year>.json.

    Raises:
        ReportWriteError: If the directory or file cannot be written.
    """
    output_dir = Path(output_dir)
    output_path = output_dir / f"wrapped_{report.year}.json"
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise ReportWriteError(output_path, str(e)) from e

    return output_path
