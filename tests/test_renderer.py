"""Tests for terminal and HTML rendering."""

from datetime import datetime, timezone

import pytest

from wrapped.exceptions import ReportWriteError
from wrapped.models import (
    AggregatedStats,
    DerivedStats,
    HourPick,
    Insight,
    LanguagePick,
    ProjectRank,
    Recap,
    ToolPick,
    WrappedReport,
)
from wrapped.renderer import format_hour, render_html, render_terminal, save_html


@pytest.fixture
def report():
    return WrappedReport(
        year=2024,
        stats=AggregatedStats(
            total_sessions=1234, total_messages=56, total_duration=125,
            total_lines_added=10, total_lines_removed=2,
        ),
        derived=DerivedStats(
            most_productive_hour=HourPick(hour=15, sessions=9),
            favorite_language=LanguagePick(language="Python", count=40),
            most_used_tool=ToolPick(tool="Edit", count=300),
            top_projects=[ProjectRank("<script>", 3), ProjectRank("api", 2)],
            longest_streak=7,
            current_streak=2,
        ),
        insights=[Insight("achievement", "⚡ On Fire", "Your longest streak was 7 days!")],
        generated_at=datetime(2024, 12, 31, tzinfo=timezone.utc),
    )


@pytest.mark.parametrize("hour,label", [
    (0, "12:00 AM"),
    (9, "9:00 AM"),
    (12, "12:00 PM"),
    (23, "11:00 PM"),
])
def test_format_hour(hour, label):
    assert format_hour(hour) == label


def test_render_terminal_plain(report):
    text = render_terminal(report, color=False)

    assert "\x1b[" not in text
    assert "Total Sessions: 1,234" in text
    assert "Python" in text
    assert "1. <script> (3 sessions)" in text
    assert "Longest Streak: 7 days" in text
    assert "Current Streak: 2 days" in text
    assert "3:00 PM" in text
    assert "⚡ On Fire" in text
    assert "Keep coding in 2025!" in text


def test_render_terminal_colored_with_recap(report):
    text = render_terminal(report, Recap("A big year", ["Lots of Python"]))

    assert "\x1b[" in text
    assert "A big year" in text
    assert "- Lots of Python" in text


def test_render_html_escapes(report):
    page = render_html(report)

    assert page.startswith("<!DOCTYPE html>")
    assert "<title>Claude Code Wrapped 2024</title>" in page
    assert "&lt;script&gt;" in page
    assert "<script>" not in page
    assert "1,234" in page
    assert "Edit" in page


def test_save_html(report, tmp_path):
    path = save_html(report, tmp_path / "out")

    assert path.name == "wrapped_2024.html"
    assert "Wrapped 2024" in path.read_text(encoding="utf-8")


def test_save_html_failure(report, tmp_path):
    blocker = tmp_path / "out"
    blocker.write_text("file")

    with pytest.raises(ReportWriteError):
        save_html(report, blocker)
