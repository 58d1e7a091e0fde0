"""Render a finished report for the terminal or as an HTML page."""

import html
from pathlib import Path
from typing import Optional

from .exceptions import ReportWriteError
from .models import Recap, WrappedReport

COLORS = {
    "reset": "\x1b[0m",
    "bright": "\x1b[1m",
    "dim": "\x1b[2m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
}

BOX_WIDTH = 56


def format_hour(hour: int) -> str:
    """Format an hour of day (0-23) as a 12-hour clock label."""
    if hour == 0:
        return "12:00 AM"
    if hour == 12:
        return "12:00 PM"
    if hour < 12:
        return f"{hour}:00 AM"
    return f"{hour - 12}:00 PM"


def render_terminal(report: WrappedReport, recap: Optional[Recap] = None, color: bool = True) -> str:
    """Render the report as text for a terminal.

    Args:
        report: Finished report.
        recap: Optional AI recap shown under the header.
        color: If False, emit no ANSI escape codes.

    Returns:
        Multi-line string ready to print.
    """
    c = COLORS if color else {k: "" for k in COLORS}
    stats = report.stats
    derived = report.derived
    lines = []

    _render_header(lines, c, report.year)

    if recap:
        lines.append(f"  {c['bright']}{recap.headline}{c['reset']}")
        for highlight in recap.highlights:
            lines.append(f"  {c['dim']}- {highlight}{c['reset']}")
        lines.append("")

    _render_section(lines, c, "📊 Your Year in Code")
    _render_stat(lines, c, "🎯", "Total Sessions", stats.total_sessions)
    _render_stat(lines, c, "💬", "Messages Sent", stats.total_messages)
    _render_stat(lines, c, "📂", "Files Accessed", stats.total_files_accessed)
    _render_stat(lines, c, "📝", "Files Modified", stats.total_files_modified)
    _render_stat(lines, c, "✨", "Files Created", stats.total_files_created)
    _render_stat(lines, c, "🔧", "Tool Calls", stats.total_tool_calls)
    if stats.total_duration:
        _render_stat(lines, c, "⏱️", "Hours Coding", stats.total_duration // 60)

    if stats.total_lines_added or stats.total_lines_removed:
        _render_section(lines, c, "💻 Code Changes")
        _render_stat(lines, c, "➕", "Lines Added", stats.total_lines_added)
        _render_stat(lines, c, "➖", "Lines Removed", stats.total_lines_removed)

    if derived.favorite_language:
        _render_section(lines, c, "🌟 Favorite Language")
        _render_highlight(lines, c, derived.favorite_language.language,
                          f"Used in {derived.favorite_language.count} sessions")

    if derived.most_used_tool:
        _render_section(lines, c, "🛠️ Favorite Tool")
        _render_highlight(lines, c, derived.most_used_tool.tool,
                          f"Used {derived.most_used_tool.count} times")

    if derived.top_projects:
        _render_section(lines, c, "🚀 Top Projects")
        for i, project in enumerate(derived.top_projects, 1):
            lines.append(f"  {c['yellow']}{i}. {project.name}{c['reset']} "
                         f"{c['dim']}{c['cyan']}({project.sessions} sessions){c['reset']}")

    _render_section(lines, c, "🔥 Streaks")
    _render_stat(lines, c, "⚡", "Longest Streak", f"{derived.longest_streak} days")
    if derived.current_streak > 0:
        _render_stat(lines, c, "🔥", "Current Streak", f"{derived.current_streak} days")

    if derived.most_productive_hour:
        _render_section(lines, c, "⏰ Most Productive Hour")
        _render_highlight(lines, c, format_hour(derived.most_productive_hour.hour),
                          f"{derived.most_productive_hour.sessions} sessions")

    if derived.most_productive_day:
        _render_section(lines, c, "📅 Busiest Day")
        _render_highlight(lines, c, derived.most_productive_day.date,
                          f"{derived.most_productive_day.sessions} sessions")

    if report.insights:
        _render_section(lines, c, "🏆 Achievements")
        for insight in report.insights:
            lines.append(f"  {c['bright']}{c['green']}{insight.title}{c['reset']}")
            lines.append(f"  {c['dim']}{insight.description}{c['reset']}")
            lines.append("")

    _render_footer(lines, c, report.year)
    return "\n".join(lines)


def _render_header(lines: list, c: dict, year: int) -> None:
    edge = "═" * BOX_WIDTH
    lines.append("")
    lines.append(f"{c['bright']}{c['cyan']}╔{edge}╗{c['reset']}")
    lines.append(f"{c['bright']}{c['cyan']}║{c['reset']}{c['yellow']}"
                 f"{'CLAUDE CODE WRAPPED':^{BOX_WIDTH}}{c['cyan']}║{c['reset']}")
    lines.append(f"{c['bright']}{c['cyan']}║{c['reset']}{c['yellow']}"
                 f"{str(year):^{BOX_WIDTH}}{c['cyan']}║{c['reset']}")
    lines.append(f"{c['bright']}{c['cyan']}╚{edge}╝{c['reset']}")
    lines.append("")


def _render_section(lines: list, c: dict, title: str) -> None:
    lines.append("")
    lines.append(f"{c['bright']}{c['magenta']}{title}{c['reset']}")
    lines.append(f"{c['bright']}{c['magenta']}{'─' * len(title)}{c['reset']}")


def _render_stat(lines: list, c: dict, emoji: str, label: str, value) -> None:
    formatted = f"{value:,}" if isinstance(value, int) else value
    lines.append(f"{emoji} {c['cyan']}{label}:{c['reset']} {c['bright']}{c['yellow']}{formatted}{c['reset']}")


def _render_highlight(lines: list, c: dict, main: str, sub: str) -> None:
    lines.append(f"  {c['bright']}{c['yellow']}{main}{c['reset']}")
    lines.append(f"  {c['dim']}{c['cyan']}{sub}{c['reset']}")


def _render_footer(lines: list, c: dict, year: int) -> None:
    lines.append("")
    lines.append(f"{c['bright']}{c['cyan']}{'═' * BOX_WIDTH}{c['reset']}")
    lines.append(f"{c['bright']}{c['cyan']}  🚀 Keep coding in {year + 1}!{c['reset']}")
    lines.append(f"{c['bright']}{c['cyan']}{'═' * BOX_WIDTH}{c['reset']}")
    lines.append("")


HTML_STYLE = """
* { margin: 0; padding: 0; box-sizing: border-box; }
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
       background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: #fff; }
.container { max-width: 1200px; margin: 0 auto; padding: 20px; }
.slide { min-height: 100vh; display: flex; flex-direction: column; justify-content: center;
         align-items: center; padding: 60px 20px; }
.hero { text-align: center; }
.hero h1 { font-size: 5rem; font-weight: 900; margin-bottom: 20px; }
.hero p { font-size: 1.5rem; opacity: 0.9; }
.card { background: rgba(255, 255, 255, 0.1); border-radius: 20px; padding: 40px; margin: 20px 0;
        width: 100%; max-width: 600px; border: 1px solid rgba(255, 255, 255, 0.2); }
.card h2 { font-size: 2.5rem; margin-bottom: 10px; }
.number { font-size: 4rem; font-weight: 900; color: #ffd700; margin: 20px 0; }
.label { font-size: 1.3rem; opacity: 0.8; }
.grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(250px, 1fr)); gap: 20px;
        width: 100%; max-width: 900px; }
.grid .number { font-size: 2.5rem; }
.achievement { background: linear-gradient(135deg, #f093fb 0%, #f5576c 100%); border-radius: 15px;
               padding: 30px; margin: 15px 0; width: 100%; max-width: 600px; }
.list { list-style: none; width: 100%; max-width: 600px; }
.list li { background: rgba(255, 255, 255, 0.1); border-radius: 10px; padding: 15px 25px; margin: 10px 0;
           display: flex; justify-content: space-between; font-size: 1.3rem; }
.list .count { color: #ffd700; font-weight: 900; }
"""


def render_html(report: WrappedReport, recap: Optional[Recap] = None) -> str:
    """Render the report as a standalone HTML page of slides."""
    stats = report.stats
    derived = report.derived
    esc = html.escape
    slides = []

    hero = f'<h1>🎉 {report.year}</h1><p>Your Claude Code Wrapped</p>'
    if recap:
        hero += f'<p>{esc(recap.headline)}</p>'
        hero += "".join(f'<p class="label">{esc(h)}</p>' for h in recap.highlights)
    slides.append(f'<div class="slide hero">{hero}</div>')

    slides.append(_card("You had", f"{stats.total_sessions:,}", "coding sessions this year"))
    slides.append(_card("You sent", f"{stats.total_messages:,}", "messages to Claude"))

    cells = [
        ("Files Accessed", stats.total_files_accessed),
        ("Files Modified", stats.total_files_modified),
        ("Files Created", stats.total_files_created),
        ("Tool Calls", stats.total_tool_calls),
    ]
    grid = "".join(
        f'<div class="card"><div class="label">{label}</div><div class="number">{value:,}</div></div>'
        for label, value in cells
    )
    slides.append(f'<div class="slide"><h2>Your Impact</h2><div class="grid">{grid}</div></div>')

    if derived.favorite_language:
        slides.append(_card("Your favorite language", esc(derived.favorite_language.language),
                            f"Used in {derived.favorite_language.count} sessions"))
    if derived.most_used_tool:
        slides.append(_card("Your favorite tool", esc(derived.most_used_tool.tool),
                            f"Used {derived.most_used_tool.count} times"))
    if derived.top_projects:
        items = "".join(
            f'<li><span>{i}. {esc(p.name)}</span><span class="count">{p.sessions}</span></li>'
            for i, p in enumerate(derived.top_projects, 1)
        )
        slides.append(f'<div class="slide"><h2>Top Projects</h2><ul class="list">{items}</ul></div>')
    if derived.most_productive_hour:
        slides.append(_card("You code most at", format_hour(derived.most_productive_hour.hour),
                            f"{derived.most_productive_hour.sessions} sessions at this hour"))
    slides.append(_card("Longest streak", f"{derived.longest_streak}",
                        f"days in a row (current: {derived.current_streak})"))
    if stats.total_duration > 0:
        slides.append(_card("You spent", f"{stats.total_duration // 60}", "hours coding with Claude"))

    if report.insights:
        badges = "".join(
            f'<div class="achievement"><h3>{esc(i.title)}</h3><p>{esc(i.description)}</p></div>'
            for i in report.insights
        )
        slides.append(f'<div class="slide"><h2>Achievements</h2>{badges}</div>')

    slides.append(f'<div class="slide hero"><h1>🚀</h1><p>Keep coding in {report.year + 1}!</p></div>')

    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n<meta charset="UTF-8">\n'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">\n'
        f"<title>Claude Code Wrapped {report.year}</title>\n"
        f"<style>{HTML_STYLE}</style>\n</head>\n<body>\n"
        f'<div class="container">\n' + "\n".join(slides) + "\n</div>\n</body>\n</html>\n"
    )


def _card(title: str, number: str, label: str) -> str:
    return (
        f'<div class="slide"><div class="card"><h2>{title}</h2>'
        f'<div class="number">{number}</div><div class="label">{label}</div></div></div>'
    )


def save_html(report: WrappedReport, output_dir="./output", recap: Optional[Recap] = None) -> Path:
    """Write the HTML page as wrapped_<year>.html.

    Raises:
        ReportWriteError: If the directory or file cannot be written.
    """
    output_dir = Path(output_dir)
    output_path = output_dir / f"wrapped_{report.year}.html"
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(render_html(report, recap))
    except OSError as e:
        raise ReportWriteError(output_path, str(e)) from e

    return output_path
