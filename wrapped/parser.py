"""Read Claude Code session logs and reduce each session to SessionStats."""

import json
import logging
import os
from collections import Counter
from datetime import tzinfo
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .date_utils import localize, parse_timestamp
from .filters import (
    MUTATING_TOOLS,
    SHELL_TOOL,
    created_file_path,
    detect_language,
    is_external_user_message,
)
from .models import ContentItem, OtherContent, RawEvent, SessionStats, Thinking, ToolUse

logger = logging.getLogger(__name__)


def get_claude_projects_dir() -> Path:
    """Get the Claude Code projects directory."""
    config_dir = os.environ.get("CLAUDE_CONFIG_DIR")
    if config_dir:
        return Path(config_dir).expanduser() / "projects"
    return Path.home() / ".claude" / "projects"


def project_from_dir_name(name: str) -> str:
    """Convert Claude's project directory name back to a filesystem path.

    The encoding replaces "/" with "-", so hyphens inside directory
    names cannot be told apart and come back as "/".
    """
    return "/" + name.lstrip("-").replace("-", "/")


def find_session_files(projects_dir: Optional[Path] = None) -> list:
    """Find every session log one level below the projects directory.

    Returns:
        Sorted list of paths. Empty if the directory does not exist.
    """
    projects_dir = projects_dir or get_claude_projects_dir()
    if not projects_dir.is_dir():
        return []

    try:
        project_dirs = sorted(projects_dir.iterdir())
    except OSError as e:
        logger.warning("Cannot list projects directory %s: %s", projects_dir, e)
        return []

    files = []
    for project_dir in project_dirs:
        if not project_dir.is_dir():
            continue
        try:
            files.extend(sorted(project_dir.glob("*.jsonl")))
        except OSError as e:
            logger.warning("Skipping unreadable project directory %s: %s", project_dir, e)

    return files


def list_sessions(
    projects_dir: Optional[Path] = None,
    year: Optional[int] = None,
    tz: Optional[tzinfo] = None,
) -> list:
    """List discovered sessions with their start time.

    Args:
        projects_dir: Root of the per-project log directories.
        year: If given, keep only sessions whose first event falls in this year.
        tz: Zone used for the year check and start_time (local time when None).

    Returns:
        List of dicts with session_id, project, path, start_time.
    """
    result = []
    for path in find_session_files(projects_dir):
        events = read_events(path)
        first = next(events, None)
        events.close()
        if first is None:
            continue
        start = parse_timestamp(first.timestamp)
        if start is not None:
            start = localize(start, tz)
        if year is not None and (start is None or start.year != year):
            continue
        result.append({
            "session_id": path.stem,
            "project": first.cwd or project_from_dir_name(path.parent.name),
            "path": path,
            "start_time": start,
        })

    return result


def read_events(session_path: Path) -> Iterator[RawEvent]:
    """Yield the events of one session log in file order.

    Lines that are not UTF-8 encoded JSON objects are skipped with a
    warning; the rest of the file is still read.
    """
    try:
        f = open(session_path, "rb")
    except OSError as e:
        logger.warning("Skipping unreadable session file %s: %s", session_path, e)
        return

    with f:
        for lineno, raw in enumerate(f, start=1):
            if not raw.strip():
                continue

            try:
                entry = json.loads(raw.decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.warning("%s:%d: skipping malformed line (%s)", session_path, lineno, e)
                continue

            if not isinstance(entry, dict):
                logger.warning("%s:%d: skipping non-object line", session_path, lineno)
                continue

            yield parse_event(entry)


def parse_event(entry: dict) -> RawEvent:
    """Build a RawEvent from one decoded log line, tolerating missing fields."""
    message = entry.get("message")
    content = None
    if isinstance(message, dict) and isinstance(message.get("content"), list):
        content = tuple(parse_content_item(item) for item in message["content"])

    tool_use_result = entry.get("toolUseResult")
    if not isinstance(tool_use_result, dict):
        tool_use_result = None

    return RawEvent(
        type=_string(entry.get("type")) or "",
        user_type=_string(entry.get("userType")),
        content=content,
        tool_use_result=tool_use_result,
        timestamp=_string(entry.get("timestamp")),
        session_id=_string(entry.get("sessionId")),
        cwd=_string(entry.get("cwd")),
        git_branch=_string(entry.get("gitBranch")),
    )


def _string(value) -> Optional[str]:
    # Header fields are used as set members and dict keys
    return value if isinstance(value, str) and value else None


def parse_content_item(item) -> ContentItem:
    """Map a raw content block onto ToolUse, Thinking or OtherContent."""
    if not isinstance(item, dict):
        return OtherContent()

    kind = item.get("type")
    if kind == "tool_use" and isinstance(item.get("name"), str):
        tool_input = item.get("input")
        return ToolUse(name=item["name"], input=tool_input if isinstance(tool_input, dict) else {})
    if kind == "thinking":
        return Thinking()

    return OtherContent(kind=kind if isinstance(kind, str) else "")


def parse_session(session_path: Path) -> SessionStats:
    """Read and analyze a single session file."""
    return analyze_session(
        list(read_events(session_path)),
        default_project=project_from_dir_name(session_path.parent.name),
        source=str(session_path),
    )


def iter_sessions(
    projects_dir: Optional[Path] = None,
    year: Optional[int] = None,
    tz: Optional[tzinfo] = None,
) -> Iterator[SessionStats]:
    """Lazily analyze every session under the projects directory.

    Args:
        projects_dir: Root of the per-project log directories.
        year: If given, keep only sessions whose first event falls in
            this year. Sessions are included or excluded as a whole.
        tz: Zone used for the year check (local time when None).
    """
    for path in find_session_files(projects_dir):
        events = list(read_events(path))
        if not events:
            continue

        if year is not None:
            start = parse_timestamp(events[0].timestamp)
            if start is None or localize(start, tz).year != year:
                continue

        yield analyze_session(
            events,
            default_project=project_from_dir_name(path.parent.name),
            source=str(path),
        )


def analyze_session(
    events: Iterable[RawEvent],
    default_project: Optional[str] = None,
    source: Optional[str] = None,
) -> SessionStats:
    """Reduce one session's events to SessionStats.

    Args:
        events: Events in source order.
        default_project: Project name used when the first event carries no cwd.
        source: Path of the log the events came from.

    Returns:
        SessionStats. Empty input gives zero counts and empty sets.
    """
    events = list(events)
    stats = SessionStats(project=default_project, source=source)
    if not events:
        return stats

    first, last = events[0], events[-1]
    stats.session_id = first.session_id
    stats.project = first.cwd or default_project
    stats.git_branch = first.git_branch
    stats.start_time = parse_timestamp(first.timestamp)
    stats.end_time = parse_timestamp(last.timestamp)
    if stats.start_time and stats.end_time:
        minutes = (stats.end_time - stats.start_time).total_seconds() // 60
        stats.duration = max(0, int(minutes))

    tool_usage = Counter()
    files_accessed = set()
    files_modified = set()
    files_created = set()
    languages = set()

    for event in events:
        if is_external_user_message(event):
            stats.user_messages += 1
            stats.message_count += 1
        elif event.type == "assistant":
            stats.assistant_messages += 1
            stats.message_count += 1

        for item in event.content or ():
            if isinstance(item, ToolUse):
                stats.tool_calls.append(item.name)
                tool_usage[item.name] += 1

                file_path = item.input.get("file_path")
                if isinstance(file_path, str) and file_path:
                    files_accessed.add(file_path)
                    language = detect_language(file_path)
                    if language:
                        languages.add(language)
                    if item.name in MUTATING_TOOLS:
                        files_modified.add(file_path)

                command = item.input.get("command")
                if item.name == SHELL_TOOL and isinstance(command, str):
                    stats.bash_commands.append(command)
            elif isinstance(item, Thinking):
                stats.thinking_blocks += 1

        created = created_file_path(event)
        if created:
            files_created.add(created)

    stats.tool_usage = tool_usage
    stats.files_accessed = frozenset(files_accessed)
    stats.files_modified = frozenset(files_modified)
    stats.files_created = frozenset(files_created)
    stats.languages = frozenset(languages)
    return stats
