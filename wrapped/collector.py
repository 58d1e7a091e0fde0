"""Flat-file store of manually recorded session summaries."""

import json
import logging
import random
import string
import time
from collections import Counter
from datetime import datetime, timezone, tzinfo
from pathlib import Path
from typing import Optional

from .date_utils import localize, parse_timestamp
from .exceptions import SessionStoreError
from .models import SessionStats

logger = logging.getLogger(__name__)

SESSIONS_FILE = "sessions.json"


class SessionStore:
    """Append-only list of session summaries kept in one JSON array.

    Appending reads the whole array, adds the record and writes the whole
    array back. There is no locking; one writer at a time.
    """

    def __init__(self, data_dir="./data"):
        self.data_dir = Path(data_dir)
        self.sessions_file = self.data_dir / SESSIONS_FILE

    def record_session(self, session_data: dict, now: Optional[datetime] = None) -> dict:
        """Append a session summary and return the stored record.

        Args:
            session_data: Summary fields (messageCount, filesModified,
                filesCreated, linesAdded, linesRemoved, toolCalls,
                languages, project).
            now: Recording time. Defaults to the current UTC time.
        """
        now = now or datetime.now(timezone.utc)
        sessions = self.load_sessions()

        session = {
            "id": generate_session_id(),
            "timestamp": now.isoformat(),
            "date": now.date().isoformat(),
            **session_data,
        }

        sessions.append(session)
        self.save_sessions(sessions)
        return session

    def load_sessions(self) -> list:
        """Load all recorded sessions. Missing or unreadable store gives []."""
        if not self.sessions_file.exists():
            return []

        try:
            with open(self.sessions_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not load %s: %s", self.sessions_file, e)
            return []

        if not isinstance(data, list):
            logger.warning("%s does not contain a JSON array, ignoring it", self.sessions_file)
            return []
        return [s for s in data if isinstance(s, dict)]

    def save_sessions(self, sessions: list) -> None:
        """Write the full session list.

        Raises:
            SessionStoreError: If the file cannot be written.
        """
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(self.sessions_file, "w", encoding="utf-8") as f:
                json.dump(sessions, f, indent=2)
        except OSError as e:
            raise SessionStoreError(self.sessions_file, str(e)) from e

    def sessions_for_year(self, year: int, tz: Optional[tzinfo] = None) -> list:
        """Recorded sessions whose timestamp falls in the given year."""
        result = []
        for session in self.load_sessions():
            ts = parse_timestamp(session.get("timestamp"))
            if ts is not None and localize(ts, tz).year == year:
                result.append(session)
        return result

    def clear_sessions(self) -> None:
        """Delete every recorded session."""
        if self.sessions_file.exists():
            self.sessions_file.unlink()


def generate_session_id() -> str:
    """Generate an identifier like session_1700000000000_k3j9x0a1b."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=9))
    return f"session_{int(time.time() * 1000)}_{suffix}"


def session_from_record(record: dict) -> SessionStats:
    """Convert a recorded summary into SessionStats.

    Missing or mistyped fields fall back to zero or empty.
    """
    timestamp = parse_timestamp(record.get("timestamp"))
    tool_calls = [t for t in _list(record.get("toolCalls")) if isinstance(t, str)]
    project = record.get("project")

    return SessionStats(
        session_id=record.get("id"),
        project=project if isinstance(project, str) and project else None,
        start_time=timestamp,
        end_time=timestamp,
        duration=_int(record.get("duration")),
        message_count=_int(record.get("messageCount")),
        tool_calls=tool_calls,
        tool_usage=Counter(tool_calls),
        files_modified=_strings(record.get("filesModified")),
        files_created=_strings(record.get("filesCreated")),
        languages=_strings(record.get("languages")),
        lines_added=_int(record.get("linesAdded")),
        lines_removed=_int(record.get("linesRemoved")),
    )


def _list(value) -> list:
    return value if isinstance(value, list) else []


def _strings(value) -> frozenset:
    return frozenset(v for v in _list(value) if isinstance(v, str))


def _int(value) -> int:
    if isinstance(value, bool):
        return 0
    return value if isinstance(value, int) and value > 0 else 0
