"""Shared fixtures: synthetic Claude Code session logs."""

import json
from pathlib import Path

import pytest


def user_event(ts, session_id="s1", cwd="/work/api", text="hello", **extra):
    event = {
        "type": "user",
        "userType": "external",
        "timestamp": ts,
        "sessionId": session_id,
        "cwd": cwd,
        "message": {"role": "user", "content": [{"type": "text", "text": text}]},
    }
    event.update(extra)
    return event


def assistant_event(ts, *content, session_id="s1", cwd="/work/api", **extra):
    event = {
        "type": "assistant",
        "timestamp": ts,
        "sessionId": session_id,
        "cwd": cwd,
        "message": {"role": "assistant", "content": list(content)},
    }
    event.update(extra)
    return event


def tool_use(name, **tool_input):
    return {"type": "tool_use", "id": f"toolu_{name}", "name": name, "input": tool_input}


def write_jsonl(path: Path, lines) -> Path:
    """Write events (dicts) or raw strings as a JSONL file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line if isinstance(line, str) else json.dumps(line))
            f.write("\n")
    return path


@pytest.fixture
def projects_dir(tmp_path):
    """A projects directory with three sessions in two projects.

    - api/a.jsonl: 2024-03-01, Edit + Read on Python files, branch main
    - api/b.jsonl: 2024-03-02, Write on a new TypeScript file, branch feature
    - web/c.jsonl: 2023-12-31, a session from the previous year
    """
    root = tmp_path / "projects"

    write_jsonl(root / "-work-api" / "a.jsonl", [
        user_event("2024-03-01T09:00:00.000Z", session_id="a", gitBranch="main"),
        assistant_event(
            "2024-03-01T09:01:00.000Z",
            {"type": "thinking", "thinking": "..."},
            tool_use("Read", file_path="/work/api/app.py"),
            tool_use("Edit", file_path="/work/api/app.py", old_string="a", new_string="b"),
            session_id="a",
        ),
        user_event("2024-03-01T09:31:30.000Z", session_id="a", text="thanks"),
    ])

    write_jsonl(root / "-work-api" / "b.jsonl", [
        user_event("2024-03-02T22:00:00.000Z", session_id="b", gitBranch="feature"),
        assistant_event(
            "2024-03-02T22:05:00.000Z",
            tool_use("Write", file_path="/work/api/ui.tsx", content="x"),
            tool_use("Bash", command="npm test"),
            session_id="b",
        ),
        {
            "type": "user",
            "timestamp": "2024-03-02T22:05:01.000Z",
            "sessionId": "b",
            "toolUseResult": {"type": "create", "filePath": "/work/api/ui.tsx"},
            "message": {"role": "user", "content": [{"type": "tool_result", "tool_use_id": "t"}]},
        },
    ])

    write_jsonl(root / "-work-web" / "c.jsonl", [
        user_event("2023-12-31T12:00:00.000Z", session_id="c", cwd="/work/web"),
    ])

    return root
