"""Static lookup tables and predicates used when reducing session logs."""

import posixpath
from typing import Optional

from .models import RawEvent

# File extension (without dot) -> language name.
# Extensions missing from this table contribute no language.
LANGUAGE_BY_EXTENSION = {
    "js": "JavaScript",
    "jsx": "JavaScript",
    "ts": "TypeScript",
    "tsx": "TypeScript",
    "py": "Python",
    "go": "Go",
    "rs": "Rust",
    "java": "Java",
    "cpp": "C++",
    "c": "C",
    "rb": "Ruby",
    "php": "PHP",
    "swift": "Swift",
    "kt": "Kotlin",
    "cs": "C#",
    "html": "HTML",
    "css": "CSS",
    "sh": "Shell",
    "bash": "Shell",
    "sql": "SQL",
    "json": "JSON",
    "yaml": "YAML",
    "yml": "YAML",
    "md": "Markdown",
}

# Tools whose file_path counts as a modification
MUTATING_TOOLS = frozenset(["Write", "Edit"])

SHELL_TOOL = "Bash"

# toolUseResult.type values that mark a newly created file
FILE_CREATION_RESULTS = frozenset(["create", "write"])


def detect_language(file_path: str) -> Optional[str]:
    """Map a file path to a language name by extension."""
    ext = posixpath.splitext(file_path.replace("\\", "/"))[1]
    return LANGUAGE_BY_EXTENSION.get(ext[1:])


def is_external_user_message(event: RawEvent) -> bool:
    """Check if an event is a message typed by the user (not a tool result echo)."""
    return event.type == "user" and event.user_type == "external"


def created_file_path(event: RawEvent) -> Optional[str]:
    """Return the created path if the event is a file-creation tool result."""
    result = event.tool_use_result
    if not result or result.get("type") not in FILE_CREATION_RESULTS:
        return None

    path = result.get("filePath")
    return path if isinstance(path, str) and path else None
