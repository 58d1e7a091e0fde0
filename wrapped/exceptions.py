"""Exceptions raised by wrapped.

Exception Hierarchy:
    WrappedError (base)
    ├── NoSessionsError (nothing to aggregate for the requested year)
    └── PersistenceError (report computed but could not be written)
        ├── ReportWriteError (JSON/HTML report output)
        └── SessionStoreError (recorded session store)
"""

from pathlib import Path


class WrappedError(Exception):
    """Base exception for all wrapped errors."""


class NoSessionsError(WrappedError):
    """Raised when no sessions were found for the requested year."""

    def __init__(self, year: int) -> None:
        self.year = year
        super().__init__(f"No sessions found for {year}")


class PersistenceError(WrappedError):
    """Base exception for write failures."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not write {path}: {reason}")


class ReportWriteError(PersistenceError):
    """Raised when a generated report cannot be saved."""


class SessionStoreError(PersistenceError):
    """Raised when the recorded session store cannot be saved."""
