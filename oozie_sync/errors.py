"""Error kinds raised across the sync pipeline.

Every failure that aborts a pass is a :class:`SyncError` subclass carrying a
stable ``kind`` string, so the CLI and logs can report what went wrong
without inspecting messages.
"""

from __future__ import annotations


class SyncError(Exception):
    """Base class for all fatal sync failures."""

    kind = "SyncError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class ConfigMissingError(SyncError):
    kind = "ConfigMissing"


class ConfigInvalidError(SyncError):
    kind = "ConfigInvalid"


class SourceUnavailableError(SyncError):
    kind = "SourceUnavailable"


class SourceBadStatusError(SyncError):
    kind = "SourceBadStatus"

    def __init__(self, status_code: int, reason: str = "") -> None:
        detail = f"{status_code} {reason}".strip()
        super().__init__(f"request returned status {detail}")
        self.status_code = status_code


class SourceMalformedError(SyncError):
    kind = "SourceMalformed"


class SnapshotUnreadableError(SyncError):
    kind = "SnapshotUnreadable"


class StateCorruptError(SyncError):
    kind = "StateCorrupt"


class OutputUnwritableError(SyncError):
    kind = "OutputUnwritable"


class PatternCompileError(SyncError):
    kind = "PatternCompileFailure"


__all__ = [
    "ConfigInvalidError",
    "ConfigMissingError",
    "OutputUnwritableError",
    "PatternCompileError",
    "SnapshotUnreadableError",
    "SourceBadStatusError",
    "SourceMalformedError",
    "SourceUnavailableError",
    "StateCorruptError",
    "SyncError",
]
