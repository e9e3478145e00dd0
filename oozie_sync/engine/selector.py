"""Record selection: name pattern match plus strict watermark comparison."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..errors import PatternCompileError
from .records import Record

DEFAULT_NAME_PATTERN = r"^aws-reconciler-production-([0-9]{12})-([0-9]{4})-([0-9]{2})$"


@dataclass(slots=True, frozen=True)
class Identity:
    """Partition fields decoded from a workflow name."""

    tenant_id: str
    year: str
    month: str


@dataclass(slots=True)
class SelectionStats:
    accepted: int = 0
    name_mismatch: int = 0
    missing_last_modified: int = 0
    not_newer: int = 0

    @property
    def rejected(self) -> int:
        return self.name_mismatch + self.missing_last_modified + self.not_newer

    def as_dict(self) -> dict[str, int]:
        return {
            "accepted": self.accepted,
            "name_mismatch": self.name_mismatch,
            "missing_last_modified": self.missing_last_modified,
            "not_newer": self.not_newer,
        }


def compile_name_pattern(pattern: str) -> re.Pattern[str]:
    try:
        compiled = re.compile(pattern)
    except re.error as exc:
        raise PatternCompileError(f"failed to compile name pattern {pattern!r}: {exc}") from exc
    if compiled.groups < 3:
        raise PatternCompileError(
            f"name pattern {pattern!r} must capture tenant id, year and month"
        )
    return compiled


def accept(record: Record, watermark: datetime, name_pattern: re.Pattern[str]) -> bool:
    """Return True when ``record`` matches the pattern and is newer than ``watermark``.

    The watermark itself counts as already processed, so a record modified
    exactly at the watermark instant is rejected. Records without a last
    modification time are never accepted.
    """

    if name_pattern.fullmatch(record.name) is None:
        return False
    if record.last_modified_at is None:
        return False
    return record.last_modified_at > watermark


class Selector:
    """Stateful wrapper around :func:`accept` that decomposes names and counts outcomes."""

    def __init__(self, pattern: str = DEFAULT_NAME_PATTERN) -> None:
        self.pattern = compile_name_pattern(pattern)
        self.stats = SelectionStats()

    def select(self, record: Record, watermark: datetime) -> Optional[Identity]:
        if accept(record, watermark, self.pattern):
            self.stats.accepted += 1
            match = self.pattern.fullmatch(record.name)
            return Identity(tenant_id=match.group(1), year=match.group(2), month=match.group(3))
        if self.pattern.fullmatch(record.name) is None:
            self.stats.name_mismatch += 1
        elif record.last_modified_at is None:
            self.stats.missing_last_modified += 1
        else:
            self.stats.not_newer += 1
        return None


__all__ = [
    "DEFAULT_NAME_PATTERN",
    "Identity",
    "SelectionStats",
    "Selector",
    "accept",
    "compile_name_pattern",
]
