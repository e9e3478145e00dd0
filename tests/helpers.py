"""Builders shared by the test modules and ``conftest.py``."""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any

from oozie_sync.engine.records import Record, RecordSet

MATCHING_NAME = "aws-reconciler-production-123456789012-2023-07"


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def rfc822(value: datetime | None) -> str | None:
    if value is None:
        return None
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def jobs_document(workflows: list[dict[str, Any]]) -> dict[str, Any]:
    return {"total": len(workflows), "workflows": workflows, "len": len(workflows), "offset": 1}


def make_record(**overrides: Any) -> Record:
    base: dict[str, Any] = {
        "id": "0000001-oozie-W",
        "name": MATCHING_NAME,
        "status": "SUCCEEDED",
        "created_at": utc(2023, 7, 3, 10, 0, 0),
        "last_modified_at": utc(2023, 7, 3, 10, 15, 0),
        "ended_at": None,
    }
    base.update(overrides)
    return Record(**base)


class StaticSource:
    """In-memory record source returning a fixed record set."""

    def __init__(self, workflows: list[dict[str, Any]]) -> None:
        self.record_set = RecordSet.model_validate(jobs_document(workflows))
        self.calls = 0

    def fetch(self) -> RecordSet:
        self.calls += 1
        return self.record_set
