"""CSV artifact writer, one file per sync pass."""

from __future__ import annotations

import csv
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Optional

from ...errors import OutputUnwritableError
from ..records import Record, format_rfc3339
from ..selector import Identity
from .base import BaseEmitter

ARTIFACT_TIME_FORMAT = "%Y-%m-%dT%H-%M-%SZ"
ARTIFACT_SUFFIX = ".csv"
CSV_HEADER = (
    "id",
    "name",
    "tenant-id",
    "year",
    "month",
    "status",
    "createdAt",
    "lastModifiedAt",
    "endedAt",
)


def artifact_name(started_at: datetime) -> str:
    """Sortable, colon-free file name derived from the pass start time."""

    if started_at.tzinfo is None:
        started_at = started_at.replace(tzinfo=timezone.utc)
    return started_at.astimezone(timezone.utc).strftime(ARTIFACT_TIME_FORMAT) + ARTIFACT_SUFFIX


def _cell(value: Optional[datetime]) -> str:
    return "" if value is None else format_rfc3339(value)


class CsvEmitter(BaseEmitter):
    """Write accepted records to a freshly created CSV file.

    The file is created exclusively so an earlier artifact is never truncated,
    and the header is written immediately: a pass that accepts nothing still
    leaves a header-only file behind.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self.rows_written = 0
        self._closed = False
        try:
            self._file = path.open("x", encoding="utf-8", newline="")
        except OSError as exc:
            raise OutputUnwritableError(f"cannot create output file {path}: {exc}") from exc
        self._writer = csv.writer(self._file, lineterminator="\n")
        try:
            self._write(CSV_HEADER)
        except OutputUnwritableError:
            self._file.close()
            raise

    @classmethod
    def for_pass(cls, output_dir: Path, started_at: datetime) -> "CsvEmitter":
        return cls(output_dir / artifact_name(started_at))

    def write_row(self, record: Record, identity: Identity) -> None:
        self._write(
            (
                record.id,
                record.name,
                identity.tenant_id,
                identity.year,
                identity.month,
                record.status,
                _cell(record.created_at),
                _cell(record.last_modified_at),
                _cell(record.ended_at),
            )
        )
        self.rows_written += 1

    def flush(self) -> None:
        try:
            self._file.flush()
            os.fsync(self._file.fileno())
        except OSError as exc:
            raise OutputUnwritableError(f"failed to flush {self.path}: {exc}") from exc

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.flush()
        finally:
            self._file.close()

    def _write(self, row: Iterable[str]) -> None:
        try:
            self._writer.writerow(row)
        except OSError as exc:
            raise OutputUnwritableError(f"failed to write {self.path}: {exc}") from exc


__all__ = ["ARTIFACT_TIME_FORMAT", "CSV_HEADER", "CsvEmitter", "artifact_name"]
