"""Emitter Service Provider Interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from types import TracebackType
from typing import Iterable, Optional

from ..records import Record
from ..selector import Identity


class BaseEmitter(ABC):
    """Scoped sink for accepted records; closing always flushes first."""

    path: Path

    @abstractmethod
    def write_row(self, record: Record, identity: Identity) -> None:
        """Persist a single accepted record."""

    def write_rows(self, rows: Iterable[tuple[Record, Identity]]) -> None:
        for record, identity in rows:
            self.write_row(record, identity)

    @abstractmethod
    def flush(self) -> None:
        """Push buffered rows to durable storage."""

    @abstractmethod
    def close(self) -> None:
        """Release underlying resources."""

    def __enter__(self) -> "BaseEmitter":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()


__all__ = ["BaseEmitter"]
