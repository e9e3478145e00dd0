"""Durable watermark persisted as a single RFC 3339 instant."""

from __future__ import annotations

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import structlog

from ..engine.records import format_rfc3339, parse_rfc3339
from ..errors import OutputUnwritableError, StateCorruptError
from ..logging_conf import get_logger

MARKER_NAME = "_marker"
BEGINNING_OF_TIME = datetime(2000, 1, 1, tzinfo=timezone.utc)


class WatermarkStore:
    """Own the marker file inside an output directory.

    ``save`` goes through a temporary sibling file and ``os.replace`` so a
    crash mid-write leaves either the old or the new value on disk.
    """

    def __init__(
        self,
        directory: Path,
        marker_name: str = MARKER_NAME,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.directory = directory
        self.path = directory / marker_name
        self.logger = logger or get_logger("watermark")

    def load(self) -> datetime:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            self.logger.debug("marker_missing", path=str(self.path))
            return BEGINNING_OF_TIME
        except OSError as exc:
            raise StateCorruptError(f"failed to read marker {self.path}: {exc}") from exc
        try:
            return parse_rfc3339(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as exc:
            raise StateCorruptError(f"unparsable marker {self.path}: {raw[:64]!r}") from exc

    def save(self, watermark: datetime) -> None:
        payload = format_rfc3339(watermark).encode("utf-8")
        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.directory
            )
            with os.fdopen(fd, "wb") as stream:
                stream.write(payload)
                stream.flush()
                os.fsync(stream.fileno())
            os.chmod(tmp_name, 0o600)
            os.replace(tmp_name, self.path)
            tmp_name = None
            self._fsync_directory()
        except OSError as exc:
            raise OutputUnwritableError(f"failed to write marker {self.path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass
        self.logger.debug("marker_saved", path=str(self.path), watermark=payload.decode())

    def _fsync_directory(self) -> None:
        if os.name != "posix":
            return
        dir_fd = os.open(self.directory, os.O_RDONLY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)


__all__ = ["BEGINNING_OF_TIME", "MARKER_NAME", "WatermarkStore"]
