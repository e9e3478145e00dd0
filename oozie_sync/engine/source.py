"""Record sources: the live jobs endpoint or a saved snapshot of it."""

from __future__ import annotations

from pathlib import Path
from types import TracebackType
from typing import Optional, Protocol, runtime_checkable

import httpx
import structlog
from pydantic import ValidationError

from ..errors import (
    ConfigInvalidError,
    SnapshotUnreadableError,
    SourceBadStatusError,
    SourceMalformedError,
    SourceUnavailableError,
)
from ..logging_conf import get_logger
from .records import RecordSet, decode_record_set

DEFAULT_JOBS_PATH = "v1/jobs"
DEFAULT_TIMEOUT = 15.0


@runtime_checkable
class RecordSource(Protocol):
    """Anything able to produce the full current record set in one call."""

    def fetch(self) -> RecordSet: ...


def jobs_url(base_url: str, jobs_path: str = DEFAULT_JOBS_PATH) -> str:
    return base_url.rstrip("/") + "/" + jobs_path.lstrip("/")


class HttpRecordSource:
    """Single unauthenticated GET against the job service, no retries."""

    def __init__(
        self,
        base_url: str,
        jobs_path: str = DEFAULT_JOBS_PATH,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.Client | None = None,
        logger: structlog.BoundLogger | None = None,
    ) -> None:
        self.url = jobs_url(base_url, jobs_path)
        self.timeout = timeout
        self.logger = logger or get_logger("source")
        self._owns_client = client is None
        self._client = client or httpx.Client(follow_redirects=True, timeout=timeout)

    def fetch(self) -> RecordSet:
        self.logger.debug("fetch_started", url=self.url)
        try:
            response = self._client.get(self.url, timeout=self.timeout)
        except httpx.InvalidURL as exc:
            raise ConfigInvalidError(f"invalid job service url {self.url!r}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise SourceUnavailableError(f"failed to open job service {self.url}: {exc}") from exc
        if response.status_code != 200:
            raise SourceBadStatusError(response.status_code, response.reason_phrase)
        try:
            record_set = decode_record_set(response.content)
        except ValidationError as exc:
            raise SourceMalformedError(f"failed to parse api response: {exc}") from exc
        self.logger.debug(
            "fetch_completed",
            url=self.url,
            total=record_set.total,
            records=len(record_set.records),
        )
        return record_set

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpRecordSource":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()


class SnapshotRecordSource:
    """Read a previously saved ``/v1/jobs`` response from disk."""

    def __init__(self, path: Path, logger: structlog.BoundLogger | None = None) -> None:
        self.path = path
        self.logger = logger or get_logger("source")

    def fetch(self) -> RecordSet:
        try:
            payload = self.path.read_bytes()
        except OSError as exc:
            raise SnapshotUnreadableError(f"failed to open file {self.path}: {exc}") from exc
        try:
            record_set = decode_record_set(payload)
        except ValidationError as exc:
            raise SnapshotUnreadableError(
                f"failed to parse file contents {self.path}: {exc}"
            ) from exc
        self.logger.debug(
            "snapshot_loaded", path=str(self.path), records=len(record_set.records)
        )
        return record_set

    def close(self) -> None:
        return

    def __enter__(self) -> "SnapshotRecordSource":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.close()


__all__ = [
    "DEFAULT_JOBS_PATH",
    "HttpRecordSource",
    "RecordSource",
    "SnapshotRecordSource",
    "jobs_url",
]
