"""Pydantic models for the Oozie ``/v1/jobs`` payload and instant codecs."""

from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

NULL_LITERAL = "null"


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as exc:
        raise ValueError(f"timestamp out of range in UTC: {value.isoformat()}") from exc



def parse_rfc822(value: Any) -> Optional[datetime]:
    """Decode an Oozie timestamp such as ``Mon, 03 Jul 2023 10:15:00 GMT``.

    ``None``, empty text and the literal ``"null"`` all decode to ``None``.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if not isinstance(value, str):
        raise ValueError(f"expected RFC 822 timestamp string, got {type(value).__name__}")
    text = value.strip().strip('"').strip()
    if not text or text == NULL_LITERAL:
        return None
    try:
        parsed = parsedate_to_datetime(text)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid RFC 822 timestamp: {value!r}") from exc
    if parsed is None:
        raise ValueError(f"invalid RFC 822 timestamp: {value!r}")
    return _as_utc(parsed)


def format_rfc3339(value: datetime) -> str:
    """Render an instant as RFC 3339 UTC with a ``Z`` designator."""

    utc = _as_utc(value).replace(tzinfo=None)
    timespec = "microseconds" if utc.microsecond else "seconds"
    return utc.isoformat(timespec=timespec) + "Z"


def parse_rfc3339(text: str) -> datetime:
    """Parse an RFC 3339 instant; a zone designator is mandatory."""

    candidate = text.strip()
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    if "T" not in candidate and "t" not in candidate:
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")
    parsed = datetime.fromisoformat(candidate)
    if parsed.tzinfo is None:
        raise ValueError(f"timestamp lacks a zone designator: {text!r}")
    return _as_utc(parsed)


class Record(BaseModel):
    """One workflow execution as reported by the job service."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    name: str = Field(alias="appName")
    status: str = ""
    user: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdTime")
    last_modified_at: Optional[datetime] = Field(default=None, alias="lastModTime")
    ended_at: Optional[datetime] = Field(default=None, alias="endTime")

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("created_at", "last_modified_at", "ended_at", mode="before")
    @classmethod
    def _decode_instant(cls, value: Any) -> Optional[datetime]:
        return parse_rfc822(value)


class RecordSet(BaseModel):
    """Full response of one source call; the counters are informational."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    total: int = 0
    records: list[Record] = Field(default_factory=list, alias="workflows")
    returned: int = Field(default=0, alias="len")
    offset: int = 0

    @field_validator("records", mode="before")
    @classmethod
    def _coerce_records(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("total", "returned", "offset", mode="before")
    @classmethod
    def _coerce_counter(cls, value: Any) -> Any:
        return 0 if value is None else value


def decode_record_set(payload: bytes | str) -> RecordSet:
    """Decode a JSON ``/v1/jobs`` document.

    Raises :class:`pydantic.ValidationError` for invalid JSON as well as for a
    document that does not have the expected shape.
    """

    return RecordSet.model_validate_json(payload)


__all__ = [
    "Record",
    "RecordSet",
    "decode_record_set",
    "format_rfc3339",
    "parse_rfc3339",
    "parse_rfc822",
]
