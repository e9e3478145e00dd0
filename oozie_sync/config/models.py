"""Pydantic models describing runtime configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from ..engine.selector import DEFAULT_NAME_PATTERN
from ..engine.source import DEFAULT_JOBS_PATH, DEFAULT_TIMEOUT
from ..infra.watermark import MARKER_NAME


class SyncConfig(BaseModel):
    """Settings shared by every sync pass."""

    oozie_url: Optional[str] = Field(
        default=None, description="Base address of the job service, e.g. http://host:11000/oozie/"
    )
    jobs_path: str = DEFAULT_JOBS_PATH
    name_pattern: str = DEFAULT_NAME_PATTERN
    marker_name: str = MARKER_NAME
    request_timeout: float = DEFAULT_TIMEOUT
    log_file: Optional[Path] = None

    @field_validator("oozie_url", mode="before")
    @classmethod
    def _blank_url(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("request_timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("request_timeout must be > 0")
        return value

    @field_validator("marker_name")
    @classmethod
    def _plain_marker_name(cls, value: str) -> str:
        if not value or "/" in value or "\\" in value or value in (".", ".."):
            raise ValueError("marker_name must be a plain file name")
        return value

    @field_validator("name_pattern")
    @classmethod
    def _non_empty_pattern(cls, value: str) -> str:
        # Compiled by the selector, which reports PatternCompileFailure.
        if not value:
            raise ValueError("name_pattern cannot be empty")
        return value

    @field_validator("log_file", mode="before")
    @classmethod
    def _coerce_path(cls, value: Any) -> Any:
        if value in (None, ""):
            return None
        return Path(value)


__all__ = ["SyncConfig"]
