"""Pytest configuration providing job payload builders and shared fixtures."""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Iterator

import pytest

from helpers import MATCHING_NAME, StaticSource, jobs_document, rfc822, utc


@pytest.fixture
def make_workflow() -> Callable[..., dict[str, Any]]:
    """Build one workflow entry shaped like the ``/v1/jobs`` payload."""

    counter = iter(range(1, 10_000))

    def _builder(
        *,
        name: str = MATCHING_NAME,
        last_modified: datetime | None | str = utc(2023, 7, 3, 10, 15, 0),
        created: datetime | None | str = utc(2023, 7, 3, 10, 0, 0),
        ended: datetime | None | str = None,
        status: str = "SUCCEEDED",
        **overrides: Any,
    ) -> dict[str, Any]:
        def _encode(value: datetime | None | str) -> str | None:
            return value if isinstance(value, str) else rfc822(value)

        entry: dict[str, Any] = {
            "status": status,
            "createdTime": _encode(created),
            "id": f"{next(counter):07d}-230703000000000-oozie-oozi-W",
            "appName": name,
            "user": "hadoop",
            "lastModTime": _encode(last_modified),
            "endTime": _encode(ended),
        }
        entry.update(overrides)
        return entry

    return _builder


@pytest.fixture
def write_snapshot(tmp_path: Path) -> Callable[[list[dict[str, Any]]], Path]:
    counter = iter(range(1, 10_000))

    def _writer(workflows: list[dict[str, Any]]) -> Path:
        path = tmp_path / f"jobs-{next(counter)}.json"
        path.write_text(json.dumps(jobs_document(workflows)), encoding="utf-8")
        return path

    return _writer


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def static_source() -> Callable[[list[dict[str, Any]]], StaticSource]:
    return StaticSource


@pytest.fixture
def ticking_clock() -> Iterator[Callable[[], datetime]]:
    """Clock advancing one minute per call so each pass gets its own artifact name."""

    state = {"now": utc(2024, 1, 1, 12, 0, 0)}

    def _clock() -> datetime:
        current = state["now"]
        state["now"] = current + timedelta(minutes=1)
        return current

    yield _clock
