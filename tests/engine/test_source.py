from __future__ import annotations

import json

import httpx
import pytest

from helpers import jobs_document
from oozie_sync.engine.source import HttpRecordSource, SnapshotRecordSource, jobs_url
from oozie_sync.errors import (
    SnapshotUnreadableError,
    SourceBadStatusError,
    SourceMalformedError,
    SourceUnavailableError,
)


def _source(handler) -> HttpRecordSource:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return HttpRecordSource("http://oozie.local:11000/oozie/", client=client)


@pytest.mark.parametrize(
    "base",
    ["http://oozie.local:11000/oozie/", "http://oozie.local:11000/oozie"],
)
def test_jobs_url_tolerates_trailing_slash(base) -> None:
    assert jobs_url(base) == "http://oozie.local:11000/oozie/v1/jobs"


def test_http_source_fetches_jobs(make_workflow) -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=jobs_document([make_workflow(), make_workflow()]))

    with _source(handler) as source:
        record_set = source.fetch()

    assert len(record_set.records) == 2
    assert len(captured) == 1
    assert captured[0].method == "GET"
    assert str(captured[0].url) == "http://oozie.local:11000/oozie/v1/jobs"
    assert "authorization" not in captured[0].headers


@pytest.mark.parametrize("status", [201, 301, 404, 500])
def test_http_source_rejects_non_200(status) -> None:
    source = _source(lambda request: httpx.Response(status, json={}))
    with pytest.raises(SourceBadStatusError) as excinfo:
        source.fetch()
    assert excinfo.value.status_code == status
    assert excinfo.value.kind == "SourceBadStatus"


def test_http_source_connection_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(SourceUnavailableError):
        _source(handler).fetch()


def test_http_source_timeout_is_unavailable() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(SourceUnavailableError):
        _source(handler).fetch()


@pytest.mark.parametrize("body", [b"<html>maintenance</html>", b'{"workflows": 3}'])
def test_http_source_malformed_payload(body) -> None:
    source = _source(lambda request: httpx.Response(200, content=body))
    with pytest.raises(SourceMalformedError):
        source.fetch()


def test_http_source_does_not_retry() -> None:
    calls = {"count": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["count"] += 1
        return httpx.Response(503)

    with pytest.raises(SourceBadStatusError):
        _source(handler).fetch()
    assert calls["count"] == 1


def test_snapshot_source_reads_file(write_snapshot, make_workflow) -> None:
    path = write_snapshot([make_workflow(), make_workflow(name="other")])
    record_set = SnapshotRecordSource(path).fetch()
    assert [record.name for record in record_set.records][1] == "other"


def test_snapshot_source_missing_file(tmp_path) -> None:
    with pytest.raises(SnapshotUnreadableError):
        SnapshotRecordSource(tmp_path / "missing.json").fetch()


def test_snapshot_source_undecodable_file(tmp_path) -> None:
    path = tmp_path / "jobs.json"
    path.write_text(json.dumps({"workflows": [{"id": 1}]}), encoding="utf-8")
    with pytest.raises(SnapshotUnreadableError):
        SnapshotRecordSource(path).fetch()


def test_snapshot_source_out_of_range_timestamp(write_snapshot, make_workflow) -> None:
    path = write_snapshot([make_workflow(last_modified="Fri, 31 Dec 9999 23:59:59 -0100")])
    with pytest.raises(SnapshotUnreadableError):
        SnapshotRecordSource(path).fetch()
