"""Sync orchestrator wiring together the watermark, source, selector and emitter."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable

import structlog

from .engine import CsvEmitter, RecordSource, Selector
from .engine.emitter import BaseEmitter
from .engine.records import format_rfc3339
from .engine.selector import DEFAULT_NAME_PATTERN, SelectionStats
from .errors import SyncError
from .infra import MARKER_NAME, WatermarkStore
from .logging_conf import get_logger


class PassState(str, Enum):
    """Linear lifecycle of a single sync pass."""

    INIT = "init"
    LOAD_WATERMARK = "load_watermark"
    FETCH_SOURCE = "fetch_source"
    FILTER_AND_EMIT = "filter_and_emit"
    ADVANCE_WATERMARK = "advance_watermark"
    PERSIST_WATERMARK = "persist_watermark"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class PassResult:
    """Outcome of a successful pass."""

    artifact: Path
    previous_watermark: datetime
    watermark: datetime
    fetched: int
    written: int
    stats: SelectionStats = field(default_factory=SelectionStats)
    state: PassState = PassState.DONE

    @property
    def advanced(self) -> bool:
        return self.watermark > self.previous_watermark


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SyncOrchestrator:
    """Run one incremental pass against an output directory.

    Ordering contract: the artifact is completely written and synced before
    the watermark is persisted. A failure at any step leaves the marker
    untouched, so the worst case after a crash is re-emitting records that a
    downstream consumer deduplicates by id.
    """

    def __init__(
        self,
        output_dir: Path,
        store: WatermarkStore | None = None,
        name_pattern: str = DEFAULT_NAME_PATTERN,
        clock: Callable[[], datetime] = _utcnow,
        emitter_factory: Callable[[Path, datetime], BaseEmitter] | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.output_dir = output_dir
        self.store = store or WatermarkStore(output_dir)
        self.name_pattern = name_pattern
        self.clock = clock
        self.emitter_factory = emitter_factory or CsvEmitter.for_pass
        self.logger = logger or get_logger("orchestrator")
        self.state = PassState.INIT

    def run(self, source: RecordSource) -> PassResult:
        """Execute one pass; any :class:`SyncError` aborts it before the marker is touched."""

        self.state = PassState.INIT
        started_at = self.clock()
        try:
            selector = Selector(self.name_pattern)

            self.state = PassState.LOAD_WATERMARK
            watermark = self.store.load()
            self.logger.info("pass_started", watermark=format_rfc3339(watermark))

            self.state = PassState.FETCH_SOURCE
            record_set = source.fetch()

            self.state = PassState.FILTER_AND_EMIT
            accepted_last_modified: list[datetime] = []
            with self.emitter_factory(self.output_dir, started_at) as emitter:
                for record in record_set.records:
                    identity = selector.select(record, watermark)
                    if identity is None:
                        continue
                    emitter.write_row(record, identity)
                    # select() only accepts records carrying a last-modified time
                    accepted_last_modified.append(record.last_modified_at)  # type: ignore[arg-type]
                    self.logger.debug("record_written", id=record.id, app_name=record.name)
                artifact = emitter.path

            self.state = PassState.ADVANCE_WATERMARK
            next_watermark = advance_watermark(watermark, accepted_last_modified)

            self.state = PassState.PERSIST_WATERMARK
            self.store.save(next_watermark)
        except Exception as exc:  # noqa: BLE001
            failed_in = self.state
            self.state = PassState.FAILED
            self.logger.error(
                "pass_failed",
                state=failed_in.value,
                kind=exc.kind if isinstance(exc, SyncError) else type(exc).__name__,
                error=str(exc),
            )
            raise

        self.state = PassState.DONE
        result = PassResult(
            artifact=artifact,
            previous_watermark=watermark,
            watermark=next_watermark,
            fetched=len(record_set.records),
            written=selector.stats.accepted,
            stats=selector.stats,
        )
        self.logger.info(
            "pass_completed",
            artifact=str(result.artifact),
            fetched=result.fetched,
            written=result.written,
            watermark=format_rfc3339(result.watermark),
            stats=selector.stats.as_dict(),
        )
        return result


def advance_watermark(current: datetime, accepted: list[datetime]) -> datetime:
    """Largest of ``current`` and every accepted last-modified instant.

    Never returns a value older than ``current``, whatever the input order.
    """

    return max([current, *accepted])


def run_pass(
    source: RecordSource,
    output_dir: Path,
    *,
    name_pattern: str = DEFAULT_NAME_PATTERN,
    marker_name: str = MARKER_NAME,
    clock: Callable[[], datetime] = _utcnow,
) -> PassResult:
    """Run one pass against ``output_dir`` with the marker named ``marker_name``."""

    store = WatermarkStore(output_dir, marker_name)
    orchestrator = SyncOrchestrator(output_dir, store=store, name_pattern=name_pattern, clock=clock)
    return orchestrator.run(source)


__all__ = ["PassResult", "PassState", "SyncOrchestrator", "advance_watermark", "run_pass"]
