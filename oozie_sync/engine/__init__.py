"""Engine components wiring source → selector → emitter."""

from .emitter import BaseEmitter, CsvEmitter, artifact_name
from .records import Record, RecordSet, decode_record_set
from .selector import DEFAULT_NAME_PATTERN, Identity, SelectionStats, Selector, accept
from .source import HttpRecordSource, RecordSource, SnapshotRecordSource

__all__ = [
    "BaseEmitter",
    "CsvEmitter",
    "DEFAULT_NAME_PATTERN",
    "HttpRecordSource",
    "Identity",
    "Record",
    "RecordSet",
    "RecordSource",
    "SelectionStats",
    "Selector",
    "SnapshotRecordSource",
    "accept",
    "artifact_name",
    "decode_record_set",
]
