"""Emitter SPI and implementations."""

from .base import BaseEmitter
from .csv_emitter import CSV_HEADER, CsvEmitter, artifact_name

__all__ = ["BaseEmitter", "CSV_HEADER", "CsvEmitter", "artifact_name"]
