"""Incremental Oozie workflow dump with a crash-safe watermark."""

__version__ = "0.1.0"
