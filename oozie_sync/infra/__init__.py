"""Infra layer utilities (watermark persistence, output directory)."""

from .storage import prepare_output_dir
from .watermark import BEGINNING_OF_TIME, MARKER_NAME, WatermarkStore

__all__ = ["BEGINNING_OF_TIME", "MARKER_NAME", "WatermarkStore", "prepare_output_dir"]
