"""Configuration package exports."""

from .loader import CONFIG_PATH_ENV, SOURCE_URL_ENV, ConfigLoader, require_source_url
from .models import SyncConfig

__all__ = [
    "CONFIG_PATH_ENV",
    "ConfigLoader",
    "SOURCE_URL_ENV",
    "SyncConfig",
    "require_source_url",
]
