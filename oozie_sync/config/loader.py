"""Configuration loading helpers for oozie-sync."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Mapping, Optional

import yaml
from pydantic import ValidationError

from ..errors import ConfigInvalidError, ConfigMissingError
from .models import SyncConfig

CONFIG_EXTENSIONS = (".yaml", ".yml", ".json")
CONFIG_PATH_ENV = "OOZIE_SYNC_CONFIG"
SOURCE_URL_ENV = "OOZIE_URL"


def _read_file(path: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return data


class ConfigLoader:
    """Merge an optional config file with environment overrides."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        self.environ = os.environ if environ is None else environ

    def resolve_path(self, path: Optional[Path] = None) -> Optional[Path]:
        if path is not None:
            return path
        env_path = self.environ.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path).expanduser()
        return None

    def load(self, path: Optional[Path] = None) -> SyncConfig:
        config_path = self.resolve_path(path)
        payload: dict = {}
        if config_path is not None:
            if not config_path.is_file():
                raise ConfigMissingError(f"configuration file not found: {config_path}")
            try:
                payload = _read_file(config_path)
            except (OSError, ValueError, yaml.YAMLError) as exc:
                raise ConfigInvalidError(f"cannot read configuration {config_path}: {exc}") from exc
        source_url = self.environ.get(SOURCE_URL_ENV)
        if source_url:
            payload["oozie_url"] = source_url
        try:
            return SyncConfig.model_validate(payload)
        except ValidationError as exc:
            raise ConfigInvalidError(f"invalid configuration: {exc}") from exc


def require_source_url(config: SyncConfig) -> str:
    """Return the live source address or fail with a configuration error."""

    if not config.oozie_url:
        raise ConfigMissingError(f"the environment {SOURCE_URL_ENV} is not set")
    return config.oozie_url


__all__ = [
    "CONFIG_EXTENSIONS",
    "CONFIG_PATH_ENV",
    "ConfigLoader",
    "SOURCE_URL_ENV",
    "require_source_url",
]
