#!/usr/bin/env python3
"""
PassKit settings.

Defaults live in passkit/configs/app.yaml. PASSKIT_CONFIG points at a
replacement file (same layout) when set.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any
import os

import yaml

PACKAGE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = PACKAGE_DIR.parent
CONFIG_DIR = PACKAGE_DIR / "configs"
APP_CONFIG_PATH = CONFIG_DIR / "app.yaml"
CONFIG_ENV = "PASSKIT_CONFIG"


def app_config_path() -> Path:
    """The settings file in effect."""
    override = os.environ.get(CONFIG_ENV)
    if override:
        return Path(os.path.expanduser(override))
    return APP_CONFIG_PATH


@lru_cache(maxsize=4)
def _read_config(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(f"Missing app config: {path}")
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"App config must be a mapping at the top level: {path}")
    return data


def load_app_config() -> dict:
    return _read_config(app_config_path())


def reload_settings() -> None:
    """Forget cached files so the next lookup re-reads them."""
    _read_config.cache_clear()


def get_setting(path: str, default: Any = None) -> Any:
    """Get nested setting by dotted path."""
    current: Any = load_app_config()
    for part in path.split('.'):
        if not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current


def resolve_path(value: str, base: Path | None = None) -> Path:
    """Resolve a path string relative to project root (unless absolute)."""
    if value is None:
        raise ValueError("path value is required")
    path = Path(os.path.expanduser(str(value)))
    if not path.is_absolute():
        path = ((base or PROJECT_ROOT) / path).resolve()
    return path


__all__ = [
    "load_app_config",
    "reload_settings",
    "app_config_path",
    "get_setting",
    "resolve_path",
    "PROJECT_ROOT",
    "APP_CONFIG_PATH",
    "CONFIG_ENV",
]
