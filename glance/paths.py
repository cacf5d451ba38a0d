"""Locations of stored captures and user presets."""

from __future__ import annotations

import os
import sys
from pathlib import Path


def _home() -> str:
    return os.environ.get("HOME", "")


def _user_cache_dir() -> str:
    if sys.platform == "win32":
        return os.environ.get("LOCALAPPDATA", "")
    home = _home()
    if not home:
        return ""
    if sys.platform == "darwin":
        return os.path.join(home, "Library", "Caches")
    return os.path.join(home, ".cache")


def _user_config_dir() -> str:
    if sys.platform == "win32":
        return os.environ.get("APPDATA", "")
    home = _home()
    if not home:
        return ""
    if sys.platform == "darwin":
        return os.path.join(home, "Library", "Application Support")
    return os.path.join(home, ".config")


def cache_dir() -> Path:
    """Directory holding stored captures."""
    base = os.environ.get("XDG_CACHE_HOME") or _user_cache_dir()
    return Path(base) / "glance" / "captures"


def config_dir() -> Path:
    """Directory holding the user configuration."""
    base = os.environ.get("XDG_CONFIG_HOME") or _user_config_dir()
    return Path(base) / "glance"


def config_path() -> Path:
    """Path of the user presets file."""
    return config_dir() / "presets.csv"


def capture_path(capture_id: str) -> Path:
    """Path of the stored capture with the given ID."""
    return cache_dir() / f"{capture_id}.txt"


def ensure_cache_dir() -> Path:
    """Create the capture directory if needed and return it."""
    directory = cache_dir()
    directory.mkdir(mode=0o755, parents=True, exist_ok=True)
    return directory


def ensure_config_dir() -> Path:
    """Create the configuration directory if needed and return it."""
    directory = config_dir()
    directory.mkdir(mode=0o755, parents=True, exist_ok=True)
    return directory