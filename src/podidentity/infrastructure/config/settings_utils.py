"""Environment parsing helpers used by the settings model."""

from __future__ import annotations

import os
from pathlib import Path


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def parse_bool(value: object, *, default: bool = False) -> bool:
    """Parse a loose boolean value."""
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    raw = str(value).strip().lower()
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    return default


def env_str(name: str, default: str = "") -> str:
    value = os.environ.get(name)
    if value is None:
        return default
    return str(value).strip()


def env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    return parse_bool(value, default=default)


def env_path(name: str, default: str | Path) -> Path:
    """Read a filesystem path from the environment.

    Blank values fall back to `default`; `~` and `$VARS` are expanded.
    """
    raw = env_str(name, "")
    if not raw:
        return Path(default)
    return Path(os.path.expandvars(os.path.expanduser(raw)))
