"""Configuration helpers."""

from .settings_utils import (
    env_bool,
    env_path,
    env_str,
    parse_bool,
)

__all__ = [
    "env_bool",
    "env_path",
    "env_str",
    "parse_bool",
]
