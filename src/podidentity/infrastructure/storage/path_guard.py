"""Path guardrails for the host volume tree."""

from __future__ import annotations

import os
import re
from pathlib import Path

from podidentity.domain.errors import IdentityVolumeError, InvalidHandleError


_HANDLE_PATTERN = re.compile(r"^[A-Za-z0-9_\-]+$")


class PathEscapeError(IdentityVolumeError, ValueError):
    """Raised when a configured path is empty or unusable."""


def normalize_path(path: str | Path) -> Path:
    raw = str(path or "").strip()
    if not raw:
        raise PathEscapeError("path is required")
    expanded = os.path.expandvars(os.path.expanduser(raw))
    return Path(expanded).resolve(strict=False)


def validate_handle(handle: str) -> str:
    """Check that `handle` can be used as one directory name under the host root."""
    value = str(handle or "")
    if not _HANDLE_PATTERN.fullmatch(value):
        raise InvalidHandleError(f"invalid volume handle: {handle!r}")
    return value


def is_valid_handle(handle: str) -> bool:
    return bool(_HANDLE_PATTERN.fullmatch(str(handle or "")))
