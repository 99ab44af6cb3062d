"""Text and JSON file primitives for volume state.

Every write replaces the whole file through a temporary sibling and
`os.replace`, so a reader sees either the previous document or the new one.
"""

from __future__ import annotations

import contextlib
import json
import os
import tempfile
from pathlib import Path
from typing import Any

from podidentity.domain.errors import (
    VolumeDecodeError,
    VolumeEncodeError,
    VolumeIOError,
    VolumeNotFoundError,
)
from podidentity.infrastructure.config.settings_utils import env_str


FILE_MODE = 0o640
DIR_MODE = 0o750


def _fsync_enabled() -> bool:
    """Check if fsync is enabled for file writes."""
    value = env_str("PODIDENTITY_IO_FSYNC", "strict").lower()
    return value not in ("0", "false", "no", "off", "relaxed", "skip", "disabled")


def ensure_directory(path: str | Path, mode: int = DIR_MODE, *, parents: bool = False) -> None:
    """Create a directory with `mode`; an existing one is left as is.

    With `parents`, missing ancestors are created first (umask applies to them).
    """
    try:
        if parents:
            os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        os.mkdir(path, mode)
    except FileExistsError:
        if not os.path.isdir(path):
            raise VolumeIOError("exists and is not a directory", str(path), "mkdir")
        return
    except OSError as exc:
        raise VolumeIOError(str(exc), str(path), "mkdir") from exc
    try:
        # mkdir applies the umask; pin the mode explicitly.
        os.chmod(path, mode)
    except OSError as exc:
        raise VolumeIOError(str(exc), str(path), "mkdir") from exc


def write_text_file(
    path: str | Path,
    text: str,
    *,
    mode: int = FILE_MODE,
    operation: str = "write",
) -> None:
    """Write `text` to `path` as one whole-file replacement.

    The text is encoded before any file is created, and the temporary file is
    removed on every failure, so a failed write leaves the directory as it was.
    """
    target = str(path)
    try:
        payload = text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise VolumeEncodeError(f"{target}: not encodable as UTF-8: {exc}") from exc

    parent = os.path.dirname(target) or "."
    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=parent,
            prefix=f".{os.path.basename(target)}.",
            suffix=".tmp",
        )
    except OSError as exc:
        raise VolumeIOError(str(exc), target, operation) from exc

    try:
        with os.fdopen(fd, "wb") as handle:
            os.fchmod(handle.fileno(), mode)
            handle.write(payload)
            handle.flush()
            if _fsync_enabled():
                os.fsync(handle.fileno())
        os.replace(tmp_path, target)
    except BaseException as exc:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_path)
        if isinstance(exc, OSError):
            raise VolumeIOError(str(exc), target, operation) from exc
        raise


def read_text_file(path: str | Path, *, operation: str = "read") -> str:
    """Read a whole UTF-8 file; a missing file raises VolumeNotFoundError."""
    target = str(path)
    try:
        with open(target, "r", encoding="utf-8") as handle:
            return handle.read()
    except FileNotFoundError as exc:
        raise VolumeNotFoundError("file not found", target, operation) from exc
    except UnicodeDecodeError as exc:
        raise VolumeDecodeError(f"{target}: not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise VolumeIOError(str(exc), target, operation) from exc


def write_json_file(
    path: str | Path,
    data: Any,
    *,
    mode: int = FILE_MODE,
    operation: str = "write",
) -> None:
    """Serialize `data` to compact JSON and write it to `path`."""
    try:
        payload = json.dumps(
            data, ensure_ascii=False, allow_nan=False, separators=(",", ":")
        )
    except (TypeError, ValueError) as exc:
        raise VolumeEncodeError(f"JSON marshal: {exc}") from exc
    write_text_file(path, payload, mode=mode, operation=operation)


def read_json_file(path: str | Path, *, operation: str = "read") -> Any:
    """Read and decode a JSON document from `path`."""
    text = read_text_file(path, operation=operation)
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise VolumeDecodeError(f"JSON unmarshal {path}: {exc}") from exc
