"""Storage infrastructure for identity volumes.

Provides path guards and whole-file JSON persistence.
"""

from .path_guard import (
    PathEscapeError,
    is_valid_handle,
    normalize_path,
    validate_handle,
)
from .io_text import (
    DIR_MODE,
    FILE_MODE,
    ensure_directory,
    read_json_file,
    read_text_file,
    write_json_file,
    write_text_file,
)

__all__ = [
    # Path guard
    "PathEscapeError",
    "is_valid_handle",
    "normalize_path",
    "validate_handle",
    # File I/O
    "DIR_MODE",
    "FILE_MODE",
    "ensure_directory",
    "read_json_file",
    "read_text_file",
    "write_json_file",
    "write_text_file",
]
