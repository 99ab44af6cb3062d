"""Mount path hashing."""

from __future__ import annotations

import base64
import hashlib
import os


def hash_mount_path(mount_path: str) -> str:
    """Return the volume handle for `mount_path`.

    SHA-256 of the raw path bytes, base64 URL-safe alphabet, padding
    stripped. `os.fsencode` keeps surrogate-escaped names read from the
    filesystem byte for byte.
    The result is always 43 characters and safe as a single path segment.
    """
    digest = hashlib.sha256(os.fsencode(mount_path)).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
