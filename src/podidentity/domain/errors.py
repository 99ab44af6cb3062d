"""Domain errors."""

from __future__ import annotations


class IdentityVolumeError(Exception):
    """Base error."""
    pass


class PodIdentifierValidationError(IdentityVolumeError, ValueError):
    """Pod identifier is missing required fields."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            f"invalid volume pod identifier: missing {', '.join(self.missing)}"
        )


class InvalidHandleError(IdentityVolumeError, ValueError):
    """Volume handle is not a single safe path segment."""
    pass


class VolumeIOError(IdentityVolumeError):
    """Filesystem operation on a volume failed."""

    def __init__(self, message: str, path: str = "", operation: str = ""):
        self.path = path
        self.operation = operation
        super().__init__(f"[{operation}] {path}: {message}" if operation else message)


class VolumeNotFoundError(VolumeIOError):
    """Volume file does not exist."""
    pass


class VolumeEncodeError(IdentityVolumeError):
    """Value could not be serialized to JSON."""
    pass


class VolumeDecodeError(IdentityVolumeError):
    """File content is not valid JSON of the expected shape."""
    pass


class NoContextFoundError(IdentityVolumeError):
    """No identity context has been saved for the volume yet."""

    def __init__(self, path: str = ""):
        self.path = path
        super().__init__("no context found")
