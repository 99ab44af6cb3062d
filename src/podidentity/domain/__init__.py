"""Domain types for identity volumes."""

from podidentity.domain.errors import (
    IdentityVolumeError,
    InvalidHandleError,
    NoContextFoundError,
    PodIdentifierValidationError,
    VolumeDecodeError,
    VolumeEncodeError,
    VolumeIOError,
    VolumeNotFoundError,
)
from podidentity.domain.pod import PodIdentifier

__all__ = [
    "IdentityVolumeError",
    "InvalidHandleError",
    "NoContextFoundError",
    "PodIdentifier",
    "PodIdentifierValidationError",
    "VolumeDecodeError",
    "VolumeEncodeError",
    "VolumeIOError",
    "VolumeNotFoundError",
]
