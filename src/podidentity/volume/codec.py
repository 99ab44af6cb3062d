"""Conversion between caller context objects and JSON-compatible data.

Callers bring their own context shape: a pydantic model, a dataclass, or
plain JSON-compatible values.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from podidentity.domain.errors import VolumeDecodeError, VolumeEncodeError

T = TypeVar("T")


def to_jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        try:
            return value.model_dump(mode="json")
        except (TypeError, ValueError) as exc:
            raise VolumeEncodeError(f"JSON marshal: {exc}") from exc
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def from_jsonable(data: Any, shape: Optional[type[T]] = None) -> Any:
    """Decode `data` into `shape`; return `data` unchanged when no shape is given."""
    if shape is None:
        return data
    if isinstance(shape, type) and issubclass(shape, BaseModel):
        try:
            return shape.model_validate(data)
        except ValidationError as exc:
            raise VolumeDecodeError(f"JSON unmarshal into {shape.__name__}: {exc}") from exc
    if dataclasses.is_dataclass(shape):
        if not isinstance(data, Mapping):
            raise VolumeDecodeError(
                f"JSON unmarshal into {shape.__name__}: expected object, got {type(data).__name__}"
            )
        try:
            return shape(**data)
        except TypeError as exc:
            raise VolumeDecodeError(f"JSON unmarshal into {shape.__name__}: {exc}") from exc
    try:
        return shape(data)
    except (TypeError, ValueError) as exc:
        raise VolumeDecodeError(f"JSON unmarshal into {shape.__name__}: {exc}") from exc
