"""Pod identifier recorded in each identity volume."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from podidentity.domain.errors import PodIdentifierValidationError, VolumeDecodeError


@dataclass(frozen=True)
class PodIdentifier:
    """Namespace and name of the pod that owns a volume."""

    namespace: str
    name: str

    def validate(self) -> "PodIdentifier":
        missing = []
        if not self.namespace:
            missing.append("namespace")
        if not self.name:
            missing.append("name")
        if missing:
            raise PodIdentifierValidationError(missing)
        return self

    def to_dict(self) -> Dict[str, str]:
        return {"namespace": self.namespace, "name": self.name}

    @classmethod
    def from_dict(cls, data: Any) -> "PodIdentifier":
        """Build from decoded JSON without validating emptiness."""
        if not isinstance(data, Mapping):
            raise VolumeDecodeError(
                f"pod identifier must be a JSON object, got {type(data).__name__}"
            )
        fields: Dict[str, str] = {}
        for key in ("namespace", "name"):
            value = data.get(key, "")
            if not isinstance(value, str):
                raise VolumeDecodeError(f"pod identifier field {key!r} must be a string")
            fields[key] = value
        return cls(**fields)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"
