"""Configuration for the encryption engine."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any

from coldl3.encryption.errors import InvalidDataFormatError, wrap_exception


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class EncryptionConfig:
    """Settings of the encryption engine."""

    algorithm: str = "AEGIS-256X"
    key_size: int = 32
    iv_size: int = 16
    enable_hardware_acceleration: bool = True
    cache_size: int = 1000

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as a plain dictionary."""
        return asdict(self)

    def to_json(self) -> str:
        """Serialise the configuration to compact JSON."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EncryptionConfig:
        """Build a configuration from a mapping holding every field."""
        if not isinstance(data, Mapping):
            raise InvalidDataFormatError("expected an object")
        for field in fields(cls):
            if field.name not in data:
                raise InvalidDataFormatError(f"missing field `{field.name}`")
        if not isinstance(data["algorithm"], str):
            raise InvalidDataFormatError("`algorithm` must be a string")
        for name in ("key_size", "iv_size", "cache_size"):
            value = data[name]
            if not _is_int(value) or value < 0:
                raise InvalidDataFormatError(f"`{name}` must be a non-negative integer")
        if not isinstance(data["enable_hardware_acceleration"], bool):
            raise InvalidDataFormatError("`enable_hardware_acceleration` must be a boolean")
        return cls(**{field.name: data[field.name] for field in fields(cls)})

    @classmethod
    def from_json(cls, text: str | bytes) -> EncryptionConfig:
        """Parse a configuration from JSON."""
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise wrap_exception(exc) from exc
        return cls.from_dict(data)