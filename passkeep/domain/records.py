"""Record type stored in the vault and its JSON shape."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping

_TEXT_FIELDS = ("type", "password", "description", "additional")


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


@dataclass
class Record:
    """A single stored secret entry (password + metadata)."""

    type: str
    password: str = ""
    description: str = ""
    additional: str = ""
    favorite: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Record":
        """Build a Record from a JSON object; wrong value types raise ValueError."""
        if not isinstance(data, Mapping):
            raise ValueError("record must be a JSON object")
        favorite = data.get("favorite", False)
        if favorite is None:
            favorite = False
        if not isinstance(favorite, bool):
            raise ValueError("favorite must be a boolean")
        return cls(favorite=favorite, **{key: _text(data, key) for key in _TEXT_FIELDS})

    def to_dict(self) -> dict:
        return asdict(self)


Storage = Dict[str, Record]


def storage_to_dict(storage: Mapping[str, Record]) -> dict:
    return {name: record.to_dict() for name, record in storage.items()}


def storage_from_dict(data: Any) -> Storage:
    """Parse the backing-file object ``name -> record``; raises ValueError."""
    if not isinstance(data, Mapping):
        raise ValueError("storage must be a JSON object")
    return {str(name): Record.from_dict(value) for name, value in data.items()}
