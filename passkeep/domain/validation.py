"""Domain helpers for record name and type validation."""
from __future__ import annotations

from typing import Iterable

from passkeep.domain.records import Record

NAME_MIN_LENGTH = 4
NAME_MAX_LENGTH = 100


class ValidationError(Exception):
    """Base exception for rejected input."""


class InvalidNameError(ValidationError):
    """Raised when a record name does not satisfy the length rules."""


class UndefinedTypeError(ValidationError):
    """Raised when a record type is not in the configured allow-list."""


def validate_name(name: str | None) -> str:
    """Return the lower-cased, trimmed key for ``name``.

    Length is counted in codepoints on the raw input, before trimming.
    """
    if not name:
        raise InvalidNameError("the name field cannot be empty")
    if len(name) > NAME_MAX_LENGTH:
        raise InvalidNameError("the name is too long")
    if len(name) < NAME_MIN_LENGTH:
        raise InvalidNameError("the name is too short")
    key = name.lower().strip()
    if not key:
        raise InvalidNameError("the name field cannot be blank")
    return key


def validate_type(record_type: str | None, allowed_types: Iterable[str]) -> str:
    if record_type not in set(allowed_types):
        raise UndefinedTypeError("undefined record type")
    return record_type


def validate_record(record: Record, allowed_types: Iterable[str]) -> Record:
    validate_type(record.type, allowed_types)
    return record
