"""
JSON-file persistence adapter.

The whole vault lives in a single JSON object ``name -> record`` that is
read once at startup and rewritten in full after each mutation.
"""

from __future__ import annotations

from pathlib import Path
import contextlib
import json
import os
import tempfile
from typing import Mapping

from passkeep.domain.records import Record, Storage, storage_from_dict, storage_to_dict


class StorageError(Exception):
    """Base exception for backing-file failures."""


class StorageReadError(StorageError):
    """Raised when the backing file is missing or unreadable."""


class StorageParseError(StorageError):
    """Raised when the backing file is not a valid storage object."""


class StorageWriteError(StorageError):
    """Raised when the backing file cannot be written."""


class JsonFileStorage:
    """Reads/writes the full record map from/to one JSON file."""

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)

    def load(self) -> Storage:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as exc:
            raise StorageReadError(f"failed to read file {self.path}: {exc}") from exc
        except UnicodeDecodeError as exc:
            raise StorageParseError(f"failed to decode file {self.path}: {exc}") from exc
        try:
            return storage_from_dict(json.loads(raw))
        except (ValueError, TypeError) as exc:
            raise StorageParseError(f"failed to parse file {self.path}: {exc}") from exc

    def save(self, storage: Mapping[str, Record]) -> None:
        """Write the full map to a temp file and swap it in with os.replace.

        Concurrent saves never interleave inside the vault file; the last
        replace wins.
        """
        payload = json.dumps(storage_to_dict(storage), ensure_ascii=False, indent=2)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(payload)
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise StorageWriteError(f"failed to write file {self.path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
