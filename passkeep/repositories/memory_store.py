"""In-memory record map guarded by a reader/writer lock."""
from __future__ import annotations

import copy
from typing import Mapping, Optional

from passkeep.core.rwlock import ReadWriteLock
from passkeep.domain.records import Record, Storage


class RecordStore:
    """Authoritative name -> Record map.

    Values are copied on the way in and on the way out, so callers never
    share a Record instance with the store and ``get_all`` is a consistent
    snapshot as of the read.
    """

    def __init__(self) -> None:
        self._records: Storage = {}
        self._lock = ReadWriteLock()

    def set_all(self, storage: Mapping[str, Record]) -> None:
        fresh = copy.deepcopy(dict(storage))
        with self._lock.write_locked():
            self._records = fresh

    def get(self, name: str) -> Optional[Record]:
        with self._lock.read_locked():
            record = self._records.get(name)
            return copy.deepcopy(record) if record is not None else None

    def get_all(self) -> Storage:
        with self._lock.read_locked():
            return copy.deepcopy(self._records)

    def insert(self, name: str, record: Record) -> bool:
        value = copy.deepcopy(record)
        with self._lock.write_locked():
            if name in self._records:
                return False
            self._records[name] = value
            return True

    def update(self, name: str, record: Record) -> bool:
        value = copy.deepcopy(record)
        with self._lock.write_locked():
            if name not in self._records:
                return False
            self._records[name] = value
            return True

    def delete(self, name: str) -> bool:
        with self._lock.write_locked():
            if name not in self._records:
                return False
            del self._records[name]
            return True

    def reset(self) -> None:
        with self._lock.write_locked():
            self._records = {}

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._records)

    def __contains__(self, name: object) -> bool:
        with self._lock.read_locked():
            return name in self._records
