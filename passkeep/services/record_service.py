"""Record use cases: validate, mutate the store, persist the file."""

from __future__ import annotations

import logging
from typing import Iterable

from passkeep.domain.records import Record, Storage
from passkeep.domain.validation import validate_name, validate_record, validate_type
from passkeep.repositories.json_storage import JsonFileStorage, StorageWriteError
from passkeep.repositories.memory_store import RecordStore

logger = logging.getLogger(__name__)


class RecordError(Exception):
    """Base exception for record workflow."""


class RecordExistsError(RecordError):
    """Raised when appending a name that is already stored."""


class RecordNotFoundError(RecordError):
    """Raised when updating/deleting/reading a name that is not stored."""


class RecordService:
    """Wraps RecordStore mutations with validation and file persistence.

    Persistence is best-effort: when the file write fails after a successful
    store mutation the error is raised but the mutation stays in memory, so
    the file lags until the next successful write.
    """

    def __init__(self, store: RecordStore, storage: JsonFileStorage, record_types: Iterable[str]) -> None:
        self.store = store
        self.storage = storage
        self.record_types = tuple(record_types)

    # -------------------------- file --------------------------
    def load_from_file(self) -> None:
        """Replace the store with the backing file contents.

        Raises StorageReadError/StorageParseError and leaves the store as is.
        """
        data = self.storage.load()
        self.store.set_all(data)
        logger.info("loaded %d records from %s", len(data), self.storage.path)

    def persist_to_file(self) -> None:
        # snapshot is taken under the read lock; the write itself runs unlocked
        self.storage.save(self.store.get_all())

    # -------------------------- reads --------------------------
    def get_all(self) -> Storage:
        return self.store.get_all()

    def get_by_type(self, record_type: str) -> Storage:
        validate_type(record_type, self.record_types)
        return {name: record for name, record in self.store.get_all().items() if record.type == record_type}

    def get_by_name(self, name: str) -> Record:
        key = validate_name(name)
        record = self.store.get(key)
        if record is None:
            raise RecordNotFoundError("element not found")
        return record

    # -------------------------- mutations --------------------------
    def append(self, name: str, record: Record) -> None:
        key = validate_name(name)
        validate_record(record, self.record_types)
        if not self.store.insert(key, record):
            logger.info("append refused: %r already exists", key)
            raise RecordExistsError("element already exists")
        self._persist_after_mutation("append", key)

    def update_by_name(self, name: str, record: Record) -> None:
        key = validate_name(name)
        validate_record(record, self.record_types)
        if not self.store.update(key, record):
            logger.info("update refused: %r not found", key)
            raise RecordNotFoundError("element not found")
        self._persist_after_mutation("update", key)

    def delete_by_name(self, name: str) -> None:
        key = validate_name(name)
        if not self.store.delete(key):
            logger.info("delete refused: %r not found", key)
            raise RecordNotFoundError("element not found")
        self._persist_after_mutation("delete", key)

    def _persist_after_mutation(self, action: str, key: str) -> None:
        try:
            self.persist_to_file()
        except StorageWriteError as exc:
            logger.error("%s of %r kept in memory but file update failed: %s", action, key, exc)
            raise
