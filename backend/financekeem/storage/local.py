"""
Local JSON storage backend, used when no database is configured
"""
import json
import logging
import os
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..errors import Conflict, NotFound, StorageUnavailable
from .base import (
    COLLECTIONS,
    UNIQUE_KEYS,
    Store,
    check_collection,
    check_fields,
    prepare_new,
    prepare_patch,
    sort_records,
)

logger = logging.getLogger(__name__)

TIMESTAMP_FIELDS = ("created_at", "updated_at")


def _encode(value):
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _decode_record(record: dict) -> dict:
    for field in TIMESTAMP_FIELDS:
        if isinstance(record.get(field), str):
            record[field] = datetime.fromisoformat(record[field])
    return record


class LocalStore(Store):
    """
    Store keeping every collection in one JSON file

    The file is read and written inside each operation under a lock, so two
    stores pointed at the same path in one process see each other's writes.
    """

    name = "local"

    def __init__(self, path):
        self.path = Path(path)
        self._lock = threading.RLock()

    def _load(self) -> dict:
        if not self.path.exists():
            return {name: [] for name in COLLECTIONS}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as e:
            logger.error(f"Cannot read local store {self.path}: {e}")
            raise StorageUnavailable(f"Local store {self.path} is unreadable") from e
        return {
            name: [_decode_record(r) for r in raw.get(name, [])]
            for name in COLLECTIONS
        }

    def _save(self, data: dict):
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data, default=_encode, indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Cannot write local store {self.path}: {e}")
            raise StorageUnavailable(f"Local store {self.path} is not writable") from e

    @contextmanager
    def _transaction(self):
        """Load, let the caller mutate, save"""
        with self._lock:
            data = self._load()
            yield data
            self._save(data)

    def _read(self, collection: str) -> List[dict]:
        with self._lock:
            return self._load()[collection]

    @staticmethod
    def _check_unique(collection: str, records: List[dict], candidate: dict):
        for key in UNIQUE_KEYS.get(collection, []):
            values = tuple(candidate.get(f) for f in key)
            if not all(values):
                continue
            for other in records:
                if other["id"] != candidate["id"] and tuple(other.get(f) for f in key) == values:
                    raise Conflict(collection, key)

    def get(self, collection: str) -> List[dict]:
        check_collection(collection)
        return sort_records(collection, self._read(collection))

    def get_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        check_collection(collection)
        return next((r for r in self._read(collection) if r["id"] == record_id), None)

    def filter(self, collection: str, **criteria) -> List[dict]:
        check_collection(collection)
        check_fields(collection, criteria)
        records = [
            r for r in self._read(collection)
            if all(r.get(field) == value for field, value in criteria.items())
        ]
        return sort_records(collection, records)

    def create(self, collection: str, record: dict) -> dict:
        check_collection(collection)
        with self._transaction() as data:
            new_record = prepare_new(collection, record)
            self._check_unique(collection, data[collection], new_record)
            data[collection].insert(0, new_record)
        return new_record

    def update(self, collection: str, record_id: str, patch: dict) -> dict:
        check_collection(collection)
        with self._transaction() as data:
            records = data[collection]
            index = next((i for i, r in enumerate(records) if r["id"] == record_id), None)
            if index is None:
                raise NotFound(collection, record_id)
            updated = {**records[index], **prepare_patch(collection, patch)}
            self._check_unique(collection, records, updated)
            records[index] = updated
        return updated

    def delete(self, collection: str, record_id: str) -> None:
        check_collection(collection)
        with self._transaction() as data:
            remaining = [r for r in data[collection] if r["id"] != record_id]
            if len(remaining) == len(data[collection]):
                raise NotFound(collection, record_id)
            data[collection] = remaining

    def clear(self) -> None:
        with self._lock:
            self._save({name: [] for name in COLLECTIONS})
        logger.warning("All collections cleared")

    def ping(self) -> bool:
        try:
            self._read("leads")
            return True
        except StorageUnavailable:
            return False
