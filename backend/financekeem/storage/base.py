"""
Storage adapter interface shared by the SQL and local JSON backends
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from ..errors import NotFound, ValidationError
from ..models import Lead, Form, Quiz, BookingPage, Booking, FormSubmission, QuizResponse
from ..services.ids import new_id

MODELS = {
    "leads": Lead,
    "forms": Form,
    "quizzes": Quiz,
    "booking_pages": BookingPage,
    "bookings": Booking,
    "form_submissions": FormSubmission,
    "quiz_responses": QuizResponse,
}

COLLECTIONS = tuple(MODELS)

# Field names per collection, taken from the table definitions so both backends agree
FIELDS: Dict[str, Tuple[str, ...]] = {
    name: tuple(column.name for column in model.__table__.columns)
    for name, model in MODELS.items()
}

# Uniqueness enforced by the store; a record with an empty value in a key is exempt
UNIQUE_KEYS: Dict[str, List[Tuple[str, ...]]] = {
    "leads": [("email",)],
    "forms": [("slug",)],
    "quizzes": [("slug",)],
    "booking_pages": [("slug",)],
    "bookings": [("client_email", "scheduled_date", "scheduled_time")],
}

# Fields that can never change once a record exists
IMMUTABLE_FIELDS = ("id", "created_at", "slug")


def check_collection(collection: str):
    if collection not in MODELS:
        raise ValueError(f"Unknown collection: {collection}")


def check_fields(collection: str, fields):
    unknown = [f for f in fields if f not in FIELDS[collection]]
    if unknown:
        raise ValueError(f"Unknown field(s) for {collection}: {', '.join(unknown)}")


def has_updated_at(collection: str) -> bool:
    return "updated_at" in FIELDS[collection]


def unique_fields(collection: str) -> Tuple[str, ...]:
    return tuple(f for key in UNIQUE_KEYS.get(collection, []) for f in key)


def sort_records(collection: str, records: List[dict]) -> List[dict]:
    """Bookings by appointment time, everything else newest first"""
    if collection == "bookings":
        return sorted(records, key=lambda r: (r.get("scheduled_date") or "", r.get("scheduled_time") or ""))
    return sorted(records, key=lambda r: r.get("created_at") or datetime.min, reverse=True)


def check_required(collection: str, record: dict):
    """Reject None for columns declared NOT NULL"""
    columns = MODELS[collection].__table__.columns
    for field, value in record.items():
        if value is None and not columns[field].nullable:
            raise ValidationError(f"{field} cannot be empty", field=field)


def _column_default(collection: str, field: str):
    column = MODELS[collection].__table__.columns[field]
    if column.default is not None and column.default.is_scalar:
        return column.default.arg
    return None


def prepare_new(collection: str, record: dict) -> dict:
    """Full record: every field present, column defaults applied, id and timestamps assigned"""
    now = datetime.now()
    prepared = {
        field: record[field] if record.get(field) is not None else _column_default(collection, field)
        for field in FIELDS[collection]
    }
    if not prepared.get("id"):
        prepared["id"] = new_id()
    if not prepared.get("created_at"):
        prepared["created_at"] = now
    if has_updated_at(collection) and not prepared.get("updated_at"):
        prepared["updated_at"] = now
    check_required(collection, prepared)
    return prepared


def prepare_patch(collection: str, patch: dict) -> dict:
    """Drop unknown and immutable keys, refresh updated_at"""
    prepared = {
        k: v for k, v in patch.items()
        if k in FIELDS[collection] and k not in IMMUTABLE_FIELDS
    }
    if has_updated_at(collection):
        prepared["updated_at"] = patch.get("updated_at") or datetime.now()
    check_required(collection, prepared)
    return prepared


class Store(ABC):
    """
    Uniform record access over the seven collections

    Records are plain dicts. Implementations raise NotFound for missing ids,
    Conflict for uniqueness violations and StorageUnavailable when the
    backend cannot be reached.
    """

    name = "base"

    @abstractmethod
    def get(self, collection: str) -> List[dict]:
        """All records of a collection in display order"""

    @abstractmethod
    def get_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        """Single record or None"""

    @abstractmethod
    def filter(self, collection: str, **criteria) -> List[dict]:
        """Records whose fields equal every criterion, in display order"""

    @abstractmethod
    def create(self, collection: str, record: dict) -> dict:
        """Insert a record and return it as stored"""

    @abstractmethod
    def update(self, collection: str, record_id: str, patch: dict) -> dict:
        """Apply a partial update and return the stored record"""

    @abstractmethod
    def delete(self, collection: str, record_id: str) -> None:
        """Remove a record"""

    @abstractmethod
    def clear(self) -> None:
        """Remove every record of every collection"""

    @abstractmethod
    def ping(self) -> bool:
        """True when the backend is reachable"""

    def find_one(self, collection: str, **criteria) -> Optional[dict]:
        records = self.filter(collection, **criteria)
        return records[0] if records else None

    def find_by_field(self, collection: str, field: str, value) -> Optional[dict]:
        return self.find_one(collection, **{field: value})

    def require(self, collection: str, record_id: str) -> dict:
        """get_by_id that raises NotFound"""
        record = self.get_by_id(collection, record_id)
        if record is None:
            raise NotFound(collection, record_id)
        return record
