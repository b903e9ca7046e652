"""
SQLAlchemy storage backend (PostgreSQL in production, SQLite locally)
"""
import logging
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..errors import Conflict, NotFound, StorageUnavailable, ValidationError
from .base import (
    MODELS,
    FIELDS,
    Store,
    check_collection,
    check_fields,
    prepare_new,
    prepare_patch,
    unique_fields,
)

logger = logging.getLogger(__name__)

# PostgreSQL unique_violation
UNIQUE_VIOLATION_PGCODE = "23505"


def integrity_error(collection: str, error: IntegrityError) -> Exception:
    """Unique violations become Conflict, any other constraint failure is a ValidationError"""
    orig = error.orig
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION_PGCODE or "unique" in str(orig).lower():
        return Conflict(collection, unique_fields(collection))
    logger.warning(f"Constraint violation on {collection}: {orig}")
    return ValidationError(f"{collection}: record violates a database constraint")


class SqlStore(Store):
    """Store backed by a relational database, one session per operation"""

    name = "sql"

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def _session(self, operation: str):
        db: Session = self.session_factory()
        try:
            yield db
        except (Conflict, NotFound, ValidationError):
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error during {operation}: {e}")
            raise StorageUnavailable(f"Database unavailable during {operation}") from e
        finally:
            db.close()

    @staticmethod
    def _as_record(obj) -> dict:
        return {name: getattr(obj, name) for name in FIELDS[obj.__tablename__]}

    def _ordered(self, collection: str, query):
        model = MODELS[collection]
        if collection == "bookings":
            return query.order_by(model.scheduled_date, model.scheduled_time)
        return query.order_by(model.created_at.desc())

    def get(self, collection: str) -> List[dict]:
        check_collection(collection)
        with self._session(f"get {collection}") as db:
            query = self._ordered(collection, db.query(MODELS[collection]))
            return [self._as_record(obj) for obj in query.all()]

    def get_by_id(self, collection: str, record_id: str) -> Optional[dict]:
        check_collection(collection)
        with self._session(f"get {collection}/{record_id}") as db:
            obj = db.get(MODELS[collection], record_id)
            return self._as_record(obj) if obj else None

    def filter(self, collection: str, **criteria) -> List[dict]:
        check_collection(collection)
        check_fields(collection, criteria)
        with self._session(f"filter {collection}") as db:
            query = db.query(MODELS[collection]).filter_by(**criteria)
            return [self._as_record(obj) for obj in self._ordered(collection, query).all()]

    def create(self, collection: str, record: dict) -> dict:
        check_collection(collection)
        with self._session(f"create {collection}") as db:
            obj = MODELS[collection](**prepare_new(collection, record))
            db.add(obj)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise integrity_error(collection, e) from e
            db.refresh(obj)
            return self._as_record(obj)

    def update(self, collection: str, record_id: str, patch: dict) -> dict:
        check_collection(collection)
        with self._session(f"update {collection}/{record_id}") as db:
            obj = db.get(MODELS[collection], record_id)
            if obj is None:
                raise NotFound(collection, record_id)
            for field, value in prepare_patch(collection, patch).items():
                setattr(obj, field, value)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise integrity_error(collection, e) from e
            db.refresh(obj)
            return self._as_record(obj)

    def delete(self, collection: str, record_id: str) -> None:
        check_collection(collection)
        with self._session(f"delete {collection}/{record_id}") as db:
            obj = db.get(MODELS[collection], record_id)
            if obj is None:
                raise NotFound(collection, record_id)
            db.delete(obj)
            db.commit()

    def clear(self) -> None:
        with self._session("clear") as db:
            for model in MODELS.values():
                db.query(model).delete()
            db.commit()
        logger.warning("All collections cleared")

    def ping(self) -> bool:
        try:
            with self._session("ping") as db:
                db.execute(text("SELECT 1"))
            return True
        except StorageUnavailable:
            return False
