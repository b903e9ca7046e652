"""
Storage adapters: SQL database when DATABASE_URL is set, local JSON file otherwise
"""
import logging
from functools import lru_cache

from ..config import get_settings
from .base import COLLECTIONS, Store
from .local import LocalStore
from .sql import SqlStore

logger = logging.getLogger(__name__)

__all__ = ["COLLECTIONS", "Store", "LocalStore", "SqlStore", "get_store"]


@lru_cache()
def get_store() -> Store:
    """
    Backend chosen once per process and injected into the services

    Usage:
        @router.get("/leads")
        def list_leads(store: Store = Depends(get_store)):
            ...
    """
    settings = get_settings()
    if settings.DATABASE_URL:
        from ..database import SessionLocal, init_db

        init_db()
        logger.info("Using SQL store")
        return SqlStore(SessionLocal)

    logger.info(f"DATABASE_URL not set, using local store at {settings.LOCAL_STORE_PATH}")
    return LocalStore(settings.LOCAL_STORE_PATH)
