"""
Database connection (PostgreSQL or SQLite)
"""
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings

settings = get_settings()

# Base class for models
Base = declarative_base()


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for the given URL with pool settings per dialect"""
    if database_url.startswith("sqlite"):
        # SQLite - local development and tests
        kwargs = {"connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # one shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **kwargs)

    # PostgreSQL - production
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=echo
    )


def create_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autoflush=False, bind=bind)


# Engine and session factory exist only when a database is configured
engine: Optional[Engine] = None
SessionLocal: Optional[sessionmaker] = None

if settings.DATABASE_URL:
    engine = create_db_engine(settings.DATABASE_URL, echo=settings.DEBUG and settings.LOG_LEVEL == "DEBUG")
    SessionLocal = create_session_factory(engine)


def init_db(bind: Optional[Engine] = None):
    """
    Create all tables defined in the models
    """
    from . import models  # noqa: F401  registers the tables on Base.metadata

    Base.metadata.create_all(bind=bind or engine)
