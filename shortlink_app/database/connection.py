"""
Database engine and session management.

One engine per process, one session per request (see `get_db`).
"""

import logging
import os
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from shortlink_app.config import settings

logger = logging.getLogger("shortlink.database")

Base = declarative_base()


def _is_memory_sqlite(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_db_engine(database_url: str) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    SQLite needs `check_same_thread=False` because FastAPI runs sync routes
    in a threadpool. In-memory SQLite shares one connection (StaticPool) so
    every session sees the same database. For file-backed SQLite the parent
    directory is created if it doesn't exist yet.
    """
    url = make_url(database_url)
    engine_kwargs = {}

    if url.get_backend_name() == "sqlite":
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(database_url):
            engine_kwargs["poolclass"] = StaticPool
        else:
            directory = os.path.dirname(os.path.abspath(url.database))
            os.makedirs(directory, exist_ok=True)

    return create_engine(database_url, **engine_kwargs)


engine = create_db_engine(settings.sqlalchemy_database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine = None) -> None:
    """Create tables if missing. Safe to call any number of times."""
    # Import models so they're registered with Base
    from shortlink_app.models import URL  # noqa: F401

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database schema ready (%s)", bind.url.render_as_string(hide_password=True))


def get_db() -> Iterator[Session]:
    """FastAPI dependency: yield a session and close it after the request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
