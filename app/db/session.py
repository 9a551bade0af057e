# app/db/session.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings, get_settings
from app.core.errors import PersistenceError

log = logging.getLogger("app.db")


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _is_memory_sqlite(url: str) -> bool:
    return _is_sqlite(url) and (url in {"sqlite://", "sqlite:///:memory:"} or ":memory:" in url)


def build_engine(settings: Settings) -> Engine:
    """
    Engine with a bounded connection pool.
    Requests wait up to DB_POOL_TIMEOUT seconds for a free connection
    instead of failing immediately when the pool is exhausted.
    """
    url = settings.database_url
    kwargs = {
        "pool_pre_ping": True,  # safer reconnects
        "echo": settings.db_echo,
        "future": True,
    }

    if _is_sqlite(url):
        kwargs["connect_args"] = {"check_same_thread": False}  # required for SQLite + threads

    if _is_memory_sqlite(url):
        # one shared connection, otherwise every checkout sees an empty database
        kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_size"] = settings.db_pool_size
        kwargs["max_overflow"] = settings.db_max_overflow
        kwargs["pool_timeout"] = settings.db_pool_timeout

    eng = create_engine(url, **kwargs)

    if _is_sqlite(url):
        # Enforce foreign keys in SQLite (needed for ON DELETE CASCADE)
        @event.listens_for(eng, "connect")
        def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON;")
            cursor.close()

    log.info("database engine ready backend=%s", eng.url.get_backend_name())
    return eng


engine = build_engine(get_settings())

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    future=True,
)


def get_db() -> Iterator[Session]:
    """Yield a DB session and make sure it's closed afterwards."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """
    Unit of work: commit when the block finishes, roll back every
    flushed statement of the block if any step raises.
    Driver and constraint failures surface as PersistenceError.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        log.error("transaction rolled back: %s", exc.__class__.__name__)
        raise PersistenceError() from exc
    except Exception:
        db.rollback()
        raise


def ping(db: Session) -> None:
    db.execute(text("SELECT 1"))
