"""
src/DB/session.py
======================================
Database Session Configuration Module
======================================

Creates the SQLAlchemy engine and the session factory used by every request
handler and background job.

Usage Example:
-------------
    from src.DB.session import SessionLocal

    with SessionLocal() as db:
        devices = device_repo.get_all_devices(db)

Session Configuration:
---------------------
- autocommit=False: Transactions must be explicitly committed
- autoflush=False: Pending changes are flushed explicitly by repositories
- bind=engine: Sessions are bound to the configured database engine

SQLite:
------
SQLite URLs (development, tests) get check_same_thread=False because FastAPI
runs synchronous endpoints in a threadpool, and foreign keys are switched on
per connection so ON DELETE CASCADE behaves like PostgreSQL.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from src.Core.config import settings


def build_engine(url: str, **kwargs) -> Engine:
    """
    Create an engine for the given URL with the dialect tweaks above.

    Args:
        url: SQLAlchemy database URL
        **kwargs: Extra create_engine() arguments (e.g. poolclass)

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        new_engine = create_engine(url, **kwargs)

        @event.listens_for(new_engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return new_engine

    kwargs.setdefault("pool_pre_ping", True)
    return create_engine(url, **kwargs)


# ============================================================
# DATABASE ENGINE CONFIGURATION
# ============================================================
engine = build_engine(settings.DATABASE_URL)


# ============================================================
# SESSION FACTORY CONFIGURATION
# ============================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)
