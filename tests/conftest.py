"""
Shared fixtures: an in-memory SQLite database, a frozen clock and a
TestClient whose session and clock dependencies point at them.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.Controller.deps import get_DB, get_clock
from src.Core.time_utils import Clock
from src.DB.base import Base
from src.DB.session import build_engine
from src.main import app
from src.Schemas.device import Device_create
from src.Services import device_registry

T0 = 1_700_000_000_000
MINUTE = 60_000
HOUR = 60 * MINUTE
DAY = 24 * HOUR


class FrozenClock(Clock):
    """Clock that only moves when told to."""

    def __init__(self, start: int = T0):
        self.current = start

    def now_ms(self) -> int:
        return self.current

    def advance(self, ms: int) -> None:
        self.current += ms


@pytest.fixture
def engine():
    eng = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def client(session_factory, clock) -> Generator[TestClient, None, None]:
    def _get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_DB] = _get_db
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_device(db):
    """Factory creating a device through the registry."""

    def _make(name: str = "40-03", **fields):
        return device_registry.create_device(db, Device_create(name=name, **fields))

    return _make
