"""
Shared test fixtures.

Every test gets its own SQLite file under pytest's tmp_path, so
tests never touch a real database and never see each other's data.
"""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from debt_ledger.api.deps import get_store
from debt_ledger.main import app
from debt_ledger.models.base import (
    Base,
    create_db_engine,
    make_session_factory,
)
from debt_ledger.store import DebtStore


class StepClock:
    """Deterministic clock: each call returns a time one second later."""

    def __init__(self, start=datetime(2024, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def engine(database_url):
    """Create all tables before the test, drop them after."""
    engine = create_db_engine(database_url)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Provide a database session for direct service testing."""
    session = make_session_factory(engine)()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def store(database_url, clock):
    """An open store on a fresh database, closed after the test."""
    with DebtStore(database_url, clock=clock) as store:
        yield store


@pytest.fixture
def client(store):
    """
    Provide a test client bound to the test store.

    The get_store dependency is overridden so the app uses our
    store instead of the one its lifespan would open.
    """
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
