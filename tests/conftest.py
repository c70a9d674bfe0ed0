"""Root conftest: shared test configuration."""

import os

# Keep tests off the on-disk default database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models
from database import Base, get_db
from main import app
from services.clock_service import get_clock

FIXED_NOW_MS = 1_700_000_000_000


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW_MS)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def ledger_snapshot(db):
    """Callable returning every row of every ledger table, ordered by primary key."""
    tables = [models.RoomCounter, models.Room, models.RoomMember, models.Deposit, models.EventLog]

    def take():
        result = {}
        for model in tables:
            table = model.__table__
            query = table.select().order_by(*table.primary_key.columns)
            result[table.name] = [tuple(row) for row in db.execute(query).all()]
        return result

    return take
