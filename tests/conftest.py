"""
Shared pytest fixtures.

Uses a SQLite file database so no external server is required for tests.
Every test starts with empty tables.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.db.base import Base, get_db
from app.main import app
from app.services.snapshot import PayrollSettings, WorkEntryData

SQLITE_URL = "sqlite:///./test_juku_salary.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_tables():
    yield
    with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Snapshot builders for the pure core
# ---------------------------------------------------------------------------

@pytest.fixture()
def settings():
    return PayrollSettings()


def _make_entry(day, **kwargs) -> WorkEntryData:
    kwargs.setdefault("has_transport", False)
    return WorkEntryData(id=f"e-{day.isoformat()}", date=day, **kwargs)


@pytest.fixture()
def make_entry():
    """Build a WorkEntryData; transport is off unless asked for."""
    return _make_entry


@pytest.fixture()
def entry_map():
    def build(*entries: WorkEntryData) -> dict:
        return {e.date: e for e in entries}
    return build
