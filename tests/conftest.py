# tests/conftest.py
# Test setup: temporary SQLite DB and dependency overrides for sessions/dates.

import os
import sys
from datetime import date
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine

# Keep the app's own engine away from the working directory
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

# Ensure repo root on sys.path so "import fintrack" works without installing
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import fintrack.models as _models  # noqa: F401,E402  # registers tables on SQLModel.metadata
from fintrack.db import get_session  # noqa: E402
from fintrack.main import app as fastapi_app  # noqa: E402
from fintrack.routers.dashboard import get_today  # noqa: E402

TODAY = date(2025, 3, 15)


@pytest.fixture()
def tmp_db_path(tmp_path: Path) -> Path:
    return tmp_path / "test_fintrack.db"


@pytest.fixture()
def test_engine(tmp_db_path: Path):
    # File-based SQLite so multiple connections share the same DB
    url = f"sqlite:///{tmp_db_path}"
    engine = create_engine(url, connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def db_session(test_engine):
    with Session(test_engine) as s:
        yield s


@pytest.fixture()
def client(test_engine):
    # Override the app's DB session and "today" for deterministic months
    def _get_test_session():
        with Session(test_engine) as s:
            yield s

    fastapi_app.dependency_overrides[get_session] = _get_test_session
    fastapi_app.dependency_overrides[get_today] = lambda: TODAY
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


def register(client, email="t@test.com", password="pw123456", name="Tester"):
    r = client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password},
    )
    assert r.status_code == 200, r.text
    return r.json()["data"]


def category_id(client, name):
    cats = client.get("/api/categories").json()["data"]
    return next(c["id"] for c in cats if c["name"] == name)


@pytest.fixture()
def user_client(client):
    """A client with a freshly registered, signed-in user."""
    register(client)
    return client
