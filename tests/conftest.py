"""Pytest configuration and fixtures.

Database tests run against in-memory SQLite through the same
DatabaseBackend used in production; local-mode tests get a fresh JSON
file per test.
"""

import os
import tempfile

# Settings are read at import time, so the environment must be ready first.
# An empty DATABASE_URL also wins over any developer .env file.
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")
os.environ["DATABASE_URL"] = ""
os.environ["LOCAL_STORAGE_PATH"] = os.path.join(tempfile.mkdtemp(), "local_storage.json")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401  registers tables on Base.metadata
from app.core.local_storage import LocalStorage
from app.data.questions import GENERAL_QUESTIONS
from app.database import Base
from app.schemas.question import QuestionCreate
from app.services.question_bank import seed_default_questions
from app.stores import DatabaseBackend, LocalBackend, get_backend
from main import app as fastapi_app


def build_sqlite_backend():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)
    return engine, DatabaseBackend(factory)


# ── Backends and stores ──────────────────────────────────────────

@pytest.fixture
def db_backend():
    """Database backend with the default question bank loaded."""
    engine, backend = build_sqlite_backend()
    with backend.open() as store:
        seed_default_questions(store)
    yield backend
    engine.dispose()


@pytest.fixture
def store(db_backend):
    with db_backend.open() as store:
        yield store


@pytest.fixture
def general_only_store():
    """Question bank without any industry-specific questions."""
    engine, backend = build_sqlite_backend()
    with backend.open() as store:
        store.upsert_questions([QuestionCreate(industry=None, **q) for q in GENERAL_QUESTIONS])
        yield store
    engine.dispose()


@pytest.fixture
def local_storage(tmp_path) -> LocalStorage:
    return LocalStorage(str(tmp_path / "local_storage.json"))


@pytest.fixture
def local_backend(local_storage) -> LocalBackend:
    return LocalBackend(local_storage)


@pytest.fixture
def local_store(local_backend):
    with local_backend.open() as store:
        yield store


# ── HTTP clients ─────────────────────────────────────────────────

@pytest.fixture
def client(db_backend):
    """Test client wired to the SQLite database backend."""
    fastapi_app.dependency_overrides[get_backend] = lambda: db_backend
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def local_client(local_backend):
    """Test client wired to the local JSON backend."""
    fastapi_app.dependency_overrides[get_backend] = lambda: local_backend
    yield TestClient(fastapi_app)
    fastapi_app.dependency_overrides.clear()


# ── Test data ────────────────────────────────────────────────────

@pytest.fixture
def user(store):
    """A stored user with profile."""
    return store.create_user(
        email="founder@example.com",
        hashed_password="not-a-real-hash",
        full_name="Thandi Founder",
        company="Acme (Pty) Ltd",
    )


@pytest.fixture
def auth_headers(client) -> dict:
    """Sign up through the API and return bearer headers."""
    response = client.post(
        "/api/auth/signup",
        json={
            "email": "owner@example.com",
            "password": "SecurePassword123!",
            "full_name": "Owner Person",
        },
    )
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
