"""
Pytest configuration and fixtures for Herdbook tests.

The app is pointed at a throwaway SQLite database and upload directory
before any ``src`` module is imported.
"""

import os
import shutil
import tempfile
from pathlib import Path

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="herdbook-tests-"))

os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_ROOT / 'test.db'}"
os.environ["UPLOAD_DIR"] = str(_TEST_ROOT / "uploads")
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["EMAIL_USER"] = ""
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["REQUIRE_EMAIL_VERIFICATION"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from src.core.configs import settings  # noqa: E402
from src.core.db import Base, SessionLocal, engine  # noqa: E402
import src.models.schema  # noqa: E402,F401
from src.main import app  # noqa: E402

PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)

ANIMAL_FORM = {
    "number": "A1",
    "type": "cow",
    "age": "2021-04-12",
    "status": "active",
    "gender": "female",
}


def pytest_sessionfinish(session, exitstatus):
    engine.dispose()
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)


# =============================================================================
# Database / storage fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def database():
    """Fresh tables for every test."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def upload_dir():
    """Empty upload directory for every test."""
    path = Path(settings.upload_dir)
    path.mkdir(parents=True, exist_ok=True)
    yield path
    for child in path.iterdir():
        child.unlink()


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# HTTP fixtures
# =============================================================================


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def register_and_login(client: TestClient, email: str, name: str = "Farmer", password: str = "secret123") -> dict:
    """Register an account and return Authorization headers for it."""
    res = client.post(
        "/auth/register", json={"name": name, "email": email, "password": password}
    )
    assert res.status_code == 201, res.text
    res = client.post("/auth/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest.fixture
def auth_headers(client) -> dict:
    return register_and_login(client, "owner@example.com", name="Owner")


@pytest.fixture
def other_headers(client) -> dict:
    return register_and_login(client, "neighbour@example.com", name="Neighbour")


@pytest.fixture
def png_upload():
    def _make(filename: str = "photo.png"):
        return {"image": (filename, PNG_BYTES, "image/png")}

    return _make


@pytest.fixture
def create_animal(client, auth_headers):
    """Create an animal for the default owner and return the JSON body."""

    def _create(headers: dict | None = None, files: dict | None = None, **overrides):
        form = {**ANIMAL_FORM, **overrides}
        res = client.post(
            "/animals", data=form, files=files, headers=headers or auth_headers
        )
        assert res.status_code == 201, res.text
        return res.json()

    return _create
