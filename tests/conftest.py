"""
Shared test configuration.

Every test that uses ``client`` gets its own SQLite file; the app lifespan
creates the tables on entry and disposes the engine on exit.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict, Tuple

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("ASYNC_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("TIME_ZONE", "UTC")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.core import database  # noqa: E402
from src.main import app  # noqa: E402

PASSWORD = "correct-horse-battery"


@pytest.fixture
def client(tmp_path, monkeypatch) -> TestClient:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    monkeypatch.setattr(database, "engine", engine)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client) -> Callable[[str], Tuple[dict, Dict[str, str]]]:
    """Register a user and return (user payload, auth headers)."""

    def _register(username: str) -> Tuple[dict, Dict[str, str]]:
        resp = client.post("/auth/register", json={"username": username, "password": PASSWORD})
        assert resp.status_code == 201, resp.text
        body = resp.json()
        return body["user"], {"Authorization": f"Bearer {body['access_token']}"}

    return _register
