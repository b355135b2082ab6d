"""
Corkboard - Test configuration and fixtures.

The app reads its settings at import time, so the environment is set up
before ``app.main`` is imported.
"""
import asyncio
import os
import tempfile
from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient

_TMP_DIR = tempfile.mkdtemp(prefix="corkboard-tests-")

# Set testing environment
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["AUTO_CREATE_TABLES"] = "true"
os.environ["ENABLE_PUBLIC_SIGNUP"] = "true"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["BCRYPT_ROUNDS"] = "4"

from app.config import settings  # noqa: E402
from app.database import Base, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.services.broadcast import manager  # noqa: E402

API = settings.API_PREFIX
PASSWORD = "correct-horse-battery"


async def _reset_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """A client over a freshly emptied database."""
    asyncio.run(_reset_schema())
    manager.active_connections.clear()
    with TestClient(app) as test_client:
        yield test_client


def register(client: TestClient, username: str, password: str = PASSWORD) -> Dict:
    response = client.post(
        f"{API}/register",
        json={"username": username, "email": f"{username}@example.com", "password": password},
    )
    assert response.status_code == 200, response.text
    return response.json()


def login(client: TestClient, username: str, password: str = PASSWORD) -> str:
    response = client.post(f"{API}/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class Account:
    """A registered user with a live session."""

    def __init__(self, client: TestClient, username: str):
        user = register(client, username)
        self.id = user["id"]
        self.username = username
        self.token = login(client, username)
        self.headers = auth_headers(self.token)


@pytest.fixture
def alice(client) -> Account:
    """First registered user, and therefore the system admin."""
    return Account(client, "alice")


@pytest.fixture
def bob(client, alice) -> Account:
    return Account(client, "bob")


@pytest.fixture
def carol(client, bob) -> Account:
    return Account(client, "carol")


def create_board(client: TestClient, owner: Account, **fields) -> Dict:
    body = {"title": "Roadmap", "type": "P"}
    body.update(fields)
    response = client.post(f"{API}/boards", json=body, headers=owner.headers)
    assert response.status_code == 200, response.text
    return response.json()


def add_member(client: TestClient, owner: Account, board_id: str, user_id: str, **flags) -> Dict:
    body = {"userId": user_id}
    body.update(flags)
    response = client.post(f"{API}/boards/{board_id}/members", json=body, headers=owner.headers)
    assert response.status_code == 200, response.text
    return response.json()


def create_card(client: TestClient, owner: Account, board_id: str, **fields) -> Dict:
    body = {"title": "Write docs"}
    body.update(fields)
    response = client.post(f"{API}/boards/{board_id}/cards", json=body, headers=owner.headers)
    assert response.status_code == 200, response.text
    return response.json()
