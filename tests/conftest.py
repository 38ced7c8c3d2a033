"""Shared fixtures: a throwaway SQLite database per test and API helpers."""
import asyncio
import os
import tempfile

_BOOTSTRAP_DIR = tempfile.mkdtemp(prefix="homefinder-tests-")
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{os.path.join(_BOOTSTRAP_DIR, 'bootstrap.db')}"
)
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from app import app  # noqa: E402
from core.breaker import breaker  # noqa: E402
from core.get_db import Base, get_db_async, make_engine, make_session_factory  # noqa: E402
import models.models  # noqa: E402,F401

DEFAULT_PASSWORD = "secret123"


async def _create_tables(engine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'homefinder.db'}", poolclass=NullPool
    )
    asyncio.run(_create_tables(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture(autouse=True)
def reset_breaker():
    breaker.reset()
    yield
    breaker.reset()


@pytest.fixture
def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_async] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


class Api:
    """Thin helpers over the HTTP API for arranging test data."""

    def __init__(self, client):
        self.client = client

    def register(self, username, role="tenant", full_name=None, email=None):
        res = self.client.post(
            "/api/auth/register",
            json={
                "username": username,
                "fullName": full_name or username.title(),
                "email": email or f"{username}@example.com",
                "password": DEFAULT_PASSWORD,
                "role": role,
            },
        )
        assert res.status_code == 201, res.text
        body = res.json()
        return {"id": body["user"]["id"], "token": body["token"], **body["user"]}

    def create_property(self, owner, **overrides):
        payload = {
            "name": "Cozy Studio",
            "description": "Bright studio close to the train station.",
            "price": 1500000,
            "location": "Central Jakarta",
            "type": "apartment",
        }
        payload.update(overrides)
        res = self.client.post(
            "/api/properties", json=payload, headers=bearer(owner["token"])
        )
        assert res.status_code == 201, res.text
        return res.json()["property"]

    def send(self, sender, receiver, prop, content):
        res = self.client.post(
            "/api/messages",
            json={
                "receiverId": receiver["id"],
                "propertyId": prop["id"],
                "content": content,
            },
            headers=bearer(sender["token"]),
        )
        assert res.status_code == 201, res.text
        return res.json()["data"]

    def conversations(self, user):
        res = self.client.get(
            "/api/messages/conversations", headers=bearer(user["token"])
        )
        assert res.status_code == 200, res.text
        return res.json()["conversations"]

    def unread_count(self, user):
        res = self.client.get(
            "/api/messages/unread-count", headers=bearer(user["token"])
        )
        assert res.status_code == 200, res.text
        return res.json()["count"]


@pytest.fixture
def api(client):
    return Api(client)


@pytest.fixture
def owner(api):
    return api.register("ownerbob", role="owner", full_name="Bob Owner")


@pytest.fixture
def tenant(api):
    return api.register("tenantann", full_name="Ann Tenant")


@pytest.fixture
def listing(api, owner):
    return api.create_property(owner)
