"""
Shared fixtures: an app wired to an in-memory SQLite store.
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from config.settings import Settings
from database.session import create_session_factory, create_tables, enable_sqlite_foreign_keys
from main import create_app

TEST_SECRET = "test-jwt-secret"


def make_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    return engine


def make_settings(**overrides) -> Settings:
    values = {
        "jwt_secret": TEST_SECRET,
        "bcrypt_rounds": 4,
        "cors_origins": ["http://localhost:3000"],
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings, engine=make_engine())


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def signup(client, name="Ann", email="ann@x.com", password="pw123456"):
    return client.post(
        "/users/signup",
        json={"name": name, "email": email, "password": password},
    )


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def ann_token(client):
    return signup(client).json()["token"]


@pytest.fixture
def bob_token(client):
    return signup(client, name="Bob", email="bob@x.com", password="hunter22").json()["token"]


@pytest_asyncio.fixture
async def db():
    """A bare session against a fresh in-memory store (no HTTP layer)."""
    engine = make_engine()
    await create_tables(engine)
    factory = create_session_factory(engine)
    async with factory() as session:
        yield session
    await engine.dispose()
