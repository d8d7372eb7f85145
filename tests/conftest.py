import logging

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from readlog.app import create_app
from readlog.config import Settings
from readlog.database import Base, get_session
from readlog.models import User
from readlog.security import hash_password
import readlog.models  # noqa: F401

TEST_DB_URL = "sqlite+aiosqlite://"  # in-memory

engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
TestSession = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

TEST_SETTINGS = Settings(
    jwt_secret="test-secret-key-that-is-long-enough-for-hs256",
    database_url=TEST_DB_URL,
    bcrypt_rounds=4,
    create_tables=False,
)


@pytest.fixture(autouse=True)
async def setup_db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def settings():
    return TEST_SETTINGS


@pytest.fixture
def logger():
    return logging.getLogger("readlog.tests")


@pytest.fixture
async def session():
    async with TestSession() as s:
        yield s


@pytest.fixture
async def client(settings):
    app = create_app(settings)

    async def override_session():
        async with TestSession() as s:
            yield s

    app.dependency_overrides[get_session] = override_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def register(client, username="reader", email=None, password="secret123", name="Reader"):
    resp = await client.post("/register", json={
        "name": name,
        "username": username,
        "email": email or f"{username}@example.com",
        "password": password,
        "password_confirmation": password,
    })
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


async def login(client, username="reader", password="secret123"):
    resp = await client.post("/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


@pytest.fixture
async def reader(client):
    user = await register(client)
    headers = await login(client)
    return user, headers


@pytest.fixture
async def headers(reader):
    return reader[1]


@pytest.fixture
async def admin_headers(client, settings):
    async with TestSession() as s:
        s.add(User(
            name="Admin",
            username="admin",
            email="admin@example.com",
            password=hash_password("admin123", settings.bcrypt_rounds),
            role="admin",
        ))
        await s.commit()
    return await login(client, "admin", "admin123")
