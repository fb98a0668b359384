"""
Общие фикстуры: SQLite в памяти (aiosqlite), сессии, HTTP клиент.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from personal_blog.domain.entities.user import User
from personal_blog.infrastructure.config.database import create_engine_for, get_db_session
from personal_blog.infrastructure.persistence.migrations import init_database
from personal_blog.infrastructure.persistence.user_repository_impl import UserRepositoryImpl

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def engine():
    engine = create_engine_for(TEST_DATABASE_URL, poolclass=StaticPool)
    await init_database(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_user(session):
    """Создать пользователя напрямую через репозиторий."""

    async def _make_user(email="ann@example.com", name="Ann"):
        return await UserRepositoryImpl(session).create(User(email=email, name=name), "not-a-real-hash")

    return _make_user


@pytest.fixture
def app(session_factory):
    from personal_blog.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register(client):
    """Зарегистрировать пользователя через API, вернуть заголовки с токеном."""

    async def _register(email="ann@example.com", password="secret1", name="Ann"):
        response = await client.post(
            "/api/v1/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {"Authorization": f"Bearer {body['token']}"}, body["user"]

    return _register
