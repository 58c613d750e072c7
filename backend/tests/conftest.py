import os
import sys
from pathlib import Path
import pytest

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

# test settings must be in place before the unsaid package is imported
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("CORS_ORIGINS", "*")

# put backend/ on sys.path so `unsaid` and `manage` import without installing
backend_path = Path(__file__).resolve().parents[1]
if str(backend_path) not in sys.path:
    sys.path.insert(0, str(backend_path))

from unsaid.main import app
from unsaid.database import Base, enable_sqlite_foreign_keys
from unsaid.database import get_db as real_get_db
from unsaid.users import service as user_service


@pytest.fixture()
async def test_engine():
    # one private in-memory database per test
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db(test_engine):
    async_session = sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session


@pytest.fixture(autouse=True)
async def override_db(db):
    async def _get_db():
        yield db
    app.dependency_overrides[real_get_db] = _get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture()
def make_user(db):
    async def _make_user(username: str = "alice", email: str | None = None, password: str = "secret1"):
        return await user_service.create_user(
            db,
            username=username,
            email=email or f"{username}@example.com",
            password=password,
        )
    return _make_user


@pytest.fixture()
def register(client):
    """Register through the API and return (user_json, auth_headers)."""
    async def _register(username: str = "alice", password: str = "secret1", **extra):
        body = {"username": username, "email": f"{username}@example.com", "password": password, **extra}
        response = await client.post("/api/auth/register", json=body)
        assert response.status_code == 200, response.text
        payload = response.json()
        return payload["user"], {"Authorization": f"Bearer {payload['token']}"}
    return _register
