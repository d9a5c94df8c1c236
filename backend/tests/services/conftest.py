"""Service test fixtures — async DB, seeded users/profiles, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB
    - db_manager patched so the readiness probe sees the test engine
    - Settings overrides go through app.dependency_overrides[get_settings]

Design Decisions:
    - SQLite in-memory: fast, no external dependency; Postgres-only features
      (gen_random_uuid server default) are covered by Python-side defaults
"""

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from app.config import get_settings
from app.db.base import Base
from app.db.session import create_session_factory
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.infrastructure.session_provider import create_auth_user
from app.models.profile import Profile
import app.infrastructure.database as db_module
import app.models  # noqa: F401
from app.main import app

PASSWORD = "correct horse battery"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return create_session_factory(engine=test_engine)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def override_settings():
    """Apply Settings field overrides for the routes of one test."""
    def _apply(**fields):
        settings = get_settings().model_copy(update=fields)
        app.dependency_overrides[get_settings] = lambda: settings
        return settings
    return _apply


@pytest.fixture
async def viewer(test_db):
    """Signed-up user who will view other people's profiles."""
    return await create_auth_user(test_db, "viewer@example.com", PASSWORD)


@pytest.fixture
async def owner_profile(test_db):
    """Another user with a complete public profile."""
    user = await create_auth_user(test_db, "ana@example.com", PASSWORD)
    profile = Profile(
        id=user.id,
        name="  Ana Pérez ",
        avatar_url="https://cdn.example.com/ana.png",
        email="ana@example.com",
        phone="5551234",
        code_phone="+52",
        company="Acme",
        position=None,
    )
    test_db.add(profile)
    await test_db.commit()
    return profile


@pytest.fixture
async def login(client):
    """Sign the test client in; the session cookie sticks to the client."""
    async def _login(email: str, password: str = PASSWORD):
        res = await client.post(
            "/api/v1/auth/login", json={"email": email, "password": password},
        )
        assert res.json() == {"success": True, "error": None}
        return res
    return _login
