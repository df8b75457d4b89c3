"""Shared fixtures for the holiday calendar backend tests.

Uses in-memory SQLite (aiosqlite) by default, so no PostgreSQL is required.
Set TEST_DATABASE_URL to override (e.g. for CI with real PostgreSQL).
Upstream APIs are never contacted: client tests fake them with
``httpx.MockTransport``, service and API tests patch the client functions.
"""

import os
import uuid
from collections.abc import Callable

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")

from app.database import Base  # noqa: E402

# ---------------------------------------------------------------------------
# Engine: SQLite in-memory with StaticPool (shared across connections)
# ---------------------------------------------------------------------------

_engine_kwargs = {}
if TEST_DATABASE_URL.startswith("sqlite"):
    _engine_kwargs = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }

_engine = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_kwargs)
_TestSession = async_sessionmaker(
    bind=_engine, class_=AsyncSession, expire_on_commit=False,
)


# ---------------------------------------------------------------------------
# Session-scoped: create / drop tables
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(scope="session", autouse=True)
async def _setup_tables():
    import app.models  # noqa: F401 (populates Base.metadata)

    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await _engine.dispose()


# ---------------------------------------------------------------------------
# Reset rate-limiter counters before every test
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _reset_rate_limits():
    """Clear in-memory rate-limit counters so tests never block each other."""
    from app.core.rate_limit import reset_limits

    reset_limits()


# ---------------------------------------------------------------------------
# Per-test session with rollback
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture()
async def db_session():
    async with _TestSession() as session:
        yield session
        await session.rollback()


# ---------------------------------------------------------------------------
# HTTP test client
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture()
async def client(db_session: AsyncSession):
    from app.database import get_db
    from app.main import app

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience: a stored user
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture()
async def seeded_user(db_session: AsyncSession):
    """Insert a user and return it."""
    from app.models.user import User

    suffix = uuid.uuid4().hex[:8]
    user = User(name="Test User", email=f"User-{suffix}@Example.com")
    db_session.add(user)
    await db_session.flush()
    return user


# ---------------------------------------------------------------------------
# Upstream fakes
# ---------------------------------------------------------------------------

class RecordedRequests(list):
    """Requests sent through a faked client, in order.

    ``timeouts`` holds the ``timeout`` argument of every client the module
    created, so ``None`` means the httpx default was kept.
    """

    def __init__(self):
        super().__init__()
        self.timeouts: list[float | None] = []


@pytest.fixture()
def mock_http(monkeypatch) -> Callable[[str, Callable[[httpx.Request], httpx.Response]], RecordedRequests]:
    """Route a client module's HTTP calls to ``handler``.

    Usage: ``requests = mock_http("app.services.holiday_client", handler)``.
    The returned list collects every request the module sent.
    """

    def _install(module: str, handler: Callable[[httpx.Request], httpx.Response]) -> RecordedRequests:
        seen = RecordedRequests()

        def _recording(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        def _factory(timeout: float | None = None) -> httpx.AsyncClient:
            seen.timeouts.append(timeout)
            return httpx.AsyncClient(transport=httpx.MockTransport(_recording))

        monkeypatch.setattr(f"{module}._get_client", _factory)
        return seen

    return _install
