"""Async database engine, sessions and environment bootstrap.

The primary store is whatever ``DATABASE_URL`` points at.  When it cannot
be reached at startup the application switches to an in-process SQLite
store seeded with a single test user, so the API stays usable in local
development without a database server.
"""

import asyncio
import logging
import uuid

from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from app.config import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
)

async_session = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base for all SQLAlchemy ORM models."""
    pass


async def get_db() -> AsyncSession:
    """FastAPI dependency that yields an async database session."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def create_fallback_engine(url: str | None = None) -> AsyncEngine:
    """Create an engine for the in-process store.

    SQLite in-memory databases live as long as their connection, so every
    session shares one connection through ``StaticPool``.
    """
    return create_async_engine(
        url or settings.FALLBACK_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


async def create_tables(target: AsyncEngine) -> None:
    import app.models  # noqa: F401 (populates Base.metadata)

    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_test_user(session: AsyncSession) -> bool:
    """Insert the example user when the users table is empty.

    Returns True if a user was created.
    """
    from app.models.user import User

    count = (await session.execute(select(func.count()).select_from(User))).scalar_one()
    if count:
        return False

    session.add(
        User(
            id=uuid.UUID(settings.SEED_USER_ID),
            name="Test User",
            email="test@example.com",
        )
    )
    await session.flush()
    logger.info("Created test user with ID: %s", settings.SEED_USER_ID)
    return True


async def _ping(target: AsyncEngine) -> None:
    async with target.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def init_database() -> None:
    """Connect to the primary store or fall back to the in-process one."""
    global engine, async_session

    try:
        await asyncio.wait_for(
            _ping(engine), timeout=settings.DATABASE_CONNECT_TIMEOUT_SECONDS,
        )
        await create_tables(engine)
        logger.info("Connected to database: %s", engine.url.render_as_string(hide_password=True))
        return
    except Exception as exc:
        logger.warning("Failed to connect to configured database: %s", exc)
        logger.info("Falling back to in-memory database")

    await engine.dispose()
    engine = create_fallback_engine()
    async_session = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    await create_tables(engine)

    async with async_session() as session:
        await seed_test_user(session)
        await session.commit()
    logger.info("In-memory database started: %s", engine.url)


async def close_database() -> None:
    """Dispose the active engine on application shutdown."""
    await engine.dispose()
    logger.info("Database connections closed")
