"""Tests for model normalisation and the in-memory fallback bootstrap."""

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app import database
from app.config import settings
from app.models.calendar_event import CalendarEvent
from app.models.user import User


class TestModels:
    async def test_email_is_lowercased(self, db_session):
        user = User(name="  Ada  ", email="  Ada@Example.COM ")
        db_session.add(user)
        await db_session.flush()

        assert user.email == "ada@example.com"
        assert user.name == "Ada"

    def test_country_code_is_uppercased(self):
        event = CalendarEvent(title=" Christmas Day ", country_code="us")

        assert event.country_code == "US"
        assert event.title == "Christmas Day"


class TestSeedTestUser:
    async def test_seeds_only_into_empty_table(self):
        engine = database.create_fallback_engine("sqlite+aiosqlite://")
        session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
        await database.create_tables(engine)

        async with session_factory() as session:
            assert await database.seed_test_user(session) is True
            assert await database.seed_test_user(session) is False
            users = (await session.execute(select(User))).scalars().all()

        assert len(users) == 1
        assert users[0].id == uuid.UUID(settings.SEED_USER_ID)
        assert users[0].email == "test@example.com"
        await engine.dispose()


class TestInitDatabase:
    async def test_falls_back_when_primary_unreachable(self, monkeypatch):
        unreachable = create_async_engine("sqlite+aiosqlite:////nonexistent-dir/holidays.db")
        monkeypatch.setattr(database, "engine", unreachable)
        monkeypatch.setattr(database, "async_session", async_sessionmaker(bind=unreachable))

        await database.init_database()

        assert database.engine is not unreachable
        assert database.engine.url.drivername == "sqlite+aiosqlite"
        async with database.async_session() as session:
            user = await session.get(User, uuid.UUID(settings.SEED_USER_ID))
        assert user is not None
        assert user.name == "Test User"

        await database.close_database()

    async def test_uses_primary_when_reachable(self, monkeypatch):
        primary = database.create_fallback_engine("sqlite+aiosqlite://")
        monkeypatch.setattr(database, "engine", primary)

        await database.init_database()

        assert database.engine is primary
        async with primary.connect() as conn:
            tables = await conn.run_sync(
                lambda sync_conn: sync_conn.dialect.get_table_names(sync_conn)
            )
        assert {"users", "calendar_events"} <= set(tables)
        await primary.dispose()
