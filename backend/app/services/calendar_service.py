"""Calendar Service.

Adds public holidays to a user's calendar and lists the stored ones.
Holidays are fetched live from the holiday API, filtered by loose name
matching, and deduplicated against events already in the calendar.
"""

import logging
import uuid
from collections.abc import Iterable, Sequence
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, PersistenceError
from app.models.calendar_event import CalendarEvent
from app.models.user import User
from app.schemas.calendar import AddHolidaysResult
from app.schemas.holiday import Holiday
from app.services import holiday_client

logger = logging.getLogger(__name__)

NO_HOLIDAYS_MESSAGE = "No holidays found to add to calendar"
ALL_EXIST_MESSAGE = "All holidays already exist"


# ---------------------------------------------------------------------------
# Persistence access
# ---------------------------------------------------------------------------

async def user_exists(db: AsyncSession, user_id: uuid.UUID) -> bool:
    try:
        result = await db.execute(select(User.id).where(User.id == user_id))
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Failed to look up user {user_id}") from exc
    return result.scalar_one_or_none() is not None


async def list_user_events(db: AsyncSession, user_id: uuid.UUID) -> Sequence[CalendarEvent]:
    """All calendar events of a user, oldest date first."""
    try:
        result = await db.execute(
            select(CalendarEvent)
            .where(CalendarEvent.user_id == user_id)
            .order_by(CalendarEvent.date, CalendarEvent.created_at)
        )
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Failed to load calendar of user {user_id}") from exc
    return result.scalars().all()


async def find_events_in_window(
    db: AsyncSession,
    user_id: uuid.UUID,
    country_code: str,
    start: date,
    end: date,
) -> Sequence[CalendarEvent]:
    """Events of a user for one country with ``start <= date <= end``."""
    try:
        result = await db.execute(
            select(CalendarEvent).where(
                CalendarEvent.user_id == user_id,
                CalendarEvent.country_code == country_code,
                CalendarEvent.date >= start,
                CalendarEvent.date <= end,
            )
        )
    except SQLAlchemyError as exc:
        raise PersistenceError(f"Failed to load calendar of user {user_id}") from exc
    return result.scalars().all()


async def insert_events(db: AsyncSession, events: list[CalendarEvent]) -> None:
    """Insert all events in a single flush."""
    try:
        db.add_all(events)
        await db.flush()
    except SQLAlchemyError as exc:
        raise PersistenceError("Failed to save calendar events") from exc


# ---------------------------------------------------------------------------
# Holiday selection
# ---------------------------------------------------------------------------

def filter_holidays(
    holidays: Iterable[Holiday],
    requested_names: list[str] | None,
) -> list[Holiday]:
    """Keep holidays whose name or local name contains any requested term.

    Matching is a case-insensitive substring test, so ``"christmas"``
    selects ``"Christmas Day"``.  Without requested names every holiday
    is kept.
    """
    holidays = list(holidays)
    if not requested_names:
        return holidays

    terms = [term.lower() for term in requested_names]
    return [
        holiday
        for holiday in holidays
        if any(
            term in holiday.name.lower() or term in holiday.local_name.lower()
            for term in terms
        )
    ]


def build_calendar_event(user_id: uuid.UUID, holiday: Holiday) -> CalendarEvent:
    scope = "National" if holiday.is_global else "Regional"
    return CalendarEvent(
        user_id=user_id,
        title=holiday.name,
        date=holiday.date,
        country_code=holiday.country_code,
        holiday_type=", ".join(holiday.types),
        description=f"{holiday.local_name} - {scope} holiday in {holiday.country_code}",
    )


def deduplicate(
    candidates: Iterable[CalendarEvent],
    existing: Iterable[CalendarEvent],
) -> list[CalendarEvent]:
    """Drop candidates whose (title, day) is already taken.

    Also drops repeats within ``candidates`` so a single batch never
    carries the same (title, day) twice.
    """
    taken = {(event.title, event.date) for event in existing}
    unique: list[CalendarEvent] = []
    for event in candidates:
        key = (event.title, event.date)
        if key in taken:
            continue
        taken.add(key)
        unique.append(event)
    return unique


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

async def _require_user(db: AsyncSession, user_id: uuid.UUID) -> None:
    if not await user_exists(db, user_id):
        logger.warning("User with ID %s not found", user_id)
        raise NotFoundError(f"User with ID {user_id} not found")


async def get_user_holidays(db: AsyncSession, user_id: uuid.UUID) -> Sequence[CalendarEvent]:
    """Return the stored holidays of a user ordered by date.

    Raises:
        NotFoundError: The user does not exist.
    """
    logger.debug("Retrieving holidays for user %s", user_id)
    await _require_user(db, user_id)

    events = await list_user_events(db, user_id)
    logger.debug("Found %d holidays for user %s", len(events), user_id)
    return events


async def add_holidays_to_calendar(
    db: AsyncSession,
    user_id: uuid.UUID,
    country_code: str,
    year: int,
    requested_names: list[str] | None = None,
) -> AddHolidaysResult:
    """Add the public holidays of ``country_code`` in ``year`` to a calendar.

    Raises:
        NotFoundError: The user does not exist.
        InvalidRequestError: The holiday API has no data for the country/year.
        UpstreamUnavailableError: The holiday API could not be reached.
        PersistenceError: Reading or writing calendar events failed.
    """
    logger.debug(
        "Adding holidays for %s in %d to user %s", country_code, year, user_id,
    )
    await _require_user(db, user_id)

    holidays = await holiday_client.fetch_public_holidays(country_code, year)
    selected = filter_holidays(holidays, requested_names)

    if not selected:
        logger.debug("No holidays found to add")
        return AddHolidaysResult(added=0, message=NO_HOLIDAYS_MESSAGE)

    candidates = [build_calendar_event(user_id, holiday) for holiday in selected]
    existing = await find_events_in_window(
        db, user_id, country_code, date(year, 1, 1), date(year, 12, 31),
    )
    unique = deduplicate(candidates, existing)

    if not unique:
        logger.debug("All holidays already exist")
        return AddHolidaysResult(added=0, message=ALL_EXIST_MESSAGE)

    await insert_events(db, unique)

    logger.info("Added %d holidays to calendar for user %s", len(unique), user_id)
    return AddHolidaysResult(
        added=len(unique),
        message=f"Successfully added {len(unique)} holidays to calendar",
    )
