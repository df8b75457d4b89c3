"""SQLAlchemy ORM models.

All models are imported here so that ``Base.metadata`` knows every table
before ``create_all`` runs.
"""

from app.models.calendar_event import CalendarEvent  # noqa: F401
from app.models.user import User  # noqa: F401

__all__ = [
    "CalendarEvent",
    "User",
]
