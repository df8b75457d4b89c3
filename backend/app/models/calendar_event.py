import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from app.database import Base
from app.models.user import _utcnow


class CalendarEvent(Base):
    __tablename__ = "calendar_events"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "country_code", "title", "date",
            name="uq_calendar_events_user_country_title_date",
        ),
        Index("ix_calendar_events_user_date", "user_id", "date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    country_code: Mapped[str] = mapped_column(String(2), nullable=False)
    holiday_type: Mapped[str] = mapped_column(String(255), nullable=False)  # e.g. "Public, Bank"
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )

    # Relationships
    user: Mapped["User"] = relationship(back_populates="calendar_events")  # noqa: F821

    @validates("title")
    def _strip_title(self, key: str, value: str) -> str:
        return value.strip()

    @validates("country_code")
    def _normalize_country_code(self, key: str, value: str) -> str:
        return value.strip().upper()

    @validates("description")
    def _strip_description(self, key: str, value: str | None) -> str | None:
        return value.strip() if value is not None else None

    def __repr__(self) -> str:
        return f"<CalendarEvent(id={self.id}, date={self.date}, title={self.title!r})>"
