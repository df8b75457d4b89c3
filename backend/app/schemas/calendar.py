import datetime as dt
import uuid

from pydantic import ConfigDict, Field

from app.schemas.common import CamelModel, CountryCode


class AddHolidaysRequest(CamelModel):
    country_code: CountryCode
    year: int = Field(..., ge=2000, le=2050)
    holidays: list[str] | None = None  # free-text name filters, matched loosely


class AddHolidaysResult(CamelModel):
    added: int
    message: str


class CalendarEventResponse(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    title: str
    date: dt.date
    country_code: str
    holiday_type: str
    description: str | None = None
    created_at: dt.datetime
    updated_at: dt.datetime
    model_config = ConfigDict(from_attributes=True)
