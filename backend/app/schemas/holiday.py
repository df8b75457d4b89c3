import datetime as dt

from pydantic import Field

from app.schemas.common import CamelModel


class Holiday(CamelModel):
    """A public holiday as returned by the Date Nager API."""

    date: dt.date
    local_name: str
    name: str
    country_code: str
    is_global: bool = Field(False, alias="global")
    types: list[str] = []
    fixed: bool | None = None
    counties: list[str] | None = None
    launch_year: int | None = None
