"""Country schemas.

Upstream payloads from Date Nager (available countries, country info) and
CountriesNow (population, flags) plus the aggregated ``CountryDetails``
returned to clients.
"""

from pydantic import Field

from app.schemas.common import CamelModel


class Country(CamelModel):
    country_code: str
    name: str


class CountryInfo(CamelModel):
    common_name: str
    official_name: str
    country_code: str
    region: str
    borders: list["CountryInfo"] | None = None


class PopulationPoint(CamelModel):
    year: str
    value: int


class PopulationCount(CamelModel):
    year: int | str
    value: int


class PopulationRecord(CamelModel):
    country: str
    code: str | None = None
    iso3: str | None = None
    population_counts: list[PopulationCount] = []


class PopulationEnvelope(CamelModel):
    """CountriesNow population response.

    ``data`` is a single record when the upstream matched the requested
    country, or the full list of countries otherwise.
    """

    error: bool = False
    msg: str = ""
    data: PopulationRecord | list[PopulationRecord] | None = None


class FlagRecord(CamelModel):
    name: str
    flag: str
    iso2: str | None = None
    iso3: str | None = None


class FlagEnvelope(CamelModel):
    error: bool = False
    msg: str = ""
    data: list[FlagRecord] = Field(default_factory=list)


class CountryBorder(CamelModel):
    name: str
    country_code: str


class CountryDetails(CamelModel):
    name: str
    country_code: str
    borders: list[CountryBorder] = []
    population: list[PopulationPoint] = []
    flag_url: str = ""
