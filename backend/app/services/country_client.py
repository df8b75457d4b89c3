"""Country Client.

Thin wrappers around two public APIs:

- Date Nager: available countries and country info (names, borders)
- CountriesNow: population series and flag images
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from app.config import settings
from app.core.exceptions import NotFoundError, UpstreamUnavailableError
from app.schemas.country import (
    Country,
    CountryInfo,
    FlagEnvelope,
    PopulationEnvelope,
    PopulationPoint,
    PopulationRecord,
)

logger = logging.getLogger(__name__)


def _get_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Create an HTTP client; ``None`` keeps the httpx default timeout."""
    if timeout is None:
        return httpx.AsyncClient()
    return httpx.AsyncClient(timeout=timeout)


# ---------------------------------------------------------------------------
# Date Nager
# ---------------------------------------------------------------------------

async def fetch_available_countries() -> list[Country]:
    """Fetch the list of countries Date Nager has holiday data for."""
    url = f"{settings.DATE_NAGER_API_URL}/AvailableCountries"
    logger.debug("Getting countries from Date Nager")

    try:
        async with _get_client() as client:
            response = await client.get(url)
            response.raise_for_status()
        countries = [Country.model_validate(item) for item in response.json()]
    except (httpx.HTTPError, ValueError, TypeError) as exc:
        logger.error("Failed to get available countries: %s", exc)
        raise UpstreamUnavailableError("Failed to get available countries") from exc

    logger.debug("Received: %d countries", len(countries))
    return countries


async def fetch_country_info(country_code: str) -> CountryInfo:
    """Fetch name, region and borders of a country.

    Every failure surfaces as ``NotFoundError``; the log line tells a real
    404 apart from an upstream outage.
    """
    url = f"{settings.DATE_NAGER_API_URL}/CountryInfo/{country_code}"
    logger.debug("Getting country info for %s", country_code)

    try:
        async with _get_client() as client:
            response = await client.get(url)
            response.raise_for_status()
        if not response.content:
            raise NotFoundError(f"Country info not found for {country_code}")
        return CountryInfo.model_validate(response.json())
    except NotFoundError:
        logger.warning("Country info not found for %s (empty response)", country_code)
        raise
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code == 404:
            logger.warning("Country info not found for %s", country_code)
        else:
            logger.error(
                "Failed to get country info for %s: upstream status %d",
                country_code, exc.response.status_code,
            )
        raise NotFoundError(f"Country info not found for {country_code}") from exc
    except (httpx.HTTPError, ValueError, TypeError) as exc:
        logger.error("Failed to get country info for %s: %s", country_code, exc)
        raise NotFoundError(f"Country info not found for {country_code}") from exc


# ---------------------------------------------------------------------------
# CountriesNow
# ---------------------------------------------------------------------------

def _to_points(record: PopulationRecord) -> list[PopulationPoint]:
    return [
        PopulationPoint(year=str(count.year), value=count.value)
        for count in record.population_counts
    ]


def normalize_population(payload: Any, country_name: str) -> list[PopulationPoint]:
    """Reduce a CountriesNow population payload to the series for ``country_name``.

    The upstream answers with either a single-country object or an array of
    countries; both shapes are matched on the country name, case-insensitively.
    A logical upstream error or no match yields an empty series.
    """
    try:
        envelope = PopulationEnvelope.model_validate(payload)
    except ValidationError as exc:
        logger.warning("Unexpected population payload for %s: %s", country_name, exc)
        return []

    if envelope.error:
        logger.error("API returned error: %s", envelope.msg)
        return []

    wanted = country_name.lower()
    records = envelope.data if isinstance(envelope.data, list) else [envelope.data]
    for record in records:
        if record is not None and record.country.lower() == wanted:
            points = _to_points(record)
            logger.debug("Found population data with %d records", len(points))
            return points

    logger.warning("No matching population: %s", country_name)
    return []


async def fetch_population_series(country_name: str) -> list[PopulationPoint]:
    """Fetch the population series of a country by its common name.

    Raises:
        UpstreamUnavailableError: Network failure, timeout or non-2xx answer
            without a usable body.
    """
    url = f"{settings.COUNTRIES_NOW_API_URL}/countries/population"
    logger.debug("Getting population for %s", country_name)

    try:
        async with _get_client(timeout=settings.POPULATION_TIMEOUT_SECONDS) as client:
            response = await client.post(
                url,
                json={"country": country_name},
                headers={"Accept": "application/json"},
            )
    except httpx.HTTPError as exc:
        logger.error("Failed to get population data for %s: %s", country_name, exc)
        raise UpstreamUnavailableError(
            f"Failed to get population data for {country_name}"
        ) from exc

    logger.debug("Response status: %d", response.status_code)

    try:
        payload = response.json()
    except ValueError as exc:
        logger.error(
            "API error status: %d, unreadable body for %s", response.status_code, country_name,
        )
        raise UpstreamUnavailableError(
            f"Failed to get population data for {country_name}"
        ) from exc

    # CountriesNow reports unknown countries as a 4xx with {"error": true, ...}
    if response.is_error and not (isinstance(payload, dict) and payload.get("error")):
        logger.error("API error status: %d", response.status_code)
        logger.error("API error data: %s", payload)
        raise UpstreamUnavailableError(
            f"Failed to get population data for {country_name}"
        )

    return normalize_population(payload, country_name)


def match_flag(envelope: FlagEnvelope, country_name: str) -> str:
    """Pick a flag URL: exact name first, then either name containing the other."""
    wanted = country_name.lower()

    for record in envelope.data:
        if record.name.lower() == wanted:
            return record.flag

    for record in envelope.data:
        name = record.name.lower()
        if wanted in name or name in wanted:
            return record.flag

    return ""


async def fetch_flag_url(country_name: str) -> str:
    """Look up the flag image URL of a country. Never raises; misses yield ``""``."""
    url = f"{settings.COUNTRIES_NOW_API_URL}/countries/flag/images"
    logger.debug("Getting flag URL for %s", country_name)

    try:
        async with _get_client() as client:
            response = await client.get(url)
            response.raise_for_status()
        envelope = FlagEnvelope.model_validate(response.json())
    except Exception as exc:
        logger.error("Failed to get flag for %s: %s", country_name, exc)
        return ""

    flag = match_flag(envelope, country_name)
    if not flag:
        logger.warning("Flag not found for %s", country_name)
    return flag
