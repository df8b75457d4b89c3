"""Holiday Client.

Fetches public holidays for a country and year from the Date Nager API.
"""

import logging

import httpx
from pydantic import ValidationError

from app.config import settings
from app.core.exceptions import InvalidRequestError, UpstreamUnavailableError
from app.schemas.holiday import Holiday

logger = logging.getLogger(__name__)


def _get_client() -> httpx.AsyncClient:
    """Create an HTTP client for the Date Nager API."""
    return httpx.AsyncClient()


async def fetch_public_holidays(country_code: str, year: int) -> list[Holiday]:
    """Fetch the public holidays of ``country_code`` in ``year``.

    Raises:
        InvalidRequestError: The upstream has no data for the country/year.
        UpstreamUnavailableError: Any other upstream or network failure.
    """
    url = f"{settings.DATE_NAGER_API_URL}/PublicHolidays/{year}/{country_code}"
    logger.debug("Request for public holidays: %s in %d", country_code, year)

    try:
        async with _get_client() as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        if exc.response.status_code == 404:
            logger.warning(
                "No public holidays for %s in %d: %s", country_code, year, exc.response.text,
            )
            raise InvalidRequestError(
                f"Invalid code or no data for {country_code} in {year}"
            ) from exc

        logger.error(
            "Failed on getting public holidays: %s in %d: %s - %s",
            country_code, year, exc, exc.response.text,
        )
        raise UpstreamUnavailableError(
            f"Failed on getting public holidays: {country_code} in {year}"
        ) from exc
    except httpx.HTTPError as exc:
        logger.error("Failed on getting public holidays: %s in %d: %s", country_code, year, exc)
        raise UpstreamUnavailableError(
            f"Failed on getting public holidays: {country_code} in {year}"
        ) from exc

    if not response.content:
        logger.debug("Empty holiday response for %s in %d", country_code, year)
        return []

    try:
        holidays = [Holiday.model_validate(item) for item in response.json()]
    except (ValueError, TypeError, ValidationError) as exc:
        logger.error("Unexpected holiday payload for %s in %d: %s", country_code, year, exc)
        raise UpstreamUnavailableError(
            f"Failed on getting public holidays: {country_code} in {year}"
        ) from exc

    logger.debug("Found %d holidays for %s", len(holidays), country_code)
    return holidays
