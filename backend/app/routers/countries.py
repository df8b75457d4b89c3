"""Countries router.

Endpoints for the list of supported countries and per-country details.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Path, Request, status

from app.config import settings
from app.core.exceptions import NotFoundError
from app.core.rate_limit import limiter
from app.routers.responses import country_not_found, error_response
from app.schemas.common import COUNTRY_CODE_PATTERN, ApiResponse
from app.schemas.country import Country, CountryDetails
from app.services import country_client, country_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/countries", tags=["Countries"])


@router.get("", response_model=ApiResponse[list[Country]])
async def get_available_countries():
    """List the countries the holiday API has data for."""
    try:
        countries = await country_client.fetch_available_countries()
    except Exception as exc:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to get available countries",
            str(exc),
        )

    return ApiResponse[list[Country]](data=countries)


@router.get("/{country_code}", response_model=ApiResponse[CountryDetails])
@limiter.limit(settings.UPSTREAM_RATE_LIMIT)
async def get_country_details(
    request: Request,
    country_code: Annotated[str, Path(pattern=COUNTRY_CODE_PATTERN)],
):
    """Name, borders, population series and flag of a country."""
    country_code = country_code.upper()
    try:
        details = await country_service.get_country_details(country_code)
    except NotFoundError as exc:
        return country_not_found(exc.message)
    except Exception as exc:
        logger.exception("Error getting country details for %s", country_code)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Error getting country details for {country_code}",
            str(exc),
        )

    return ApiResponse[CountryDetails](data=details)
