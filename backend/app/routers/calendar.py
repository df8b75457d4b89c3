"""Calendar router.

Endpoints for adding public holidays to a user's calendar, listing the
stored ones, and browsing the upstream holiday catalog.
"""

import logging
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.core.exceptions import InvalidRequestError, NotFoundError
from app.core.rate_limit import limiter
from app.database import get_db
from app.routers.responses import bad_request, error_response, not_found
from app.schemas.calendar import AddHolidaysRequest, AddHolidaysResult, CalendarEventResponse
from app.schemas.common import COUNTRY_CODE_PATTERN, ApiResponse
from app.schemas.holiday import Holiday
from app.services import calendar_service, holiday_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Calendar"])


@router.post(
    "/{user_id}/calendar/holidays",
    response_model=ApiResponse[AddHolidaysResult],
)
@limiter.limit(settings.UPSTREAM_RATE_LIMIT)
async def add_holidays_to_calendar(
    request: Request,
    user_id: uuid.UUID,
    body: AddHolidaysRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Add public holidays of a country/year to the user's calendar.

    ``holidays`` optionally narrows the selection to holidays whose name
    contains one of the given terms.
    """
    try:
        result = await calendar_service.add_holidays_to_calendar(
            db,
            user_id=user_id,
            country_code=body.country_code,
            year=body.year,
            requested_names=body.holidays,
        )
    except NotFoundError as exc:
        return not_found(exc.message)
    except InvalidRequestError as exc:
        return bad_request(exc.message)
    except Exception as exc:
        logger.exception("Failed to add holidays for user %s", user_id)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to add holidays to calendar",
            str(exc),
        )

    return ApiResponse[AddHolidaysResult](data=result)


@router.get(
    "/{user_id}/calendar/holidays",
    response_model=ApiResponse[list[CalendarEventResponse]],
)
async def get_user_holidays(
    user_id: uuid.UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """List the holidays stored in the user's calendar, by date."""
    try:
        events = await calendar_service.get_user_holidays(db, user_id)
    except NotFoundError as exc:
        return not_found(exc.message)
    except Exception as exc:
        logger.exception("Failed to get holidays for user %s", user_id)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Failed to get holidays for user {user_id}",
            str(exc),
        )

    return ApiResponse[list[CalendarEventResponse]](
        data=[CalendarEventResponse.model_validate(event) for event in events]
    )


@router.get(
    "/public-holidays/{year}/{country_code}",
    response_model=ApiResponse[list[Holiday]],
)
@limiter.limit(settings.UPSTREAM_RATE_LIMIT)
async def get_public_holidays(
    request: Request,
    year: int,
    country_code: Annotated[str, Path(pattern=COUNTRY_CODE_PATTERN)],
):
    """Pass through the upstream holiday catalog of a country/year."""
    country_code = country_code.upper()
    try:
        holidays = await holiday_client.fetch_public_holidays(country_code, year)
    except InvalidRequestError as exc:
        return bad_request(exc.message)
    except Exception as exc:
        logger.exception("Failed to get public holidays for %s in %d", country_code, year)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Failed to get public holidays for {country_code} in {year}",
            str(exc),
        )

    return ApiResponse[list[Holiday]](data=holidays)
