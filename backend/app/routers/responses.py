"""Helpers that render service errors as the API's JSON error shapes."""

from datetime import datetime, timezone

from fastapi import status
from fastapi.responses import JSONResponse

from app.schemas.common import CountryNotFoundResponse, ErrorResponse


def error_response(status_code: int, message: str, error: str) -> JSONResponse:
    """``{success: false, message, error}`` with the given status."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message, error=error).model_dump(by_alias=True),
    )


def not_found(message: str) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, message, "Not Found")


def bad_request(message: str) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, message, "Bad Request")


def country_not_found(message: str) -> JSONResponse:
    """The structured 404 used by the country details endpoint."""
    body = CountryNotFoundResponse(
        message=message,
        timestamp=datetime.now(timezone.utc),
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=body.model_dump(mode="json", by_alias=True),
    )
