"""Shared schema building blocks and the JSON response envelopes."""

from datetime import datetime
from typing import Annotated, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

COUNTRY_CODE_PATTERN = r"^[A-Za-z]{2}$"

# Two ASCII letters, normalised to uppercase
CountryCode = Annotated[
    str,
    StringConstraints(strip_whitespace=True, pattern=COUNTRY_CODE_PATTERN),
    AfterValidator(str.upper),
]

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model whose JSON field names are camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    data: T


class ErrorResponse(CamelModel):
    success: bool = False
    message: str
    error: str


class CountryNotFoundResponse(CamelModel):
    success: bool = False
    status_code: int = 404
    message: str
    timestamp: datetime
