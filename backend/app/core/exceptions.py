"""Error kinds raised by the service layer.

Services raise these instead of ``HTTPException``; the routers decide how
each kind is rendered for the client.
"""

from typing import Any


class CalendarAPIError(Exception):
    """Base exception for all service-level errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(CalendarAPIError):
    """The requested user or country does not exist."""


class InvalidRequestError(CalendarAPIError):
    """Malformed input, or an upstream reports no data for a valid-shaped query."""


class UpstreamUnavailableError(CalendarAPIError):
    """An external API timed out, answered with a server error or was unreachable."""


class PersistenceError(CalendarAPIError):
    """Reading from or writing to the database failed."""
