"""Exception hierarchy for the Goodreads client."""
from typing import Optional


class GoodreadsError(Exception):
    """Base class for every error raised by this package."""
    pass


class TransportError(GoodreadsError):
    """Network or connection failure while talking to the service."""
    pass


class RemoteServiceError(TransportError):
    """The service answered, but with an HTTP error or an error payload."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(GoodreadsError):
    """Response body is malformed or does not have the expected shape."""
    pass


class UnparseableDate(GoodreadsError, ValueError):
    """Timestamp matches none of the accepted formats."""
    pass


class MissingData(GoodreadsError, LookupError):
    """Remote data needed by an accessor is absent."""
    pass
