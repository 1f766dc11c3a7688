"""Client library for the Goodreads XML API."""
from goodreads.async_client import AsyncGoodreadsClient
from goodreads.client import GoodreadsClient
from goodreads.errors import (
    DecodeError,
    GoodreadsError,
    MissingData,
    RemoteServiceError,
    TransportError,
    UnparseableDate,
)
from goodreads.models import (
    Actor,
    Author,
    Book,
    ReadStatus,
    Response,
    Review,
    Shelf,
    Update,
    UpdateObject,
    User,
    UserStatus,
)

__all__ = [
    "AsyncGoodreadsClient",
    "GoodreadsClient",
    "GoodreadsError",
    "TransportError",
    "RemoteServiceError",
    "DecodeError",
    "UnparseableDate",
    "MissingData",
    "Actor",
    "Author",
    "Book",
    "ReadStatus",
    "Response",
    "Review",
    "Shelf",
    "Update",
    "UpdateObject",
    "User",
    "UserStatus",
]
