"""Async HTTP client for the Goodreads XML API."""
from dataclasses import replace
from typing import List, Optional, Dict, Any
import logging

import httpx

from goodreads.client import (
    AUTHOR_SHOW_PATH,
    BOOK_SHOW_PATH,
    DEFAULT_BASE_URL,
    REVIEW_LIST_PATH,
    USER_SHOW_PATH,
    last_read_params,
    page_count,
    redact,
    shelf_page_params,
)
from goodreads.errors import RemoteServiceError, TransportError
from goodreads.models import Author, Book, Response, Review, User
from goodreads.parse import parse_response

logger = logging.getLogger(__name__)


class AsyncGoodreadsClient:
    """
    Async counterpart of GoodreadsClient.

    Requests are awaited one at a time, so results arrive in the same
    order as with the sync client.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 10,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize async client.

        Args:
            api_key: Developer key sent with every request
            base_url: Service root
            timeout: Request timeout
            client: Existing httpx client to use instead of creating one
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        # Create async HTTP client
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def fetch_user(self, user_id: str, limit: int) -> User:
        """
        Fetch a user profile with fully populated reading statuses.

        Status books are fetched one at a time, in order. See
        GoodreadsClient.fetch_user for the truncate/fill rules.

        Args:
            user_id: Goodreads user ID
            limit: Number of recent activity entries wanted

        Returns:
            Populated User

        Raises:
            ValueError: If limit is negative
        """
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")

        response = await self._get_profile_response(user_id)
        user = response.user

        statuses = []
        for status in user.statuses:
            book = await self.fetch_book(status.book.id)
            statuses.append(replace(status, book=book))

        if len(statuses) >= limit:
            return replace(user, statuses=statuses[:limit], updates=response.updates)

        last_read = await self.fetch_last_read(user_id, limit - len(statuses))
        return replace(user, statuses=statuses, last_read=last_read, updates=response.updates)

    async def fetch_profile(self, user_id: str) -> User:
        """Fetch the user profile alone, without enriching status books."""
        response = await self._get_profile_response(user_id)
        return replace(response.user, updates=response.updates)

    async def fetch_book(self, book_id: str) -> Book:
        """Fetch a single book with its authors."""
        response = await self._get_response(BOOK_SHOW_PATH, {"id": book_id})
        return response.book

    async def fetch_author(self, author_id: str) -> Author:
        """Fetch a single author."""
        response = await self._get_response(AUTHOR_SHOW_PATH, {"id": author_id})
        return response.author

    async def fetch_last_read(self, user_id: str, limit: int) -> List[Review]:
        """
        Fetch the user's most recently read reviews in one request.

        Args:
            user_id: Goodreads user ID
            limit: Page size (not paginated)

        Returns:
            Reviews, newest read date first
        """
        response = await self._get_response(REVIEW_LIST_PATH, last_read_params(user_id, limit))
        return response.reviews

    async def reviews_for_shelf(self, user: User, shelf: str) -> List[Review]:
        """Fetch every review on a shelf, one page after another."""
        reviews = []
        pages = page_count(user.review_count)

        for page in range(1, pages + 1):
            logger.info(f"Async shelf {shelf!r} page {page}/{pages} for user {user.id}")
            response = await self._get_response(
                REVIEW_LIST_PATH, shelf_page_params(user.id, shelf, page)
            )
            reviews.extend(response.reviews)

        return reviews

    async def _get_profile_response(self, user_id: str) -> Response:
        return await self._get_response(USER_SHOW_PATH, {"id": user_id})

    async def _get_response(self, path: str, params: Dict[str, Any]) -> Response:
        """Request `path` and decode the body into a Response envelope."""
        return parse_response(await self._get(path, params))

    async def _get(self, path: str, params: Dict[str, Any]) -> bytes:
        """
        Make a GET request and return the full body.

        Args:
            path: Endpoint path
            params: Query parameters (the API key is added here)

        Returns:
            Response body

        Raises:
            TransportError: On connection failures and timeouts
            RemoteServiceError: On HTTP error statuses
        """
        url = f"{self.base_url}{path}"
        logger.info(f"Async GET {url} {params}")

        try:
            response = await self.client.get(
                url,
                params={"key": self.api_key, **params},
                timeout=self.timeout
            )
        except httpx.HTTPError as e:
            reason = redact(str(e), self.api_key)
            logger.error(f"Async request to {url} failed: {reason}")
            raise TransportError(f"Request to {url} failed: {reason}") from None

        if response.status_code >= 400:
            logger.error(f"HTTP {response.status_code} from {url}")
            raise RemoteServiceError(
                f"HTTP {response.status_code} from {url}",
                status_code=response.status_code
            )

        return response.content

    async def close(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()
