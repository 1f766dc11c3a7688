"""HTTP client for the Goodreads XML API."""
from dataclasses import replace
from typing import Optional, List, Dict, Any
import logging

import requests

from goodreads.errors import RemoteServiceError, TransportError
from goodreads.models import READ, Author, Book, Response, Review, User
from goodreads.parse import parse_response

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.goodreads.com"

USER_SHOW_PATH = "/user/show.xml"
BOOK_SHOW_PATH = "/book/show.xml"
AUTHOR_SHOW_PATH = "/author/show.xml"
REVIEW_LIST_PATH = "/review/list.xml"

# Review list page size used for full shelf sweeps.
PER_PAGE = 200


def last_read_params(user_id: str, limit: int) -> Dict[str, Any]:
    """Query for the most recently read books, newest first."""
    return {
        "v": 2,
        "id": user_id,
        "shelf": READ,
        "sort": "date_read",
        "order": "d",
        "per_page": limit,
    }


def shelf_page_params(user_id: str, shelf: str, page: int) -> Dict[str, Any]:
    """Query for one page of a shelf sweep."""
    return {
        "v": 2,
        "id": user_id,
        "shelf": shelf,
        "page": page,
        "per_page": PER_PAGE,
    }


def redact(text: str, secret: str) -> str:
    """Mask `secret` wherever it appears in `text` (e.g. a request URL)."""
    if not secret:
        return text
    return text.replace(secret, "***")


def page_count(review_count: int) -> int:
    """Number of pages a shelf sweep requests (always at least one)."""
    return review_count // PER_PAGE + 1


class GoodreadsClient:
    """Client for the Goodreads API that assembles complete object graphs."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 10,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize Goodreads API client.

        Args:
            api_key: Developer key sent with every request
            base_url: Service root, e.g. https://www.goodreads.com
            timeout: Request timeout in seconds
            session: Existing session to use instead of creating one
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        # Create session for connection pooling
        self._owns_session = session is None
        self.session = session or requests.Session()

    def fetch_user(self, user_id: str, limit: int) -> User:
        """
        Fetch a user profile with fully populated reading statuses.

        Every status book is re-fetched in full. If the user has at least
        `limit` statuses they are truncated to `limit`; otherwise the
        shortfall is filled with the most recently read reviews.

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

        response = self._get_profile_response(user_id)
        user = response.user

        statuses = [
            replace(status, book=self.fetch_book(status.book.id))
            for status in user.statuses
        ]

        if len(statuses) >= limit:
            return replace(user, statuses=statuses[:limit], updates=response.updates)

        last_read = self.fetch_last_read(user_id, limit - len(statuses))
        return replace(user, statuses=statuses, last_read=last_read, updates=response.updates)

    def fetch_profile(self, user_id: str) -> User:
        """
        Fetch the user profile alone, in a single request.

        Status books stay as stubs and last_read stays empty; enough to
        size a shelf sweep from review_count.

        Args:
            user_id: Goodreads user ID

        Returns:
            User as decoded from the profile document
        """
        response = self._get_profile_response(user_id)
        return replace(response.user, updates=response.updates)

    def fetch_book(self, book_id: str) -> Book:
        """Fetch a single book with its authors."""
        return self._get_response(BOOK_SHOW_PATH, {"id": book_id}).book

    def fetch_author(self, author_id: str) -> Author:
        """Fetch a single author."""
        return self._get_response(AUTHOR_SHOW_PATH, {"id": author_id}).author

    def fetch_last_read(self, user_id: str, limit: int) -> List[Review]:
        """
        Fetch the user's most recently read reviews in one request.

        Args:
            user_id: Goodreads user ID
            limit: Page size (not paginated)

        Returns:
            Reviews, newest read date first
        """
        return self._get_response(REVIEW_LIST_PATH, last_read_params(user_id, limit)).reviews

    def reviews_for_shelf(self, user: User, shelf: str) -> List[Review]:
        """
        Fetch every review on one of the user's shelves.

        Pages are requested one after another; a failure on any page
        propagates and nothing is returned.

        Args:
            user: User whose review_count sizes the sweep
            shelf: Shelf name, e.g. "to-read"

        Returns:
            Reviews in page order
        """
        reviews = []
        pages = page_count(user.review_count)

        for page in range(1, pages + 1):
            logger.info(f"Shelf {shelf!r} page {page}/{pages} for user {user.id}")
            response = self._get_response(REVIEW_LIST_PATH, shelf_page_params(user.id, shelf, page))
            reviews.extend(response.reviews)

        return reviews

    def _get_profile_response(self, user_id: str) -> Response:
        return self._get_response(USER_SHOW_PATH, {"id": user_id})

    def _get_response(self, path: str, params: Dict[str, Any]) -> Response:
        """Request `path` and decode the body into a Response envelope."""
        return parse_response(self._get(path, params))

    def _get(self, path: str, params: Dict[str, Any]) -> bytes:
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
        logger.info(f"GET {url} {params}")

        try:
            response = self.session.get(
                url,
                params={"key": self.api_key, **params},
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            reason = redact(str(e), self.api_key)
            logger.error(f"Request to {url} failed: {reason}")
            raise TransportError(f"Request to {url} failed: {reason}") from None

        try:
            if response.status_code >= 400:
                logger.error(f"HTTP {response.status_code} from {url}")
                raise RemoteServiceError(
                    f"HTTP {response.status_code} from {url}",
                    status_code=response.status_code
                )
            return response.content
        except requests.exceptions.RequestException as e:
            reason = redact(str(e), self.api_key)
            logger.error(f"Reading response from {url} failed: {reason}")
            raise TransportError(f"Reading response from {url} failed: {reason}") from None
        finally:
            response.close()

    def close(self):
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
