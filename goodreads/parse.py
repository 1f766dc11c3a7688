"""Decode Goodreads XML responses into model objects."""
from typing import List, Optional
import xml.etree.ElementTree as ET
import logging

from goodreads.errors import DecodeError, RemoteServiceError
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

logger = logging.getLogger(__name__)


def _text(element: Optional[ET.Element], path: str) -> str:
    """Stripped text of the child at `path`, or "" when absent."""
    if element is None:
        return ""
    child = element.find(path)
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def _int(element: Optional[ET.Element], path: str) -> int:
    """Integer value of the child at `path`; empty or missing decodes to 0."""
    text = _text(element, path)
    if not text:
        return 0
    try:
        return int(text)
    except ValueError as e:
        raise DecodeError(f"Expected integer in <{path}>, got {text!r}") from e


def parse_author(element: Optional[ET.Element]) -> Author:
    """
    Parse an <author> element.

    Args:
        element: <author> element (may be None)

    Returns:
        Author object; an empty Author when the element is absent
    """
    if element is None:
        return Author()

    return Author(
        id=_text(element, "id"),
        name=_text(element, "name"),
        link=_text(element, "link"),
        fans_count=_int(element, "fans_count"),
        author_followers_count=_int(element, "author_followers_count"),
        large_image_url=_text(element, "large_image_url"),
        image_url=_text(element, "image_url"),
        small_image_url=_text(element, "small_image_url"),
        works_count=_int(element, "works_count"),
        gender=_text(element, "gender"),
        hometown=_text(element, "hometown"),
    )


def parse_book(element: Optional[ET.Element]) -> Book:
    """
    Parse a <book> element.

    Args:
        element: <book> element (may be None)

    Returns:
        Book object; an empty Book when the element is absent
    """
    if element is None:
        return Book()

    return Book(
        id=_text(element, "id"),
        title=_text(element, "title"),
        link=_text(element, "link"),
        image_url=_text(element, "image_url"),
        num_pages=_text(element, "num_pages"),
        format=_text(element, "format"),
        authors=[parse_author(a) for a in element.findall("authors/author")],
        isbn=_text(element, "isbn"),
    )


def parse_review(element: Optional[ET.Element]) -> Review:
    """
    Parse a <review> element and its embedded book.

    Args:
        element: <review> element (may be None)

    Returns:
        Review object; an empty Review when the element is absent
    """
    if element is None:
        return Review()

    return Review(
        book=parse_book(element.find("book")),
        rating=_int(element, "rating"),
        read_at=_text(element, "read_at"),
        link=_text(element, "link"),
    )


def parse_shelf(element: ET.Element) -> Shelf:
    """Parse a <user_shelf> element."""
    return Shelf(
        id=_text(element, "id"),
        name=_text(element, "name"),
        book_count=_text(element, "book_count"),
    )


def parse_user_status(element: ET.Element) -> UserStatus:
    """Parse a <user_status>; its book is a stub holding only the ID."""
    return UserStatus(
        page=_int(element, "page"),
        percent=_int(element, "percent"),
        updated=_text(element, "updated_at"),
        book=parse_book(element.find("book")),
    )


def parse_update(element: ET.Element) -> Update:
    """Parse an activity feed <update>, including its type attribute."""
    actor = element.find("actor")
    read_status = element.find("object/read_status")

    return Update(
        type=element.get("type", ""),
        action_text=_text(element, "action_text"),
        actor=Actor(
            id=_text(actor, "id"),
            name=_text(actor, "name"),
            image_url=_text(actor, "image_url"),
            link=_text(actor, "link"),
        ),
        object=UpdateObject(
            read_status=ReadStatus(
                id=_text(read_status, "id"),
                review_id=_text(read_status, "review_id"),
                user_id=_text(read_status, "user_id"),
                status=_text(read_status, "status"),
                updated=_text(read_status, "updated_at"),
                review=parse_review(
                    read_status.find("review") if read_status is not None else None
                ),
            )
        ),
        updated=_text(element, "updated_at"),
    )


def parse_user(element: Optional[ET.Element]) -> User:
    """
    Parse a <user> profile with its statuses and shelves.

    Status books are stubs at this point; the client enriches them.
    """
    if element is None:
        return User()

    return User(
        id=_text(element, "id"),
        name=_text(element, "name"),
        about=_text(element, "about"),
        link=_text(element, "link"),
        image_url=_text(element, "image_url"),
        small_image_url=_text(element, "small_image_url"),
        location=_text(element, "location"),
        last_active=_text(element, "last_active"),
        review_count=_int(element, "reviews_count"),
        statuses=[parse_user_status(s) for s in element.findall("user_statuses/user_status")],
        shelves=[parse_shelf(s) for s in element.findall("user_shelves/user_shelf")],
    )


def parse_reviews(root: ET.Element) -> List[Review]:
    """Parse every review under <reviews>, in document order."""
    return [parse_review(r) for r in root.findall("reviews/review")]


def parse_response(data: bytes) -> Response:
    """
    Parse a complete <GoodreadsResponse> document.

    Args:
        data: Raw response body

    Returns:
        Response envelope with whichever sections the document contains

    Raises:
        DecodeError: If the body is not well-formed or has bad field values
        RemoteServiceError: If the service returned an error document
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        logger.error(f"Malformed XML response: {e}")
        raise DecodeError(f"Malformed XML response: {e}") from e

    if root.tag == "error":
        raise RemoteServiceError((root.text or "").strip() or "Unknown service error")

    error = root.find("error")
    if error is not None:
        raise RemoteServiceError((error.text or "").strip() or "Unknown service error")

    return Response(
        user=parse_user(root.find("user")),
        book=parse_book(root.find("book")),
        author=parse_author(root.find("author")),
        reviews=parse_reviews(root),
        updates=[parse_update(u) for u in root.findall("updates/update")],
    )
