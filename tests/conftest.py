"""Shared fixtures: canned Goodreads XML documents."""
from types import SimpleNamespace

import pytest


def book_xml(book_id: str, title: str = "", authors=("Ann Author",)) -> str:
    authors_xml = "".join(
        f"<author><id>a{i}</id><name>{name}</name></author>"
        for i, name in enumerate(authors, 1)
    )
    return (
        f"<book><id>{book_id}</id><title>{title or 'Book ' + book_id}</title>"
        f"<num_pages>320</num_pages><format>Paperback</format>"
        f"<isbn>978000000{book_id}</isbn>"
        f"<authors>{authors_xml}</authors></book>"
    )


def review_xml(book_id: str, rating: int = 4, read_at: str = "Thu Jan 02 10:00:00 +0000 2020") -> str:
    return (
        f"<review>{book_xml(book_id)}<rating>{rating}</rating>"
        f"<read_at>{read_at}</read_at>"
        f"<link>https://www.goodreads.com/review/show/{book_id}</link></review>"
    )


def user_xml(status_book_ids=(), review_count: int = 0, user_id: str = "42") -> str:
    statuses = "".join(
        f"<user_status><page>{10 * i}</page><percent>{5 * i}</percent>"
        f"<updated_at>Wed Jan 01 00:00:00 +0000 2020</updated_at>"
        f"<book><id>{book_id}</id></book></user_status>"
        for i, book_id in enumerate(status_book_ids, 1)
    )
    return (
        f"<user><id>{user_id}</id><name>Reader</name><location>Lisbon</location>"
        f"<reviews_count type=\"integer\">{review_count}</reviews_count>"
        f"<user_shelves>"
        f"<user_shelf><id>1</id><name>read</name><book_count>120</book_count></user_shelf>"
        f"<user_shelf><id>2</id><name>currently-reading</name><book_count>2</book_count></user_shelf>"
        f"<user_shelf><id>3</id><name>to-read</name><book_count>450</book_count></user_shelf>"
        f"</user_shelves>"
        f"<user_statuses>{statuses}</user_statuses></user>"
    )


def document(*parts: str) -> bytes:
    return ("<GoodreadsResponse>" + "".join(parts) + "</GoodreadsResponse>").encode("utf-8")


def reviews_document(book_ids) -> bytes:
    return document("<reviews>" + "".join(review_xml(b) for b in book_ids) + "</reviews>")


@pytest.fixture
def goodreads_xml():
    """Builders for Goodreads response documents."""
    return SimpleNamespace(
        book=book_xml,
        review=review_xml,
        user=user_xml,
        document=document,
        reviews=reviews_document,
    )
