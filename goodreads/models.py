"""Data models for Goodreads responses."""
from dataclasses import dataclass, field
from typing import List, Tuple
import logging

from goodreads.dates import relative_label, short_date
from goodreads.errors import MissingData

logger = logging.getLogger(__name__)

MAX_RATING = 5

CURRENTLY_READING = "currently-reading"
READ = "read"
TO_READ = "to-read"


@dataclass
class Author:
    """Author record as returned by the book and author endpoints."""
    id: str = ""
    name: str = ""
    link: str = ""
    fans_count: int = 0
    author_followers_count: int = 0
    large_image_url: str = ""
    image_url: str = ""
    small_image_url: str = ""
    works_count: int = 0
    gender: str = ""
    hometown: str = ""


@dataclass
class Book:
    """Book with its ordered author list."""
    id: str = ""
    title: str = ""
    link: str = ""
    image_url: str = ""
    num_pages: str = ""
    format: str = ""
    authors: List[Author] = field(default_factory=list)
    isbn: str = ""

    @property
    def author(self) -> Author:
        """First listed author; a book without authors is a data error."""
        if not self.authors:
            raise MissingData(f"Book {self.id!r} has no authors")
        return self.authors[0]

    @property
    def authors_str(self) -> str:
        """Format authors as comma-separated string."""
        return ", ".join(a.name for a in self.authors) if self.authors else "Unknown"


@dataclass
class Shelf:
    """Named shelf of a user. Shelf() is the "not found" value."""
    id: str = ""
    name: str = ""
    book_count: str = ""


@dataclass
class Review:
    """A user's review of a book."""
    book: Book = field(default_factory=Book)
    rating: int = 0
    read_at: str = ""
    link: str = ""

    def star_rating(self) -> Tuple[List[bool], List[bool]]:
        """
        Split the rating into full and empty star markers.

        Returns:
            (full, empty) where full has `rating` True entries and empty
            has `5 - rating` False entries
        """
        rating = self.rating
        if not 0 <= rating <= MAX_RATING:
            logger.warning(f"Rating {rating} outside 0-{MAX_RATING}, clamping")
            rating = min(max(rating, 0), MAX_RATING)

        return [True] * rating, [False] * (MAX_RATING - rating)

    @property
    def full_stars(self) -> List[bool]:
        """True marker per full star."""
        return self.star_rating()[0]

    @property
    def empty_stars(self) -> List[bool]:
        """False marker per empty star."""
        return self.star_rating()[1]

    @property
    def read_at_short(self) -> str:
        """Read date as "2 Jan 2020", empty if unknown."""
        return short_date(self.read_at)

    @property
    def read_at_relative(self) -> str:
        """Read date as e.g. "3 days ago", empty if unknown."""
        return relative_label(self.read_at)


@dataclass
class UserStatus:
    """Reading progress for one book."""
    page: int = 0
    percent: int = 0
    updated: str = ""
    book: Book = field(default_factory=Book)

    @property
    def updated_relative(self) -> str:
        """Last progress update as e.g. "2 hours ago"."""
        return relative_label(self.updated)


@dataclass
class Actor:
    """User who performed an activity feed update."""
    id: str = ""
    name: str = ""
    image_url: str = ""
    link: str = ""


@dataclass
class ReadStatus:
    """Shelf change carried by an update, with the related review."""
    id: str = ""
    review_id: str = ""
    user_id: str = ""
    status: str = ""
    updated: str = ""
    review: Review = field(default_factory=Review)


@dataclass
class UpdateObject:
    """Payload of an update."""
    read_status: ReadStatus = field(default_factory=ReadStatus)


@dataclass
class Update:
    """Activity feed entry."""
    type: str = ""
    action_text: str = ""
    actor: Actor = field(default_factory=Actor)
    object: UpdateObject = field(default_factory=UpdateObject)
    updated: str = ""

    @property
    def updated_relative(self) -> str:
        """Update time as e.g. "5 minutes ago"."""
        return relative_label(self.updated)


@dataclass
class User:
    """User profile with shelves, reading statuses and recent reviews."""
    id: str = ""
    name: str = ""
    about: str = ""
    link: str = ""
    image_url: str = ""
    small_image_url: str = ""
    location: str = ""
    last_active: str = ""
    review_count: int = 0
    statuses: List[UserStatus] = field(default_factory=list)
    shelves: List[Shelf] = field(default_factory=list)
    last_read: List[Review] = field(default_factory=list)
    updates: List[Update] = field(default_factory=list)

    def shelf_named(self, name: str) -> Shelf:
        """Return the first shelf called `name`, or an empty Shelf."""
        for shelf in self.shelves:
            if shelf.name == name:
                return shelf

        return Shelf()

    @property
    def reading_shelf(self) -> Shelf:
        """The "currently-reading" shelf, or an empty Shelf."""
        return self.shelf_named(CURRENTLY_READING)

    @property
    def read_shelf(self) -> Shelf:
        """The "read" shelf, or an empty Shelf."""
        return self.shelf_named(READ)

    @property
    def to_read_shelf(self) -> Shelf:
        """The "to-read" shelf, or an empty Shelf."""
        return self.shelf_named(TO_READ)


@dataclass
class Response:
    """Decoded <GoodreadsResponse> envelope."""
    user: User = field(default_factory=User)
    book: Book = field(default_factory=Book)
    author: Author = field(default_factory=Author)
    reviews: List[Review] = field(default_factory=list)
    updates: List[Update] = field(default_factory=list)
