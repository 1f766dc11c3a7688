#!/usr/bin/env python3
"""Goodreads Explorer CLI - browse users, books, authors and shelves."""
import argparse
import asyncio
import sys
import json
from dataclasses import asdict
from tabulate import tabulate
from goodreads.client import GoodreadsClient
from goodreads.async_client import AsyncGoodreadsClient
from goodreads.config import Config
from goodreads.errors import GoodreadsError, MissingData
import logging

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    """argparse type for --limit."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def truncate(text: str, width: int) -> str:
    """Shorten text to width characters, marking the cut with "..."."""
    return text[:width] + "..." if len(text) > width else text


def stars(review) -> str:
    """Render a review rating as five star glyphs."""
    full, empty = review.star_rating()
    return "★" * len(full) + "☆" * len(empty)


def author_name(book) -> str:
    """First author's name, or "Unknown" for a book without authors."""
    try:
        return book.author.name
    except MissingData:
        return "Unknown"


def display_reviews(reviews, format_type: str):
    """Display reviews in specified format."""
    if format_type == "table":
        headers = ["Title", "Author", "Rating", "Read"]
        rows = [
            [
                truncate(review.book.title, 50),
                truncate(author_name(review.book), 30),
                stars(review),
                review.read_at_short or "N/A"
            ]
            for review in reviews
        ]
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))

    elif format_type == "json":
        print(json.dumps([asdict(review) for review in reviews], indent=2))

    elif format_type == "compact":
        for i, review in enumerate(reviews, 1):
            print(f"{i}. {review.book.title} - {author_name(review.book)} {stars(review)}")


def display_user(user, format_type: str):
    """Display a user profile with its recent activity."""
    if format_type == "json":
        print(json.dumps(asdict(user), indent=2))
        return

    print(f"\n{user.name} ({user.id}) - {user.location or 'Unknown location'}")
    print(f"Reviews: {user.review_count}")
    for shelf in (user.reading_shelf, user.read_shelf, user.to_read_shelf):
        if shelf.name:
            print(f"  {shelf.name}: {shelf.book_count} books")

    if user.statuses:
        rows = [
            [
                truncate(status.book.title, 50),
                truncate(author_name(status.book), 30),
                f"p. {status.page} ({status.percent}%)",
                status.updated_relative or "N/A"
            ]
            for status in user.statuses
        ]
        print("\n" + tabulate(rows, headers=["Reading", "Author", "Progress", "Updated"], tablefmt="grid"))

    if user.last_read:
        print("\nLast read:")
        display_reviews(user.last_read, format_type)


def display_book(book, format_type: str):
    """Display a single book."""
    if format_type == "json":
        print(json.dumps(asdict(book), indent=2))
    elif format_type == "compact":
        print(f"{book.title} - {book.authors_str}")
    else:
        rows = [
            ["Title", book.title],
            ["Authors", book.authors_str],
            ["Pages", book.num_pages or "N/A"],
            ["Format", book.format or "N/A"],
            ["ISBN", book.isbn or "N/A"],
            ["Link", book.link],
        ]
        print("\n" + tabulate(rows, tablefmt="grid"))


def display_author(author, format_type: str):
    """Display a single author."""
    if format_type == "json":
        print(json.dumps(asdict(author), indent=2))
    elif format_type == "compact":
        print(f"{author.name} ({author.works_count} works)")
    else:
        rows = [
            ["Name", author.name],
            ["Hometown", author.hometown or "N/A"],
            ["Works", author.works_count],
            ["Fans", author.fans_count],
            ["Followers", author.author_followers_count],
            ["Link", author.link],
        ]
        print("\n" + tabulate(rows, tablefmt="grid"))


def run_sync(args, config: Config):
    """Run a command with the sync client."""
    with GoodreadsClient(
        api_key=config.GOODREADS_API_KEY,
        base_url=config.GOODREADS_BASE_URL,
        timeout=config.DEFAULT_TIMEOUT
    ) as client:

        if args.command == "user":
            display_user(client.fetch_user(args.user_id, args.limit), args.format)

        elif args.command == "book":
            display_book(client.fetch_book(args.book_id), args.format)

        elif args.command == "author":
            display_author(client.fetch_author(args.author_id), args.format)

        elif args.command == "last-read":
            display_reviews(client.fetch_last_read(args.user_id, args.limit), args.format)

        elif args.command == "shelf":
            user = client.fetch_profile(args.user_id)
            reviews = client.reviews_for_shelf(user, args.shelf)
            logger.info(f"Found {len(reviews)} reviews on {args.shelf!r}")
            display_reviews(reviews, args.format)


async def run_async(args, config: Config):
    """Run a command with the async client."""
    async with AsyncGoodreadsClient(
        api_key=config.GOODREADS_API_KEY,
        base_url=config.GOODREADS_BASE_URL,
        timeout=config.DEFAULT_TIMEOUT
    ) as client:

        if args.command == "user":
            display_user(await client.fetch_user(args.user_id, args.limit), args.format)

        elif args.command == "book":
            display_book(await client.fetch_book(args.book_id), args.format)

        elif args.command == "author":
            display_author(await client.fetch_author(args.author_id), args.format)

        elif args.command == "last-read":
            display_reviews(await client.fetch_last_read(args.user_id, args.limit), args.format)

        elif args.command == "shelf":
            user = await client.fetch_profile(args.user_id)
            reviews = await client.reviews_for_shelf(user, args.shelf)
            logger.info(f"Found {len(reviews)} reviews on {args.shelf!r}")
            display_reviews(reviews, args.format)


def build_parser(config: Config) -> argparse.ArgumentParser:
    """Build the argument parser; --limit defaults come from config."""
    parser = argparse.ArgumentParser(
        description="Goodreads Explorer - browse the Goodreads API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Profile with 5 recent activity entries
  %(prog)s user 42 --limit 5

  # Everything on the to-read shelf as JSON
  %(prog)s --format json shelf 42 to-read

  # Book details through the async client
  %(prog)s --async book 50
        """
    )
    parser.add_argument("--async", dest="use_async", action="store_true", help="Use async client")
    parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # User command
    user_parser = subparsers.add_parser("user", help="Show a user profile")
    user_parser.add_argument("user_id", help="Goodreads user ID")
    user_parser.add_argument("--limit", type=non_negative_int, default=config.DEFAULT_LIMIT, help="Recent activity entries")

    # Book command
    book_parser = subparsers.add_parser("book", help="Show a book")
    book_parser.add_argument("book_id", help="Goodreads book ID")

    # Author command
    author_parser = subparsers.add_parser("author", help="Show an author")
    author_parser.add_argument("author_id", help="Goodreads author ID")

    # Last read command
    last_read_parser = subparsers.add_parser("last-read", help="Most recently read books")
    last_read_parser.add_argument("user_id", help="Goodreads user ID")
    last_read_parser.add_argument("--limit", type=non_negative_int, default=config.DEFAULT_LIMIT, help="Number of reviews")

    # Shelf command
    shelf_parser = subparsers.add_parser("shelf", help="Every review on a shelf")
    shelf_parser.add_argument("user_id", help="Goodreads user ID")
    shelf_parser.add_argument("shelf", help="Shelf name, e.g. read or to-read")

    return parser


def main():
    """Main CLI entry point."""
    config = Config()
    parser = build_parser(config)
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if not config.GOODREADS_API_KEY:
        logger.error("GOODREADS_API_KEY is not set")
        sys.exit(1)

    try:
        if args.use_async:
            asyncio.run(run_async(args, config))
        else:
            run_sync(args, config)

    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)
    except GoodreadsError as e:
        logger.error(f"❌ Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
