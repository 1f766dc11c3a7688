"""Timestamp parsing and human-readable relative dates."""
from datetime import datetime, timezone
from typing import Optional
import re
import logging

from goodreads.errors import UnparseableDate

logger = logging.getLogger(__name__)

# Tried in order; the first one that parses wins.
RFC3339_FORMATS = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
)
RUBY_DATE_FORMAT = "%a %b %d %H:%M:%S %z %Y"

EXTRA_FRACTION_DIGITS = re.compile(r"(\.\d{6})\d+")

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR


def parse_timestamp(value: str) -> datetime:
    """
    Parse a timestamp returned by the service.

    Accepts an RFC 3339 date-time first and falls back to the Ruby-style
    format the service uses in older documents
    (e.g. "Wed Jan 01 00:00:00 +0000 2020").

    Args:
        value: Raw timestamp string

    Returns:
        Timezone-aware datetime

    Raises:
        UnparseableDate: If neither format matches
    """
    text = (value or "").strip()

    # strptime's %f takes at most microseconds; RFC 3339 allows any precision.
    rfc_text = EXTRA_FRACTION_DIGITS.sub(r"\1", text)
    for fmt in RFC3339_FORMATS:
        try:
            return datetime.strptime(rfc_text, fmt)
        except ValueError:
            continue

    try:
        return datetime.strptime(text, RUBY_DATE_FORMAT)
    except ValueError:
        pass

    raise UnparseableDate(f"Unrecognised timestamp: {value!r}")


def relative_label(value: str, now: Optional[datetime] = None) -> str:
    """
    Describe how long ago a timestamp was, e.g. "3 days ago".

    Future timestamps fall through to "Just now". Unparseable input is
    logged and yields an empty string.

    Args:
        value: Raw timestamp string
        now: Reference instant (defaults to the current UTC time)

    Returns:
        Short relative description
    """
    try:
        date = parse_timestamp(value)
    except UnparseableDate as e:
        logger.warning(f"Cannot compute relative date: {e}")
        return ""

    if now is None:
        now = datetime.now(timezone.utc)

    elapsed = (now - date).total_seconds()

    days = int(elapsed / SECONDS_PER_DAY)
    if days > 1:
        return f"{days} days ago"
    elif days == 1:
        return "1 day ago"

    hours = int(elapsed / SECONDS_PER_HOUR)
    if hours > 1:
        return f"{hours} hours ago"

    minutes = int(elapsed / SECONDS_PER_MINUTE)
    if minutes > 2:
        return f"{minutes} minutes ago"

    return "Just now"


def short_date(value: str) -> str:
    """Format a timestamp as "2 Jan 2020", or "" if it cannot be parsed."""
    try:
        date = parse_timestamp(value)
    except UnparseableDate as e:
        logger.warning(f"Cannot format date: {e}")
        return ""

    return f"{date.day} {date.strftime('%b %Y')}"
