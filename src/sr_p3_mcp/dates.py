"""Resolve user date input into a validated UTC search window.

Accepts a single date ("2024-12-15") or a textual range
("2024-12-01 to 2024-12-31") and returns whole-day UTC bounds.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone
from typing import Optional

from dateutil.parser import parse

from .exceptions import (
    DateTooOldError,
    FutureDateRejectedError,
    InvalidDateFormatError,
    RangeOrderInvalidError,
)

logger = logging.getLogger(__name__)

RANGE_SEPARATOR = " to "
MAX_HISTORY_DAYS = 90

START_OF_DAY = time(0, 0, 0, 0)
END_OF_DAY = time(23, 59, 59, 999000)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def isoformat_utc(value: datetime) -> str:
    """Format a datetime as ISO 8601 UTC with millisecond precision.

    Examples:
        >>> isoformat_utc(datetime(2024, 12, 15, tzinfo=timezone.utc))
        '2024-12-15T00:00:00.000Z'
    """
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class DateRange:
    """Resolved search window, both bounds aware UTC datetimes."""

    start: datetime
    end: datetime

    @property
    def start_iso(self) -> str:
        return isoformat_utc(self.start)

    @property
    def end_iso(self) -> str:
        return isoformat_utc(self.end)


def _parse_day(text: str, now: datetime) -> datetime:
    """Parse one side of the input into an aware UTC datetime.

    Naive values are taken as UTC. Components missing from the input default
    to January 1st, midnight, of the current year.
    """
    default = datetime(now.year, 1, 1)
    try:
        parsed = parse(text, default=default)
    except (ValueError, OverflowError) as e:
        logger.debug(f"Could not parse date {text!r}: {e}")
        raise InvalidDateFormatError() from e

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _floor_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), START_OF_DAY, tzinfo=timezone.utc)


def _ceil_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), END_OF_DAY, tzinfo=timezone.utc)


def resolve_date_range(text: str, now: Optional[datetime] = None) -> DateRange:
    """Resolve a date or date range into whole-day UTC bounds.

    Args:
        text: "YYYY-MM-DD" style date, or two dates joined by " to "
        now: Reference instant for the recency checks (default: current UTC time)

    Returns:
        DateRange with start at 00:00:00.000 and end at 23:59:59.999 UTC

    Raises:
        InvalidDateFormatError: If either side cannot be parsed
        FutureDateRejectedError: If either bound is after ``now``
        DateTooOldError: If start is more than 90 days before ``now``
        RangeOrderInvalidError: If start is after end

    Examples:
        >>> now = datetime(2025, 1, 10, tzinfo=timezone.utc)
        >>> resolve_date_range("2024-12-15", now=now).end_iso
        '2024-12-15T23:59:59.999Z'
    """
    now = now or utc_now()

    if RANGE_SEPARATOR in text:
        start_text, end_text = (part.strip() for part in text.split(RANGE_SEPARATOR, 1))
        start = _floor_day(_parse_day(start_text, now))
        end = _ceil_day(_parse_day(end_text, now))
    else:
        day = _parse_day(text.strip(), now)
        start = _floor_day(day)
        end = _ceil_day(day)

    if start > now or end > now:
        raise FutureDateRejectedError()

    if start < now - timedelta(days=MAX_HISTORY_DAYS):
        raise DateTooOldError()

    if start > end:
        raise RangeOrderInvalidError()

    logger.debug(f"Resolved {text!r} to {isoformat_utc(start)} - {isoformat_utc(end)}")
    return DateRange(start=start, end=end)
