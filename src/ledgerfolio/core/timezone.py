"""Timezone and date parsing utilities."""

from datetime import date, datetime
from typing import Optional, Union

import pytz
from dateutil import parser as date_parser

EASTERN_TZ = pytz.timezone("US/Eastern")

DateLike = Union[date, datetime, str, None]

_DEFAULT_A = datetime(1900, 1, 1)
_DEFAULT_B = datetime(1901, 2, 2)


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already Eastern
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def parse_datetime_eastern(value: str, default_tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """
    Parse a datetime string and return it in US/Eastern timezone.

    If no timezone is provided in the string, assumes US/Eastern.
    """
    dt = date_parser.parse(value)
    if dt.tzinfo is None:
        tz = default_tz or EASTERN_TZ
        dt = tz.localize(dt)
    return to_eastern(dt)


def parse_calendar_date(value: DateLike) -> Optional[date]:
    """
    Interpret a ledger date as a calendar date.

    Returns None for missing or unparseable values instead of raising, so
    callers can decide how to treat legacy rows.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return date_parser.isoparse(text).date()
    except (ValueError, OverflowError):
        pass
    # Free-form text must name year, month and day itself; parsing against
    # two different defaults exposes any field dateutil had to fill in.
    try:
        first = date_parser.parse(text, default=_DEFAULT_A)
        second = date_parser.parse(text, default=_DEFAULT_B)
    except (ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return first.date()


def parse_timestamp(value: DateLike) -> Optional[datetime]:
    """
    Interpret a creation timestamp as an aware Eastern datetime.

    Bare dates are taken as midnight. Input without a full calendar date,
    such as a bare time, yields None like any other unparseable value.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_eastern(value)
    if isinstance(value, date):
        return to_eastern(datetime(value.year, value.month, value.day))
    text = str(value).strip()
    if parse_calendar_date(text) is None:
        return None
    try:
        return parse_datetime_eastern(text)
    except (ValueError, OverflowError):
        return None
