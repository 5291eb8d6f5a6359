"""Core utilities and shared functionality."""

from ledgerfolio.core.timezone import (
    now_eastern,
    to_eastern,
    parse_datetime_eastern,
    parse_calendar_date,
    parse_timestamp,
    EASTERN_TZ,
)
from ledgerfolio.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    ConfigurationError,
    MissingExchangeRateError,
)

__all__ = [
    "now_eastern",
    "to_eastern",
    "parse_datetime_eastern",
    "parse_calendar_date",
    "parse_timestamp",
    "EASTERN_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ConfigurationError",
    "MissingExchangeRateError",
]
