"""Ordering and as-of filtering of ledger records."""

from datetime import date, datetime
from typing import Iterable

import pytz

from ledgerfolio.core.timezone import DateLike, parse_calendar_date, parse_timestamp
from ledgerfolio.domain.models import LedgerRecord, RecordKind, ensure_exhaustive

# Same-day order: entries (split, transfer-in, buy) before exits
# (sell, transfer-out) so a day's round trip never dips below zero.
KIND_PRIORITY: dict[RecordKind, int] = {
    RecordKind.SPLIT: 10,
    RecordKind.TRANSFER_IN: 20,
    RecordKind.BUY: 30,
    RecordKind.SELL: 40,
    RecordKind.TRANSFER_OUT: 50,
    RecordKind.DIVIDEND: 90,
    RecordKind.INTEREST: 95,
    RecordKind.FEE: 96,
    RecordKind.DEPOSIT: 97,
    RecordKind.WITHDRAWAL: 98,
    RecordKind.OTHER: 99,
    RecordKind.BALANCE_ADJUSTMENT: 100,
    RecordKind.UNKNOWN: 1000,
}
ensure_exhaustive(KIND_PRIORITY, "KIND_PRIORITY")

_NO_DATE = date.min
_NO_TIMESTAMP = datetime(1970, 1, 1, tzinfo=pytz.utc)


def _date_key(record: LedgerRecord) -> tuple[int, date]:
    # Missing or unparseable dates sort after every real date.
    occurred = parse_calendar_date(record.occurred_on)
    if occurred is None:
        return (1, _NO_DATE)
    return (0, occurred)


def _timestamp_key(record: LedgerRecord) -> tuple[int, datetime]:
    recorded = parse_timestamp(record.recorded_at)
    if recorded is None:
        return (1, _NO_TIMESTAMP)
    return (0, recorded)


def stable_sort_key(record: LedgerRecord) -> tuple:
    """Coarse order: date, creation time, id."""
    return (_date_key(record), _timestamp_key(record), record.record_id)


def holdings_sort_key(record: LedgerRecord) -> tuple:
    """Position order: date, creation time, kind priority, id."""
    return (
        _date_key(record),
        _timestamp_key(record),
        KIND_PRIORITY[record.kind],
        record.record_id,
    )


def stable_sort(records: Iterable[LedgerRecord]) -> list[LedgerRecord]:
    """Sort records for cash accumulation and display."""
    return sorted(records, key=stable_sort_key)


def sort_for_holdings(records: Iterable[LedgerRecord]) -> list[LedgerRecord]:
    """Sort records for position replay."""
    return sorted(records, key=holdings_sort_key)


def has_unparseable_date(record: LedgerRecord) -> bool:
    """Return True if occurred_on is present but cannot be read as a date."""
    return record.occurred_on is not None and parse_calendar_date(record.occurred_on) is None


def filter_as_of(records: Iterable[LedgerRecord], as_of: DateLike = None) -> list[LedgerRecord]:
    """
    Keep records on or before the as-of date.

    Undated and malformed-date records are always kept so they never
    silently vanish from a report. An absent or unreadable as-of keeps
    everything.
    """
    return filter_before(records, as_of, inclusive=True)


def filter_before(
    records: Iterable[LedgerRecord],
    cutoff: DateLike,
    inclusive: bool,
) -> list[LedgerRecord]:
    """Keep records dated before (or, if inclusive, on) the cutoff."""
    cutoff_date = parse_calendar_date(cutoff)
    if cutoff_date is None:
        return list(records)

    kept = []
    for record in records:
        occurred = parse_calendar_date(record.occurred_on)
        if occurred is None:
            kept.append(record)
        elif occurred < cutoff_date or (inclusive and occurred == cutoff_date):
            kept.append(record)
    return kept


def records_on(records: Iterable[LedgerRecord], day: DateLike) -> list[LedgerRecord]:
    """Return the records dated exactly on the given day."""
    target = parse_calendar_date(day)
    if target is None:
        return []
    return [r for r in records if parse_calendar_date(r.occurred_on) == target]
