"""Domain models package."""

from ledgerfolio.domain.models.enums import (
    RecordKind,
    IssueCode,
    ApplyStatus,
    AdjustmentMode,
    ensure_exhaustive,
)
from ledgerfolio.domain.models.ledger_record import LedgerRecord
from ledgerfolio.domain.models.reference import (
    Asset,
    Portfolio,
    CASH_TICKER_PREFIX,
    cash_ticker_for,
    is_cash_ticker,
)
from ledgerfolio.domain.models.money import Money, CurrencyTotals, convert_amount

__all__ = [
    "RecordKind",
    "IssueCode",
    "ApplyStatus",
    "AdjustmentMode",
    "ensure_exhaustive",
    "LedgerRecord",
    "Asset",
    "Portfolio",
    "CASH_TICKER_PREFIX",
    "cash_ticker_for",
    "is_cash_ticker",
    "Money",
    "CurrencyTotals",
    "convert_amount",
]
