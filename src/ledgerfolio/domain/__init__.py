"""Domain layer - pure business models with no storage dependencies."""

from ledgerfolio.domain.models import (
    RecordKind,
    IssueCode,
    ApplyStatus,
    LedgerRecord,
    Asset,
    Portfolio,
    Money,
    CurrencyTotals,
)

__all__ = [
    "RecordKind",
    "IssueCode",
    "ApplyStatus",
    "LedgerRecord",
    "Asset",
    "Portfolio",
    "Money",
    "CurrencyTotals",
]
