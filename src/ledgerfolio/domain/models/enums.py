"""Enumerations for domain models."""

from enum import Enum
from typing import Any, Mapping


class RecordKind(str, Enum):
    """
    Closed taxonomy of ledger record kinds.

    Values are the short codes stored in the ledger. Codes outside the
    taxonomy parse to UNKNOWN so they stay visible to the replay instead of
    being dropped on the way in.
    """

    SPLIT = "SPL"
    TRANSFER_IN = "TIN"
    BUY = "BUY"
    SELL = "SELL"
    TRANSFER_OUT = "TOT"
    DIVIDEND = "DIV"
    INTEREST = "INT"
    FEE = "FEE"
    DEPOSIT = "DEP"
    WITHDRAWAL = "WIT"
    OTHER = "OTR"
    BALANCE_ADJUSTMENT = "BAL"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: Any) -> "RecordKind":
        """Parse a stored code or member name, case-insensitively."""
        if isinstance(value, cls):
            return value
        code = str(value or "").strip().upper()
        try:
            return cls(code)
        except ValueError:
            pass
        name = code.replace("-", "_").replace(" ", "_")
        return cls.__members__.get(name, cls.UNKNOWN)

    @property
    def realizes(self) -> bool:
        """Return True if this kind crystallises gain or loss."""
        return self in _REALIZING_KINDS

    @property
    def is_income(self) -> bool:
        """Return True for dividend and interest income."""
        return self in (RecordKind.DIVIDEND, RecordKind.INTEREST)


_REALIZING_KINDS = frozenset(
    {RecordKind.SELL, RecordKind.DIVIDEND, RecordKind.INTEREST, RecordKind.FEE}
)


class IssueCode(str, Enum):
    """Data-quality problems a replay can report for a single record."""

    INVALID_SPLIT_RATIO = "INVALID_SPLIT_RATIO"
    UNPARSEABLE_DATE = "UNPARSEABLE_DATE"
    MISSING_COST = "MISSING_COST"
    MISSING_PROCEEDS = "MISSING_PROCEEDS"
    NEGATIVE_POSITION_CLAMPED = "NEGATIVE_POSITION_CLAMPED"
    UNKNOWN_ASSET = "UNKNOWN_ASSET"
    UNKNOWN_KIND = "UNKNOWN_KIND"


class ApplyStatus(str, Enum):
    """Outcome of applying one record to an accumulator."""

    APPLIED = "APPLIED"
    APPLIED_WITH_WARNING = "APPLIED_WITH_WARNING"
    SKIPPED = "SKIPPED"


class AdjustmentMode(str, Enum):
    """Whether a balance check includes records dated on the as-of day."""

    PRE = "pre"  # strictly before the as-of date
    POST = "post"  # up to and including the as-of date


def ensure_exhaustive(table: Mapping[RecordKind, Any], name: str) -> None:
    """Raise at import time if a per-kind table misses a RecordKind."""
    missing = [kind.value for kind in RecordKind if kind not in table]
    if missing:
        raise RuntimeError(f"{name} has no entry for record kinds: {', '.join(missing)}")
