"""LedgerRecord domain model."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from ledgerfolio.domain.models.enums import RecordKind

_NUMERIC_FIELDS = (
    "quantity",
    "unit_price",
    "fee",
    "settlement_amount",
    "cash_amount",
    "split_ratio",
)


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce to Decimal; unparseable, NaN and infinite values become None."""
    if value is None:
        return None
    if not isinstance(value, Decimal):
        try:
            value = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return None
    return value if value.is_finite() else None


@dataclass(frozen=True)
class LedgerRecord:
    """
    Immutable ledger event (source of truth).

    - quantity, unit_price and fee are magnitudes; direction comes from kind
    - settlement_* is the leg in the asset's own currency
    - cash_* is the leg in the portfolio's cash currency, when one exists
    - occurred_on may hold a raw string for legacy rows; the replay keeps
      such rows rather than dropping them
    """

    record_id: str
    portfolio_id: Optional[str]
    asset_id: str
    kind: RecordKind
    occurred_on: Optional[Union[date, str]] = None
    recorded_at: Optional[Union[datetime, str]] = None
    quantity: Optional[Decimal] = None
    unit_price: Optional[Decimal] = None
    fee: Optional[Decimal] = None
    settlement_amount: Optional[Decimal] = None
    settlement_currency: Optional[str] = None
    cash_amount: Optional[Decimal] = None
    cash_currency: Optional[str] = None
    split_ratio: Optional[Decimal] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, RecordKind):
            object.__setattr__(self, "kind", RecordKind.parse(self.kind))
        for name in _NUMERIC_FIELDS:
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, _to_decimal(value))

    @property
    def cash_ccy(self) -> str:
        """Upper-cased cash currency, empty when absent."""
        return (self.cash_currency or "").upper()

    @property
    def settlement_ccy(self) -> str:
        """Upper-cased settlement currency, empty when absent."""
        return (self.settlement_currency or "").upper()
