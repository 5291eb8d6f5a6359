"""Replay options."""

from dataclasses import dataclass, field
from typing import Optional

from ledgerfolio.config.settings import Settings


@dataclass(frozen=True)
class ReplayOptions:
    """
    Knobs for a single replay.

    default_currency: cash currency assumed when a record's cash leg has none
    seed_currencies: buckets present in the cash ledger before any record
    require_cash_asset: deposits, withdrawals, fees and other cash rows only
        move cash when booked against a CASH.<CCY> placeholder asset
    income_in_holdings: replay dividends and interest through holdings so
        they show up in realized totals
    """

    default_currency: str = "GBP"
    seed_currencies: tuple[str, ...] = field(default=("GBP", "USD", "EUR"))
    require_cash_asset: bool = True
    income_in_holdings: bool = False

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        default_currency: Optional[str] = None,
    ) -> "ReplayOptions":
        return cls(
            default_currency=(default_currency or settings.default_currency).upper(),
            seed_currencies=tuple(c.upper() for c in settings.cash_currencies),
            require_cash_asset=settings.cash_events_require_cash_asset,
            income_in_holdings=settings.income_in_holdings,
        )
