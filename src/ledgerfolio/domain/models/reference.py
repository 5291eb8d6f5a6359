"""Reference data: assets and portfolios."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

CASH_TICKER_PREFIX = "CASH."


def cash_ticker_for(currency: str) -> str:
    """Return the placeholder ticker representing a currency, e.g. CASH.GBP."""
    return f"{CASH_TICKER_PREFIX}{currency.upper()}"


def is_cash_ticker(ticker: Optional[str]) -> bool:
    """Return True if the ticker names a cash placeholder asset."""
    return bool(ticker) and ticker.upper().startswith(CASH_TICKER_PREFIX)


@dataclass(frozen=True)
class Asset:
    """
    Tradable instrument or cash placeholder.

    Cash placeholders (ticker CASH.<CCY>) stand for the currency itself;
    they move cash but never form a holding.
    """

    asset_id: str
    ticker: str
    currency: str
    display_name: Optional[str] = None
    status: Optional[str] = None

    @property
    def is_cash_placeholder(self) -> bool:
        return is_cash_ticker(self.ticker)

    @property
    def currency_code(self) -> str:
        return (self.currency or "").upper()


@dataclass
class Portfolio:
    """Container for ledger records settled in a base currency."""

    portfolio_id: str
    name: str
    base_currency: str = "GBP"
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        self.base_currency = (self.base_currency or "GBP").upper()
