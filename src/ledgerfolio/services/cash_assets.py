"""Cash placeholder ticker resolution."""

from typing import Optional

from ledgerfolio.domain.models import cash_ticker_for, is_cash_ticker


def resolve_cash_ticker(
    ticker: Optional[str],
    currency: Optional[str],
    base_currency: str = "GBP",
) -> str:
    """
    Map a cash row onto its CASH.<CCY> placeholder ticker.

    An existing placeholder ticker wins, then the row's currency, then the
    portfolio's base currency.
    """
    if is_cash_ticker(ticker):
        return ticker.upper()
    return cash_ticker_for(currency or base_currency)
