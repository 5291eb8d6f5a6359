"""Application services."""

from ledgerfolio.services.ledger_service import LedgerService, LedgerRecordCreate
from ledgerfolio.services.view_service import PortfolioViewService, fetch_all_records
from ledgerfolio.services.balance_adjustment_service import BalanceAdjustmentService
from ledgerfolio.services.cash_assets import resolve_cash_ticker

__all__ = [
    "LedgerService",
    "LedgerRecordCreate",
    "PortfolioViewService",
    "fetch_all_records",
    "BalanceAdjustmentService",
    "resolve_cash_ticker",
]
