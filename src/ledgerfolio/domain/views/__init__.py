"""View models for engine and service outputs."""

from ledgerfolio.domain.views.portfolio import (
    Holding,
    CashBalance,
    ReplayIssue,
    ApplyResult,
    ReplayView,
    PortfolioView,
    SameDayItem,
    BalanceAdjustmentPreview,
)

__all__ = [
    "Holding",
    "CashBalance",
    "ReplayIssue",
    "ApplyResult",
    "ReplayView",
    "PortfolioView",
    "SameDayItem",
    "BalanceAdjustmentPreview",
]
