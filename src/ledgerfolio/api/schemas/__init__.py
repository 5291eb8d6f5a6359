"""Pydantic schemas for API request/response."""

from ledgerfolio.api.schemas.portfolio import (
    PortfolioCreate,
    PortfolioResponse,
    PortfolioListResponse,
    AssetCreate,
    AssetResponse,
    AssetListResponse,
)
from ledgerfolio.api.schemas.record import (
    LedgerRecordCreateRequest,
    LedgerRecordResponse,
    LedgerRecordListResponse,
)
from ledgerfolio.api.schemas.view import (
    MoneyResponse,
    HoldingResponse,
    CashBalanceResponse,
    ReplayIssueResponse,
    ReplayViewResponse,
    PortfolioViewResponse,
    BalanceAdjustmentRequest,
    SameDayItemResponse,
    BalanceAdjustmentPreviewResponse,
    BalanceAdjustmentCommitResponse,
)

__all__ = [
    "PortfolioCreate",
    "PortfolioResponse",
    "PortfolioListResponse",
    "AssetCreate",
    "AssetResponse",
    "AssetListResponse",
    "LedgerRecordCreateRequest",
    "LedgerRecordResponse",
    "LedgerRecordListResponse",
    "MoneyResponse",
    "HoldingResponse",
    "CashBalanceResponse",
    "ReplayIssueResponse",
    "ReplayViewResponse",
    "PortfolioViewResponse",
    "BalanceAdjustmentRequest",
    "SameDayItemResponse",
    "BalanceAdjustmentPreviewResponse",
    "BalanceAdjustmentCommitResponse",
]
