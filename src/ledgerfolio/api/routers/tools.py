"""Cash balance tool endpoints."""

from fastapi import APIRouter, Depends

from ledgerfolio.api.deps import get_balance_service
from ledgerfolio.api.schemas import (
    BalanceAdjustmentRequest,
    BalanceAdjustmentPreviewResponse,
    BalanceAdjustmentCommitResponse,
)
from ledgerfolio.services import BalanceAdjustmentService

router = APIRouter(prefix="/tools/cash-balance", tags=["tools"])


@router.post("/preview", response_model=BalanceAdjustmentPreviewResponse)
def preview_balance(
    data: BalanceAdjustmentRequest,
    tool: BalanceAdjustmentService = Depends(get_balance_service),
) -> BalanceAdjustmentPreviewResponse:
    """Compare the ledger's cash balance with a target figure."""
    preview = tool.preview(
        data.portfolio_id,
        data.as_of,
        data.target,
        mode=data.mode,
        currency=data.currency,
    )
    return BalanceAdjustmentPreviewResponse.from_preview(preview)


@router.post("/commit", response_model=BalanceAdjustmentCommitResponse)
def commit_balance(
    data: BalanceAdjustmentRequest,
    tool: BalanceAdjustmentService = Depends(get_balance_service),
) -> BalanceAdjustmentCommitResponse:
    """Append a BAL record that brings cash to the target figure."""
    preview, record = tool.commit(
        data.portfolio_id,
        data.as_of,
        data.target,
        mode=data.mode,
        currency=data.currency,
        notes=data.notes,
    )
    if record is None:
        message = f"No adjustment needed. Current balance already {preview.current} {preview.currency}."
    else:
        message = f"Adjusted {preview.currency} balance by {preview.diff}."
    return BalanceAdjustmentCommitResponse(
        preview=BalanceAdjustmentPreviewResponse.from_preview(preview),
        record_id=record.record_id if record else None,
        adjusted=record is not None,
        message=message,
    )
