"""Asset registry endpoints."""

from fastapi import APIRouter, Depends

from ledgerfolio.api.deps import get_ledger_service
from ledgerfolio.api.schemas import AssetCreate, AssetResponse, AssetListResponse
from ledgerfolio.services import LedgerService

router = APIRouter(prefix="/assets", tags=["assets"])


@router.post("", response_model=AssetResponse, status_code=201)
def register_asset(
    data: AssetCreate,
    ledger: LedgerService = Depends(get_ledger_service),
) -> AssetResponse:
    """Register a new asset."""
    asset = ledger.register_asset(
        ticker=data.ticker,
        currency=data.currency,
        display_name=data.display_name,
        status=data.status,
    )
    return AssetResponse.model_validate(asset)


@router.get("", response_model=AssetListResponse)
def list_assets(
    ledger: LedgerService = Depends(get_ledger_service),
) -> AssetListResponse:
    """List all registered assets."""
    assets = ledger.list_assets()
    return AssetListResponse(
        assets=[AssetResponse.model_validate(a) for a in assets],
        count=len(assets),
    )
