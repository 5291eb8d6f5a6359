"""Ledger record endpoints (append and read only)."""

from fastapi import APIRouter, Depends, Query

from ledgerfolio.api.deps import get_ledger_service
from ledgerfolio.api.schemas import (
    LedgerRecordCreateRequest,
    LedgerRecordResponse,
    LedgerRecordListResponse,
)
from ledgerfolio.services import LedgerService, LedgerRecordCreate

router = APIRouter(prefix="/records", tags=["records"])


@router.post("", response_model=LedgerRecordResponse, status_code=201)
def append_record(
    data: LedgerRecordCreateRequest,
    ledger: LedgerService = Depends(get_ledger_service),
) -> LedgerRecordResponse:
    """Append a record to a portfolio's ledger."""
    record = ledger.append_record(LedgerRecordCreate(**data.model_dump()))
    return LedgerRecordResponse.model_validate(record)


@router.get("", response_model=LedgerRecordListResponse)
def list_records(
    portfolio_id: str = Query(..., description="Portfolio ID"),
    ledger: LedgerService = Depends(get_ledger_service),
) -> LedgerRecordListResponse:
    """List a portfolio's records in ledger order."""
    records = ledger.list_records(portfolio_id)
    return LedgerRecordListResponse(
        records=[LedgerRecordResponse.model_validate(r) for r in records],
        count=len(records),
    )


@router.get("/{record_id}", response_model=LedgerRecordResponse)
def get_record(
    record_id: str,
    ledger: LedgerService = Depends(get_ledger_service),
) -> LedgerRecordResponse:
    """Get a record by ID."""
    return LedgerRecordResponse.model_validate(ledger.get_record(record_id))
