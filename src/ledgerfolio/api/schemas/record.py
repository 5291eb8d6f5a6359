"""Pydantic schemas for ledger record endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from ledgerfolio.domain.models import RecordKind


class LedgerRecordCreateRequest(BaseModel):
    """Request schema for appending a ledger record."""

    portfolio_id: str = Field(..., description="Portfolio ID")
    kind: RecordKind = Field(..., description="Record kind code, e.g. BUY or DIV")
    occurred_on: date = Field(..., description="Economic date of the event")
    asset_id: Optional[str] = Field(default=None, description="Asset ID")
    ticker: Optional[str] = Field(
        default=None,
        max_length=32,
        description="Ticker, used when asset_id is omitted",
    )
    quantity: Optional[Decimal] = Field(default=None, description="Units (magnitude)")
    unit_price: Optional[Decimal] = Field(default=None, ge=0)
    fee: Optional[Decimal] = Field(default=None, ge=0)
    settlement_amount: Optional[Decimal] = None
    settlement_currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    cash_amount: Optional[Decimal] = None
    cash_currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    split_ratio: Optional[Decimal] = None
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("kind", mode="before")
    @classmethod
    def parse_kind(cls, v):
        return RecordKind.parse(v)

    @field_validator("ticker", "settlement_currency", "cash_currency")
    @classmethod
    def uppercase(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else None


class LedgerRecordResponse(BaseModel):
    """Response schema for a single ledger record."""

    model_config = {"from_attributes": True}

    record_id: str
    portfolio_id: Optional[str] = None
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


class LedgerRecordListResponse(BaseModel):
    """Response schema for listing records."""

    records: list[LedgerRecordResponse]
    count: int
