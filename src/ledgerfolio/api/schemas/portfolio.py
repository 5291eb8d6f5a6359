"""Pydantic schemas for portfolio and asset endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PortfolioCreate(BaseModel):
    """Request schema for creating a portfolio."""

    name: str = Field(..., min_length=1, max_length=255, description="Unique portfolio name")
    base_currency: str = Field(
        default="GBP",
        min_length=3,
        max_length=3,
        description="Currency the portfolio's cash is held in",
    )

    @field_validator("base_currency")
    @classmethod
    def uppercase_currency(cls, v: str) -> str:
        return v.upper()


class PortfolioResponse(BaseModel):
    """Response schema for a single portfolio."""

    model_config = {"from_attributes": True}

    portfolio_id: str
    name: str
    base_currency: str
    created_at: Optional[datetime] = None


class PortfolioListResponse(BaseModel):
    """Response schema for listing portfolios."""

    portfolios: list[PortfolioResponse]
    count: int


class AssetCreate(BaseModel):
    """Request schema for registering an asset."""

    ticker: str = Field(..., min_length=1, max_length=32, description="Unique ticker")
    currency: str = Field(..., min_length=3, max_length=3, description="Trading currency")
    display_name: Optional[str] = Field(default=None, max_length=255)
    status: Optional[str] = Field(default=None, max_length=32)

    @field_validator("ticker", "currency")
    @classmethod
    def uppercase(cls, v: str) -> str:
        return v.strip().upper()


class AssetResponse(BaseModel):
    """Response schema for a single asset."""

    model_config = {"from_attributes": True}

    asset_id: str
    ticker: str
    currency: str
    display_name: Optional[str] = None
    status: Optional[str] = None
    is_cash_placeholder: bool = False


class AssetListResponse(BaseModel):
    """Response schema for listing assets."""

    assets: list[AssetResponse]
    count: int
