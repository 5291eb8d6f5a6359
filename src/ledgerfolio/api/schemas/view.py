"""Pydantic schemas for holdings, cash and balance tool endpoints."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from ledgerfolio.domain.models import CurrencyTotals, IssueCode, RecordKind
from ledgerfolio.domain.views import (
    BalanceAdjustmentPreview,
    Holding,
    PortfolioView,
    ReplayView,
)


class MoneyResponse(BaseModel):
    """Amount tagged with its currency."""

    amount: Decimal
    currency: str


def _totals(totals: CurrencyTotals) -> list[MoneyResponse]:
    return [MoneyResponse(amount=m.amount, currency=m.currency) for m in totals.as_money()]


class HoldingResponse(BaseModel):
    """Response schema for a single holding."""

    asset_id: str
    ticker: str
    currency: str
    display_name: Optional[str] = None
    units: Decimal
    cost_basis: Decimal
    average_unit_cost: Decimal
    realized_gain: list[MoneyResponse]
    realized_cost: list[MoneyResponse]
    realized_proceeds: list[MoneyResponse]

    @classmethod
    def from_holding(cls, holding: Holding) -> "HoldingResponse":
        return cls(
            asset_id=holding.asset_id,
            ticker=holding.ticker,
            currency=holding.currency,
            display_name=holding.display_name,
            units=holding.units,
            cost_basis=holding.cost_basis,
            average_unit_cost=holding.average_unit_cost,
            realized_gain=_totals(holding.realized_gain),
            realized_cost=_totals(holding.realized_cost),
            realized_proceeds=_totals(holding.realized_proceeds),
        )


class CashBalanceResponse(BaseModel):
    """Response schema for one currency's cash balance."""

    currency: str
    balance: Decimal


class ReplayIssueResponse(BaseModel):
    """Response schema for a data-quality issue."""

    record_id: str
    code: IssueCode
    message: str
    asset_id: Optional[str] = None


class ReplayViewResponse(BaseModel):
    """Response schema for holdings and cash as of a date."""

    as_of: Optional[date] = None
    record_count: int
    holdings: list[HoldingResponse]
    cash_balances: list[CashBalanceResponse]
    issues: list[ReplayIssueResponse]

    @classmethod
    def from_view(cls, view: ReplayView) -> "ReplayViewResponse":
        return cls(
            as_of=view.as_of,
            record_count=view.record_count,
            holdings=[HoldingResponse.from_holding(h) for h in view.holdings],
            cash_balances=[
                CashBalanceResponse(currency=c.currency, balance=c.balance)
                for c in view.cash_balances
            ],
            issues=[
                ReplayIssueResponse(
                    record_id=i.record_id,
                    code=i.code,
                    message=i.message,
                    asset_id=i.asset_id,
                )
                for i in view.issues
            ],
        )


class PortfolioViewResponse(ReplayViewResponse):
    """Replay view for a single portfolio."""

    portfolio_id: str
    portfolio_name: str
    base_currency: str

    @classmethod
    def from_portfolio_view(cls, pv: PortfolioView) -> "PortfolioViewResponse":
        base = ReplayViewResponse.from_view(pv.view)
        return cls(
            portfolio_id=pv.portfolio.portfolio_id,
            portfolio_name=pv.portfolio.name,
            base_currency=pv.portfolio.base_currency,
            **base.model_dump(),
        )


class BalanceAdjustmentRequest(BaseModel):
    """Request schema for the cash balance tool."""

    portfolio_id: str
    as_of: date
    target: Decimal
    mode: str = Field(default="pre", pattern="^(pre|post)$")
    currency: Optional[str] = Field(default=None, min_length=3, max_length=3)
    notes: Optional[str] = Field(default=None, max_length=1000)


class SameDayItemResponse(BaseModel):
    """Records on the as-of day grouped by kind and ticker."""

    kind: RecordKind
    ticker: str
    count: int
    day_total: Decimal


class BalanceAdjustmentPreviewResponse(BaseModel):
    """Response schema for a balance preview."""

    portfolio_id: str
    portfolio_name: str
    as_of: date
    currency: str
    mode: str
    current: Decimal
    target: Decimal
    diff: Decimal
    needs_adjustment: bool
    same_day: list[SameDayItemResponse]

    @classmethod
    def from_preview(cls, preview: BalanceAdjustmentPreview) -> "BalanceAdjustmentPreviewResponse":
        return cls(
            portfolio_id=preview.portfolio_id,
            portfolio_name=preview.portfolio_name,
            as_of=preview.as_of,
            currency=preview.currency,
            mode=preview.mode,
            current=preview.current,
            target=preview.target,
            diff=preview.diff,
            needs_adjustment=preview.needs_adjustment,
            same_day=[
                SameDayItemResponse(
                    kind=item.kind,
                    ticker=item.ticker,
                    count=item.count,
                    day_total=item.day_total,
                )
                for item in preview.same_day
            ],
        )


class BalanceAdjustmentCommitResponse(BaseModel):
    """Response schema for a committed balance adjustment."""

    preview: BalanceAdjustmentPreviewResponse
    record_id: Optional[str] = None
    adjusted: bool
    message: str
