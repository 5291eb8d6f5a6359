"""View models for replay outputs."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerfolio.domain.models import (
    ApplyStatus,
    CurrencyTotals,
    IssueCode,
    Portfolio,
    RecordKind,
)


@dataclass
class Holding:
    """
    Derived position for one asset; rebuilt on every query, never stored.

    cost_basis and average_unit_cost are in the asset's currency. The
    realized_* totals are per currency and must be converted before being
    summed across holdings.
    """

    asset_id: str
    ticker: str
    currency: str
    units: Decimal
    cost_basis: Decimal
    average_unit_cost: Decimal
    realized_gain: CurrencyTotals = field(default_factory=CurrencyTotals)
    realized_cost: CurrencyTotals = field(default_factory=CurrencyTotals)
    realized_proceeds: CurrencyTotals = field(default_factory=CurrencyTotals)
    display_name: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class CashBalance:
    """Signed balance for one currency."""

    currency: str
    balance: Decimal


@dataclass(frozen=True)
class ReplayIssue:
    """A data-quality problem found while replaying one record."""

    record_id: str
    code: IssueCode
    message: str
    asset_id: Optional[str] = None


@dataclass
class ApplyResult:
    """Tagged outcome of applying one record."""

    status: ApplyStatus = ApplyStatus.APPLIED
    issues: list[ReplayIssue] = field(default_factory=list)

    def warn(self, issue: ReplayIssue) -> None:
        self.issues.append(issue)
        if self.status is ApplyStatus.APPLIED:
            self.status = ApplyStatus.APPLIED_WITH_WARNING

    def skip(self, issue: ReplayIssue) -> None:
        self.issues.append(issue)
        self.status = ApplyStatus.SKIPPED

    @property
    def ok(self) -> bool:
        return self.status is ApplyStatus.APPLIED


@dataclass
class ReplayView:
    """Holdings and cash balances reconstructed as of a date."""

    holdings: list[Holding] = field(default_factory=list)
    cash_balances: list[CashBalance] = field(default_factory=list)
    issues: list[ReplayIssue] = field(default_factory=list)
    as_of: Optional[date] = None
    record_count: int = 0


@dataclass
class PortfolioView:
    """Replay view for a single portfolio."""

    portfolio: Portfolio
    view: ReplayView


@dataclass
class SameDayItem:
    """Records on the as-of day grouped by kind and ticker."""

    kind: RecordKind
    ticker: str
    count: int = 0
    day_total: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class BalanceAdjustmentPreview:
    """Current versus target cash balance for one currency."""

    portfolio_id: str
    portfolio_name: str
    as_of: date
    currency: str
    mode: str
    current: Decimal
    target: Decimal
    diff: Decimal
    same_day: list[SameDayItem] = field(default_factory=list)

    @property
    def needs_adjustment(self) -> bool:
        return self.diff != Decimal("0")
