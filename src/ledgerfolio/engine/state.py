"""Per-asset accumulator used during position replay."""

from dataclasses import dataclass, field
from decimal import Decimal

from ledgerfolio.domain.models import Asset, CurrencyTotals
from ledgerfolio.domain.views import Holding

ZERO = Decimal("0")


@dataclass
class PositionState:
    """
    Running units, cost and realized totals for one (portfolio, asset).

    Created fresh for every replay; nothing outlives the call.
    """

    asset: Asset
    units: Decimal = ZERO
    cost_basis: Decimal = ZERO
    average_unit_cost: Decimal = ZERO
    realized_gain: CurrencyTotals = field(default_factory=CurrencyTotals)
    realized_cost: CurrencyTotals = field(default_factory=CurrencyTotals)
    realized_proceeds: CurrencyTotals = field(default_factory=CurrencyTotals)

    @property
    def asset_currency(self) -> str:
        return self.asset.currency_code

    def current_average(self) -> Decimal:
        """Average unit cost from the live totals (0 with no units)."""
        if self.units > ZERO:
            return self.cost_basis / self.units
        return ZERO

    def to_holding(self) -> Holding:
        return Holding(
            asset_id=self.asset.asset_id,
            ticker=self.asset.ticker,
            currency=self.asset_currency,
            units=self.units,
            cost_basis=self.cost_basis,
            average_unit_cost=self.average_unit_cost,
            realized_gain=self.realized_gain.copy(),
            realized_cost=self.realized_cost.copy(),
            realized_proceeds=self.realized_proceeds.copy(),
            display_name=self.asset.display_name,
            status=self.asset.status,
        )
