"""Realized profit and loss at disposal and income events.

Realized figures are expressed in the currency the event's proceeds
resolved to, which is not necessarily the asset's currency. A sale's asset
currency cost is converted with the exchange rate implied by that same
sale row (cash leg over settlement leg), never with an external rate
table, so every realized figure stays traceable to its source record.
"""

from decimal import Decimal

from ledgerfolio.domain.models import IssueCode, LedgerRecord, Money, RecordKind
from ledgerfolio.domain.views import ApplyResult, ReplayIssue
from ledgerfolio.engine.state import PositionState

ZERO = Decimal("0")
ONE = Decimal("1")


def _magnitude(value) -> Decimal:
    return abs(value) if value is not None else ZERO


def resolve_proceeds(record: LedgerRecord, asset_currency: str) -> Money:
    """
    Proceeds of a realizing event with the currency they are in.

    Priority: cash leg, then settlement leg, then quantity x price - fee in
    the asset's currency.
    """
    if record.cash_amount is not None:
        return Money(abs(record.cash_amount), record.cash_ccy or asset_currency)
    if record.settlement_amount is not None:
        return Money(abs(record.settlement_amount), record.settlement_ccy or asset_currency)
    computed = (
        _magnitude(record.quantity) * _magnitude(record.unit_price)
        - _magnitude(record.fee)
    )
    return Money(max(ZERO, computed), asset_currency)


def implied_fx_rate(record: LedgerRecord) -> Decimal:
    """Exchange rate backed out of a row's two legs; 1 when either is missing."""
    cash = _magnitude(record.cash_amount)
    settlement = _magnitude(record.settlement_amount)
    if cash > ZERO and settlement > ZERO:
        return cash / settlement
    return ONE


def realize(
    state: PositionState,
    record: LedgerRecord,
    average_before: Decimal,
    result: ApplyResult,
) -> None:
    """
    Book realized gain for a SELL, DIV, INT or FEE record.

    average_before must be captured before the sale reduces units.
    Cash placeholder assets never realize.
    """
    kind = record.kind
    if not kind.realizes or state.asset.is_cash_placeholder:
        return

    asset_currency = state.asset_currency
    proceeds = resolve_proceeds(record, asset_currency)
    has_leg = record.cash_amount is not None or record.settlement_amount is not None

    if kind.is_income:
        state.realized_gain.add(proceeds)
        state.realized_proceeds.add(proceeds)
        if not has_leg and proceeds.amount == ZERO:
            result.warn(_missing_proceeds(record))

    elif kind is RecordKind.FEE:
        # Fee is assumed to be in the proceeds currency of the activity.
        state.realized_gain.subtract(Money(_magnitude(record.fee), proceeds.currency))

    elif kind is RecordKind.SELL:
        quantity = _magnitude(record.quantity)
        cost = average_before * quantity
        if proceeds.currency and asset_currency and proceeds.currency != asset_currency:
            cost = cost * implied_fx_rate(record)

        state.realized_gain.add(Money(proceeds.amount - cost, proceeds.currency))
        state.realized_proceeds.add(proceeds)
        state.realized_cost.add(Money(cost, proceeds.currency))
        if not has_leg and proceeds.amount == ZERO:
            result.warn(_missing_proceeds(record))


def _missing_proceeds(record: LedgerRecord) -> ReplayIssue:
    return ReplayIssue(
        record_id=record.record_id,
        code=IssueCode.MISSING_PROCEEDS,
        message=f"{record.kind.value} has no cash or settlement leg and no price; proceeds booked as zero",
        asset_id=record.asset_id,
    )
