"""Position and weighted-average cost-basis tracking.

Each (portfolio, asset) pair keeps one weighted-average cost in the asset's
own currency. Records are applied one at a time to a PositionState in the
order produced by ordering.sort_for_holdings.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Iterable, Mapping, Optional

from ledgerfolio.domain.models import (
    Asset,
    IssueCode,
    LedgerRecord,
    RecordKind,
    ensure_exhaustive,
)
from ledgerfolio.domain.views import ApplyResult, ReplayIssue
from ledgerfolio.engine.realized import realize
from ledgerfolio.engine.state import PositionState

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
UNITS_EPSILON = Decimal("0.000001")
PRECISION = Decimal("0.000001")


def _magnitude(value: Optional[Decimal]) -> Decimal:
    return abs(value) if value is not None else ZERO


def _round(value: Decimal) -> Decimal:
    return value.quantize(PRECISION, rounding=ROUND_HALF_UP)


def _issue(record: LedgerRecord, code: IssueCode, message: str) -> ReplayIssue:
    return ReplayIssue(
        record_id=record.record_id,
        code=code,
        message=message,
        asset_id=record.asset_id,
    )


def resolve_acquisition_cost(record: LedgerRecord, asset_currency: str) -> Optional[Decimal]:
    """
    Cost added by a BUY or transfer-in, in the asset's currency.

    Priority: settlement leg in the asset currency; for transfers, a cash
    leg in the asset currency; then quantity x price + fee. Returns None
    when nothing usable is present.
    """
    if record.settlement_amount is not None and record.settlement_ccy == asset_currency:
        return abs(record.settlement_amount)

    quantity = _magnitude(record.quantity)
    price = _magnitude(record.unit_price)
    fee = _magnitude(record.fee)

    if record.kind is RecordKind.TRANSFER_IN:
        if record.cash_amount is not None and record.cash_ccy == asset_currency:
            return abs(record.cash_amount)
        if quantity > ZERO and price != ZERO:
            return quantity * price + fee
        return None

    computed = quantity * price + fee
    return computed if computed != ZERO else None


def _normalise(state: PositionState, record: LedgerRecord, result: ApplyResult) -> None:
    if state.units < -UNITS_EPSILON:
        result.warn(_issue(
            record,
            IssueCode.NEGATIVE_POSITION_CLAMPED,
            f"units fell to {state.units}; position reset to zero",
        ))
    if state.units <= UNITS_EPSILON:
        state.units = ZERO
        state.cost_basis = ZERO
        state.average_unit_cost = ZERO
        return
    state.units = _round(state.units)
    state.cost_basis = _round(state.cost_basis)
    state.average_unit_cost = state.cost_basis / state.units


def _apply_split(state: PositionState, record: LedgerRecord, result: ApplyResult) -> None:
    ratio = record.split_ratio
    if ratio is None or ratio <= ZERO:
        result.skip(_issue(
            record,
            IssueCode.INVALID_SPLIT_RATIO,
            f"split ratio {ratio!r} is not positive; split ignored",
        ))
        return
    state.units = state.units * ratio
    _normalise(state, record, result)


def _apply_acquisition(state: PositionState, record: LedgerRecord, result: ApplyResult) -> None:
    cost = resolve_acquisition_cost(record, state.asset_currency)
    if cost is None:
        cost = ZERO
        result.warn(_issue(
            record,
            IssueCode.MISSING_COST,
            f"{record.kind.value} has no usable cost; booked at zero pending enrichment",
        ))
    state.units += _magnitude(record.quantity)
    state.cost_basis += cost
    _normalise(state, record, result)


def _apply_disposal(state: PositionState, record: LedgerRecord, result: ApplyResult) -> None:
    quantity = _magnitude(record.quantity)
    average_before = state.current_average()

    # Only SELL realizes; transfer-out is an in-kind move.
    realize(state, record, average_before, result)

    state.cost_basis -= average_before * quantity
    state.units -= quantity
    _normalise(state, record, result)


def _apply_realized_only(state: PositionState, record: LedgerRecord, result: ApplyResult) -> None:
    realize(state, record, state.current_average(), result)


def _apply_nothing(state: PositionState, record: LedgerRecord, result: ApplyResult) -> None:
    """Cash-only kinds leave holdings untouched."""


def _apply_unknown(state: PositionState, record: LedgerRecord, result: ApplyResult) -> None:
    result.skip(_issue(record, IssueCode.UNKNOWN_KIND, "unrecognised record kind; ignored"))


_Handler = Callable[[PositionState, LedgerRecord, ApplyResult], None]

_HANDLERS: dict[RecordKind, _Handler] = {
    RecordKind.SPLIT: _apply_split,
    RecordKind.TRANSFER_IN: _apply_acquisition,
    RecordKind.BUY: _apply_acquisition,
    RecordKind.SELL: _apply_disposal,
    RecordKind.TRANSFER_OUT: _apply_disposal,
    RecordKind.DIVIDEND: _apply_realized_only,
    RecordKind.INTEREST: _apply_realized_only,
    RecordKind.FEE: _apply_realized_only,
    RecordKind.DEPOSIT: _apply_nothing,
    RecordKind.WITHDRAWAL: _apply_nothing,
    RecordKind.OTHER: _apply_nothing,
    RecordKind.BALANCE_ADJUSTMENT: _apply_nothing,
    RecordKind.UNKNOWN: _apply_unknown,
}
ensure_exhaustive(_HANDLERS, "position handlers")


def apply_record(state: PositionState, record: LedgerRecord) -> ApplyResult:
    """Apply one record to a position and report how it went."""
    result = ApplyResult()
    _HANDLERS[record.kind](state, record, result)
    return result


def replay_positions(
    records: Iterable[LedgerRecord],
    assets: Mapping[str, Asset],
) -> tuple[list[PositionState], list[ReplayIssue]]:
    """
    Replay pre-ordered records into one PositionState per asset.

    States come back in first-seen order. Records whose asset is missing
    from the registry are the caller's job to drop beforehand.
    """
    states: dict[str, PositionState] = {}
    issues: list[ReplayIssue] = []

    for record in records:
        state = states.get(record.asset_id)
        if state is None:
            state = PositionState(asset=assets[record.asset_id])
            states[record.asset_id] = state

        result = apply_record(state, record)
        for issue in result.issues:
            logger.debug("Record %s: %s (%s)", issue.record_id, issue.code.value, issue.message)
        issues.extend(result.issues)

    return list(states.values()), issues
