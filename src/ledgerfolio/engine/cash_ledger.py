"""Multi-currency cash ledger.

Every record is reduced to at most one signed movement in one currency and
added to that currency's running balance. Accumulation within a day is
commutative, so the coarse (date, created, id) order is enough here.
"""

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Iterable, Mapping, Optional

from ledgerfolio.core.timezone import DateLike
from ledgerfolio.domain.models import (
    Asset,
    LedgerRecord,
    Money,
    RecordKind,
    ensure_exhaustive,
)
from ledgerfolio.domain.views import CashBalance
from ledgerfolio.engine.options import ReplayOptions
from ledgerfolio.engine.ordering import filter_as_of, stable_sort

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")
BALANCE_EPSILON = Decimal("0.000000001")


def _magnitude(value: Optional[Decimal]) -> Decimal:
    return abs(value) if value is not None else ZERO


def _round_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class CashLedger:
    """Running signed balance per currency code."""

    balances: dict[str, Decimal] = field(default_factory=dict)

    @classmethod
    def seeded(cls, currencies: Iterable[str]) -> "CashLedger":
        return cls({currency.upper(): ZERO for currency in currencies})

    def post(self, movement: Money) -> None:
        self.balances[movement.currency] = (
            self.balances.get(movement.currency, ZERO) + movement.amount
        )

    def balance(self, currency: str) -> Decimal:
        return self.balances.get(currency.upper(), ZERO)

    def to_cash_balances(self) -> list[CashBalance]:
        """Rounded balances, dropping currencies that net to zero."""
        result = []
        for currency, amount in self.balances.items():
            rounded = _round_cents(amount)
            if abs(rounded) > BALANCE_EPSILON:
                result.append(CashBalance(currency=currency, balance=rounded))
        return result


# -----------------------------------------------------------------------------
# Per-kind movement rules
# -----------------------------------------------------------------------------


def _cash_gate_open(asset: Asset, options: ReplayOptions) -> bool:
    return not options.require_cash_asset or asset.is_cash_placeholder


def _cash_currency(record: LedgerRecord, fallback: str) -> str:
    return record.cash_ccy or fallback


def _balance_adjustment(record: LedgerRecord, asset: Asset, options: ReplayOptions) -> Optional[Money]:
    # quantity encodes direction here, not a share count
    if record.cash_amount is None:
        return None
    sign = 1 if (record.quantity or ZERO) >= ZERO else -1
    return Money(sign * abs(record.cash_amount), _cash_currency(record, options.default_currency))


def _income(record: LedgerRecord, asset: Asset, options: ReplayOptions) -> Optional[Money]:
    if record.cash_amount is None:
        return None
    return Money(abs(record.cash_amount), _cash_currency(record, options.default_currency))


def _deposit(record: LedgerRecord, asset: Asset, options: ReplayOptions) -> Optional[Money]:
    if record.cash_amount is None or not _cash_gate_open(asset, options):
        return None
    return Money(abs(record.cash_amount), _cash_currency(record, options.default_currency))


def _outflow(record: LedgerRecord, asset: Asset, options: ReplayOptions) -> Optional[Money]:
    if record.cash_amount is None or not _cash_gate_open(asset, options):
        return None
    return Money(-abs(record.cash_amount), _cash_currency(record, options.default_currency))


def _other(record: LedgerRecord, asset: Asset, options: ReplayOptions) -> Optional[Money]:
    # already signed
    if record.cash_amount is None or not _cash_gate_open(asset, options):
        return None
    return Money(record.cash_amount, _cash_currency(record, options.default_currency))


def trade_from_price(record: LedgerRecord, asset: Asset) -> Optional[Money]:
    """Cash effect of a BUY/SELL computed from price and quantity in the asset currency."""
    gross = _magnitude(record.quantity) * _magnitude(record.unit_price)
    fee = _magnitude(record.fee)
    if record.kind is RecordKind.BUY:
        amount = -(gross + fee)
    else:
        amount = gross - fee
    if amount == ZERO:
        return None
    return Money(amount, asset.currency_code)


def _trade(record: LedgerRecord, asset: Asset, options: ReplayOptions) -> Optional[Money]:
    if record.cash_amount is not None:
        sign = -1 if record.kind is RecordKind.BUY else 1
        return Money(sign * abs(record.cash_amount), _cash_currency(record, asset.currency_code))
    # No explicit cash leg: assume the cash moved in the asset's own currency.
    return trade_from_price(record, asset)


def _transfer(record: LedgerRecord, asset: Asset, options: ReplayOptions) -> Optional[Money]:
    # Transfers of real assets are in-kind and move no cash.
    if not asset.is_cash_placeholder or record.cash_amount is None:
        return None
    sign = 1 if record.kind is RecordKind.TRANSFER_IN else -1
    return Money(sign * abs(record.cash_amount), _cash_currency(record, options.default_currency))


def _no_cash(record: LedgerRecord, asset: Asset, options: ReplayOptions) -> Optional[Money]:
    return None


_Rule = Callable[[LedgerRecord, Asset, ReplayOptions], Optional[Money]]

_CASH_RULES: dict[RecordKind, _Rule] = {
    RecordKind.BALANCE_ADJUSTMENT: _balance_adjustment,
    RecordKind.DIVIDEND: _income,
    RecordKind.INTEREST: _income,
    RecordKind.DEPOSIT: _deposit,
    RecordKind.WITHDRAWAL: _outflow,
    RecordKind.FEE: _outflow,
    RecordKind.OTHER: _other,
    RecordKind.BUY: _trade,
    RecordKind.SELL: _trade,
    RecordKind.TRANSFER_IN: _transfer,
    RecordKind.TRANSFER_OUT: _transfer,
    RecordKind.SPLIT: _no_cash,
    RecordKind.UNKNOWN: _no_cash,
}
ensure_exhaustive(_CASH_RULES, "cash rules")


def resolve_cash_movement(
    record: LedgerRecord,
    asset: Asset,
    options: ReplayOptions,
) -> Optional[Money]:
    """Signed cash movement caused by one record, or None if it moves no cash."""
    return _CASH_RULES[record.kind](record, asset, options)


# -----------------------------------------------------------------------------
# Replays
# -----------------------------------------------------------------------------


def replay_cash(
    records: Iterable[LedgerRecord],
    assets: Mapping[str, Asset],
    options: ReplayOptions,
) -> CashLedger:
    """Accumulate pre-filtered, pre-ordered records into a CashLedger."""
    ledger = CashLedger.seeded(options.seed_currencies)
    for record in records:
        asset = assets.get(record.asset_id)
        if asset is None:
            logger.debug("Record %s: asset %s not registered, no cash posted", record.record_id, record.asset_id)
            continue
        movement = resolve_cash_movement(record, asset, options)
        if movement is not None:
            ledger.post(movement)
    return ledger


def calculate_cash_balances(
    records: Iterable[LedgerRecord],
    assets: Mapping[str, Asset],
    options: ReplayOptions,
    as_of: DateLike = None,
) -> list[CashBalance]:
    """Per-currency cash balances as of a date, omitting zero balances."""
    ordered = stable_sort(filter_as_of(records, as_of))
    return replay_cash(ordered, assets, options).to_cash_balances()


def single_currency_movement(
    record: LedgerRecord,
    asset: Asset,
    currency: str,
    options: ReplayOptions,
) -> Optional[Decimal]:
    """
    Signed movement a record causes in one currency, or None.

    Trades with no cash leg at all fall back to price x quantity
    when the asset itself trades in it.
    """
    target = currency.upper()
    if record.kind in (RecordKind.BUY, RecordKind.SELL):
        movement = None
        if record.cash_amount is not None and _cash_currency(record, target) == target:
            sign = -1 if record.kind is RecordKind.BUY else 1
            movement = Money(sign * abs(record.cash_amount), target)
        elif record.cash_amount is None and asset.currency_code == target:
            movement = trade_from_price(record, asset)
    else:
        movement = resolve_cash_movement(
            record, asset, replace(options, default_currency=target)
        )

    if movement is None or movement.currency != target:
        return None
    return movement.amount


def calculate_single_currency_balance(
    records: Iterable[LedgerRecord],
    assets: Mapping[str, Asset],
    currency: str,
    options: ReplayOptions,
    as_of: DateLike = None,
) -> CashBalance:
    """
    Cash balance for a portfolio restricted to one settlement currency.

    Movements in other currencies are ignored. Always returns a balance,
    zero included.
    """
    target = currency.upper()
    total = ZERO

    for record in stable_sort(filter_as_of(records, as_of)):
        asset = assets.get(record.asset_id)
        if asset is None:
            continue
        amount = single_currency_movement(record, asset, target, options)
        if amount is not None:
            total += amount

    return CashBalance(currency=target, balance=_round_cents(total))
