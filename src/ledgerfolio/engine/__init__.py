"""Replay engine: derives holdings and cash from ledger records."""

from ledgerfolio.engine.options import ReplayOptions
from ledgerfolio.engine.ordering import (
    KIND_PRIORITY,
    filter_as_of,
    filter_before,
    records_on,
    sort_for_holdings,
    stable_sort,
)
from ledgerfolio.engine.state import PositionState
from ledgerfolio.engine.positions import apply_record, replay_positions, resolve_acquisition_cost
from ledgerfolio.engine.realized import implied_fx_rate, resolve_proceeds
from ledgerfolio.engine.cash_ledger import (
    CashLedger,
    calculate_cash_balances,
    calculate_single_currency_balance,
    resolve_cash_movement,
    single_currency_movement,
)
from ledgerfolio.engine.view_builder import build_view

__all__ = [
    "ReplayOptions",
    "KIND_PRIORITY",
    "filter_as_of",
    "filter_before",
    "records_on",
    "sort_for_holdings",
    "stable_sort",
    "PositionState",
    "apply_record",
    "replay_positions",
    "resolve_acquisition_cost",
    "implied_fx_rate",
    "resolve_proceeds",
    "CashLedger",
    "calculate_cash_balances",
    "calculate_single_currency_balance",
    "resolve_cash_movement",
    "single_currency_movement",
    "build_view",
]
