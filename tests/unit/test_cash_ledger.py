"""
Unit tests for the multi-currency cash ledger.

Tests cover:
- Per-kind sign rules and the cash placeholder gate
- Trades with and without an explicit cash leg
- Rounding and omission of zero balances
- The single-currency balance used by the balance tool
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from ledgerfolio.domain.models import Money
from ledgerfolio.engine import (
    CashLedger,
    ReplayOptions,
    calculate_cash_balances,
    calculate_single_currency_balance,
    resolve_cash_movement,
)

from tests.conftest import cash_map, make_record


@pytest.fixture
def options() -> ReplayOptions:
    """Default options: GBP default currency, cash placeholder required."""
    return ReplayOptions()


# =============================================================================
# MOVEMENT RULES
# =============================================================================


class TestCashMovementRules:
    """Tests for per-kind cash movements."""

    def test_deposit_and_withdrawal(self, assets, cash_gbp, options):
        """
        GIVEN a deposit of 500 and a withdrawal of 200 on CASH.GBP
        WHEN I calculate balances
        THEN GBP holds 300
        """
        records = [
            make_record("DEP", cash_gbp, cash_amount=500, cash_currency="GBP"),
            make_record("WIT", cash_gbp, cash_amount=200, cash_currency="GBP"),
        ]

        balances = calculate_cash_balances(records, assets, options)

        assert cash_map(balances) == {"GBP": Decimal("300.00")}

    def test_withdrawal_sign_ignores_stored_sign(self, cash_gbp, options):
        """Withdrawals always reduce cash, whatever sign was stored."""
        record = make_record("WIT", cash_gbp, cash_amount=-75, cash_currency="GBP")

        assert resolve_cash_movement(record, cash_gbp, options) == Money(Decimal("-75"), "GBP")

    def test_other_keeps_stored_sign(self, cash_gbp, options):
        """OTR rows carry their own sign."""
        record = make_record("OTR", cash_gbp, cash_amount=-12, cash_currency="GBP")

        assert resolve_cash_movement(record, cash_gbp, options).amount == Decimal("-12")

    def test_deposit_on_non_cash_asset_is_gated(self, usd_stock, options):
        """
        GIVEN a deposit booked against a stock rather than a cash placeholder
        WHEN the placeholder gate is on
        THEN it moves no cash
        """
        record = make_record("DEP", usd_stock, cash_amount=100, cash_currency="USD")

        assert resolve_cash_movement(record, usd_stock, options) is None

    def test_gate_can_be_switched_off(self, usd_stock, options):
        """With the gate off, cash events on any asset move cash."""
        relaxed = replace(options, require_cash_asset=False)
        record = make_record("DEP", usd_stock, cash_amount=100, cash_currency="USD")

        assert resolve_cash_movement(record, usd_stock, relaxed) == Money(Decimal("100"), "USD")

    def test_income_is_never_gated(self, usd_stock, options):
        """Dividends on a stock credit cash even with the gate on."""
        record = make_record("DIV", usd_stock, cash_amount=8, cash_currency="GBP")

        assert resolve_cash_movement(record, usd_stock, options) == Money(Decimal("8"), "GBP")

    def test_missing_cash_currency_uses_default(self, cash_gbp, options):
        """A cash leg with no currency lands in the default currency."""
        record = make_record("DEP", cash_gbp, cash_amount=10)

        assert resolve_cash_movement(record, cash_gbp, options).currency == "GBP"

    def test_balance_adjustment_direction_from_quantity(self, cash_gbp, options):
        """BAL uses quantity's sign for direction and cash_amount for size."""
        up = make_record("BAL", cash_gbp, quantity=1, cash_amount=40, cash_currency="GBP")
        down = make_record("BAL", cash_gbp, quantity=-1, cash_amount=40, cash_currency="GBP")

        assert resolve_cash_movement(up, cash_gbp, options).amount == Decimal("40")
        assert resolve_cash_movement(down, cash_gbp, options).amount == Decimal("-40")

    def test_in_kind_transfer_moves_no_cash(self, usd_stock, options):
        """TIN/TOT of a real asset are in-kind."""
        record = make_record("TIN", usd_stock, quantity=5, cash_amount=500, cash_currency="USD")

        assert resolve_cash_movement(record, usd_stock, options) is None

    def test_cash_transfer_moves_cash(self, cash_usd, options):
        """TIN/TOT of a cash placeholder move that cash."""
        tin = make_record("TIN", cash_usd, cash_amount=250, cash_currency="USD")
        tot = make_record("TOT", cash_usd, cash_amount=50, cash_currency="USD")

        assert resolve_cash_movement(tin, cash_usd, options).amount == Decimal("250")
        assert resolve_cash_movement(tot, cash_usd, options).amount == Decimal("-50")

    def test_split_moves_no_cash(self, usd_stock, options):
        record = make_record("SPL", usd_stock, split_ratio=2)

        assert resolve_cash_movement(record, usd_stock, options) is None


# =============================================================================
# TRADES
# =============================================================================


class TestTradeCash:
    """Tests for BUY/SELL cash effects."""

    def test_buy_with_cash_leg_debits_cash_currency(self, usd_stock, options):
        """A USD stock bought with sterling debits GBP."""
        record = make_record(
            "BUY", usd_stock, quantity=10, unit_price=100,
            settlement_amount=1000, settlement_currency="USD",
            cash_amount=800, cash_currency="GBP",
        )

        assert resolve_cash_movement(record, usd_stock, options) == Money(Decimal("-800"), "GBP")

    def test_buy_without_legs_debits_asset_currency(self, usd_stock, options):
        """
        GIVEN a BUY of 5 at 20 with a 2 fee and no legs
        WHEN I resolve its cash effect
        THEN the asset currency is debited 102
        """
        record = make_record("BUY", usd_stock, quantity=5, unit_price=20, fee=2)

        assert resolve_cash_movement(record, usd_stock, options) == Money(Decimal("-102"), "USD")

    def test_sell_without_legs_credits_net_of_fee(self, usd_stock, options):
        record = make_record("SELL", usd_stock, quantity=5, unit_price=20, fee=2)

        assert resolve_cash_movement(record, usd_stock, options) == Money(Decimal("98"), "USD")

    def test_trade_with_nothing_moves_nothing(self, usd_stock, options):
        record = make_record("BUY", usd_stock, quantity=5)

        assert resolve_cash_movement(record, usd_stock, options) is None


# =============================================================================
# BALANCES
# =============================================================================


class TestCashBalances:
    """Tests for balance output."""

    def test_zero_balances_are_omitted(self, cash_gbp, assets, options):
        """Currencies that net to zero do not appear."""
        records = [
            make_record("DEP", cash_gbp, cash_amount=100, cash_currency="GBP"),
            make_record("WIT", cash_gbp, cash_amount=100, cash_currency="GBP"),
        ]

        assert calculate_cash_balances(records, assets, options) == []

    def test_balances_round_to_cents(self, cash_gbp, assets, options):
        records = [make_record("DEP", cash_gbp, cash_amount="10.005", cash_currency="GBP")]

        assert cash_map(calculate_cash_balances(records, assets, options)) == {"GBP": Decimal("10.01")}

    def test_negative_balances_are_reported(self, usd_stock, assets, options):
        """Buying without funding leaves a negative balance."""
        records = [make_record("BUY", usd_stock, quantity=1, unit_price=50)]

        assert cash_map(calculate_cash_balances(records, assets, options)) == {"USD": Decimal("-50.00")}

    def test_unseeded_currency_gets_a_bucket(self, assets, cash_gbp, options):
        """A cash leg in a currency outside the seeds still accumulates."""
        records = [make_record("DIV", cash_gbp, cash_amount=30, cash_currency="CHF")]

        assert cash_map(calculate_cash_balances(records, assets, options)) == {"CHF": Decimal("30.00")}

    def test_as_of_filter(self, cash_gbp, assets, options):
        """
        GIVEN deposits on 2024-01-01 and 2024-01-05
        WHEN balances are taken as of 2024-01-03
        THEN only the first counts
        """
        records = [
            make_record("DEP", cash_gbp, date(2024, 1, 1), cash_amount=100, cash_currency="GBP"),
            make_record("DEP", cash_gbp, date(2024, 1, 5), cash_amount=900, cash_currency="GBP"),
        ]

        balances = calculate_cash_balances(records, assets, options, as_of=date(2024, 1, 3))

        assert cash_map(balances) == {"GBP": Decimal("100.00")}

    def test_records_for_unknown_assets_are_skipped(self, assets, options):
        records = [make_record("DEP", "GHOST", cash_amount=100, cash_currency="GBP")]

        assert calculate_cash_balances(records, assets, options) == []

    def test_ledger_seeds_start_at_zero(self):
        ledger = CashLedger.seeded(["gbp", "usd"])

        assert ledger.balances == {"GBP": Decimal("0"), "USD": Decimal("0")}
        assert ledger.balance("EUR") == Decimal("0")


# =============================================================================
# SINGLE CURRENCY
# =============================================================================


class TestSingleCurrencyBalance:
    """Tests for the one-currency balance."""

    def test_ignores_other_currencies(self, assets, cash_gbp, cash_usd, options):
        """
        GIVEN GBP and USD deposits
        WHEN I ask for the GBP balance
        THEN only GBP movements count
        """
        records = [
            make_record("DEP", cash_gbp, cash_amount=100, cash_currency="GBP"),
            make_record("DEP", cash_usd, cash_amount=999, cash_currency="USD"),
        ]

        balance = calculate_single_currency_balance(records, assets, "gbp", options)

        assert balance.currency == "GBP"
        assert balance.balance == Decimal("100.00")

    def test_zero_balance_is_returned(self, assets, options):
        """The single-currency balance always returns a value."""
        balance = calculate_single_currency_balance([], assets, "EUR", options)

        assert balance.balance == Decimal("0.00")

    def test_trade_cash_leg_in_target_currency(self, assets, usd_stock, options):
        """A USD stock bought with GBP counts in the GBP balance."""
        records = [make_record(
            "BUY", usd_stock, quantity=10, unit_price=100,
            cash_amount=800, cash_currency="GBP",
        )]

        assert calculate_single_currency_balance(records, assets, "GBP", options).balance == Decimal("-800.00")
        assert calculate_single_currency_balance(records, assets, "USD", options).balance == Decimal("0.00")

    def test_trade_without_leg_counts_when_asset_matches(self, assets, gbp_stock, usd_stock, options):
        """Price fallback only applies when the asset trades in the target currency."""
        records = [
            make_record("BUY", gbp_stock, quantity=100, unit_price=2),
            make_record("BUY", usd_stock, quantity=1, unit_price=100),
        ]

        assert calculate_single_currency_balance(records, assets, "GBP", options).balance == Decimal("-200.00")
