"""Ledger replay engine for multi-currency investment portfolios."""

__version__ = "0.1.0"
