"""Ledger record repository protocol."""

from typing import Protocol, Optional

from ledgerfolio.domain.models import LedgerRecord


class LedgerRecordRepository(Protocol):
    """
    Interface for the append-only ledger.

    There is deliberately no update or delete: records are immutable once
    written.
    """

    def append(self, record: LedgerRecord) -> LedgerRecord:
        """Persist a new record."""
        ...

    def get_by_id(self, record_id: str) -> Optional[LedgerRecord]:
        """Retrieve record by ID."""
        ...

    def list_by_portfolio(self, portfolio_id: str) -> list[LedgerRecord]:
        """List a portfolio's records in (date, created, id) order."""
        ...

    def list_page(
        self,
        offset: int,
        limit: int,
        portfolio_id: Optional[str] = None,
    ) -> list[LedgerRecord]:
        """Return one page of records in (date, created, id) order."""
        ...

    def count(self, portfolio_id: Optional[str] = None) -> int:
        """Count records, optionally for one portfolio."""
        ...
