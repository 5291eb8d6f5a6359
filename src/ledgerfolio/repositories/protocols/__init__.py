"""Repository protocol definitions (interfaces)."""

from ledgerfolio.repositories.protocols.portfolio_repo import PortfolioRepository
from ledgerfolio.repositories.protocols.asset_repo import AssetRepository
from ledgerfolio.repositories.protocols.ledger_record_repo import LedgerRecordRepository

__all__ = [
    "PortfolioRepository",
    "AssetRepository",
    "LedgerRecordRepository",
]
