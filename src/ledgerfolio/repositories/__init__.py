"""Repository layer - data access abstractions and implementations."""

from ledgerfolio.repositories.protocols import (
    PortfolioRepository,
    AssetRepository,
    LedgerRecordRepository,
)

__all__ = [
    "PortfolioRepository",
    "AssetRepository",
    "LedgerRecordRepository",
]
