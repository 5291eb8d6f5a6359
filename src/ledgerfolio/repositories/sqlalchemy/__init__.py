"""SQLAlchemy repository implementations."""

from ledgerfolio.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    create_db_engine,
    init_db,
    reset_database,
    Base,
)
from ledgerfolio.repositories.sqlalchemy.portfolio_repo import SqlAlchemyPortfolioRepository
from ledgerfolio.repositories.sqlalchemy.asset_repo import SqlAlchemyAssetRepository
from ledgerfolio.repositories.sqlalchemy.ledger_record_repo import SqlAlchemyLedgerRecordRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "create_db_engine",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyPortfolioRepository",
    "SqlAlchemyAssetRepository",
    "SqlAlchemyLedgerRecordRepository",
]
