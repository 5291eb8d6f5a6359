"""Dependency injection for FastAPI."""

from fastapi import Depends
from sqlalchemy.orm import Session

from ledgerfolio.repositories.sqlalchemy.database import get_db
from ledgerfolio.repositories.sqlalchemy import (
    SqlAlchemyPortfolioRepository,
    SqlAlchemyAssetRepository,
    SqlAlchemyLedgerRecordRepository,
)
from ledgerfolio.services import (
    LedgerService,
    PortfolioViewService,
    BalanceAdjustmentService,
)
from ledgerfolio.config.settings import get_settings


def get_portfolio_repo(db: Session = Depends(get_db)) -> SqlAlchemyPortfolioRepository:
    """Provide PortfolioRepository instance."""
    return SqlAlchemyPortfolioRepository(db)


def get_asset_repo(db: Session = Depends(get_db)) -> SqlAlchemyAssetRepository:
    """Provide AssetRepository instance."""
    return SqlAlchemyAssetRepository(db)


def get_record_repo(db: Session = Depends(get_db)) -> SqlAlchemyLedgerRecordRepository:
    """Provide LedgerRecordRepository instance."""
    return SqlAlchemyLedgerRecordRepository(db)


def get_ledger_service(
    portfolio_repo: SqlAlchemyPortfolioRepository = Depends(get_portfolio_repo),
    asset_repo: SqlAlchemyAssetRepository = Depends(get_asset_repo),
    record_repo: SqlAlchemyLedgerRecordRepository = Depends(get_record_repo),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(
        portfolio_repo=portfolio_repo,
        asset_repo=asset_repo,
        record_repo=record_repo,
    )


def get_view_service(
    portfolio_repo: SqlAlchemyPortfolioRepository = Depends(get_portfolio_repo),
    asset_repo: SqlAlchemyAssetRepository = Depends(get_asset_repo),
    record_repo: SqlAlchemyLedgerRecordRepository = Depends(get_record_repo),
) -> PortfolioViewService:
    """Provide PortfolioViewService instance."""
    return PortfolioViewService(
        portfolio_repo=portfolio_repo,
        asset_repo=asset_repo,
        record_repo=record_repo,
        settings=get_settings(),
    )


def get_balance_service(
    ledger_service: LedgerService = Depends(get_ledger_service),
) -> BalanceAdjustmentService:
    """Provide BalanceAdjustmentService instance."""
    return BalanceAdjustmentService(
        ledger_service=ledger_service,
        settings=get_settings(),
    )
