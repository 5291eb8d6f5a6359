"""SQLAlchemy implementation of PortfolioRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from ledgerfolio.domain.models import Portfolio
from ledgerfolio.repositories.sqlalchemy.orm_models import PortfolioORM


class SqlAlchemyPortfolioRepository:
    """SQLAlchemy-backed portfolio repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, portfolio: Portfolio) -> Portfolio:
        """Persist a new portfolio."""
        orm_portfolio = PortfolioORM(
            portfolio_id=portfolio.portfolio_id,
            name=portfolio.name,
            base_currency=portfolio.base_currency,
            created_at=portfolio.created_at,
        )
        self._db.add(orm_portfolio)
        self._db.commit()
        self._db.refresh(orm_portfolio)
        return self._to_domain(orm_portfolio)

    def get_by_id(self, portfolio_id: str) -> Optional[Portfolio]:
        """Retrieve portfolio by ID."""
        orm_portfolio = self._db.query(PortfolioORM).filter(
            PortfolioORM.portfolio_id == portfolio_id
        ).first()
        return self._to_domain(orm_portfolio) if orm_portfolio else None

    def get_by_name(self, name: str) -> Optional[Portfolio]:
        """Retrieve portfolio by name."""
        orm_portfolio = self._db.query(PortfolioORM).filter(
            PortfolioORM.name == name
        ).first()
        return self._to_domain(orm_portfolio) if orm_portfolio else None

    def list_all(self) -> list[Portfolio]:
        """List all portfolios ordered by name."""
        orm_portfolios = self._db.query(PortfolioORM).order_by(PortfolioORM.name).all()
        return [self._to_domain(p) for p in orm_portfolios]

    @staticmethod
    def _to_domain(orm: PortfolioORM) -> Portfolio:
        """Convert ORM model to domain model."""
        return Portfolio(
            portfolio_id=orm.portfolio_id,
            name=orm.name,
            base_currency=orm.base_currency,
            created_at=orm.created_at,
        )
