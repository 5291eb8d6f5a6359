"""SQLAlchemy implementation of AssetRepository."""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ledgerfolio.domain.models import Asset
from ledgerfolio.repositories.sqlalchemy.orm_models import AssetORM


class SqlAlchemyAssetRepository:
    """SQLAlchemy-backed asset registry."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, asset: Asset) -> Asset:
        """Register a new asset."""
        orm_asset = AssetORM(
            asset_id=asset.asset_id,
            ticker=asset.ticker,
            currency=asset.currency_code,
            display_name=asset.display_name,
            status=asset.status,
        )
        self._db.add(orm_asset)
        self._db.commit()
        self._db.refresh(orm_asset)
        return self._to_domain(orm_asset)

    def get_by_id(self, asset_id: str) -> Optional[Asset]:
        """Retrieve asset by ID."""
        orm_asset = self._db.query(AssetORM).filter(
            AssetORM.asset_id == asset_id
        ).first()
        return self._to_domain(orm_asset) if orm_asset else None

    def get_by_ticker(self, ticker: str) -> Optional[Asset]:
        """Retrieve asset by ticker (case-insensitive)."""
        orm_asset = self._db.query(AssetORM).filter(
            func.upper(AssetORM.ticker) == ticker.upper()
        ).first()
        return self._to_domain(orm_asset) if orm_asset else None

    def list_all(self) -> list[Asset]:
        """List all assets ordered by ticker."""
        orm_assets = self._db.query(AssetORM).order_by(AssetORM.ticker).all()
        return [self._to_domain(a) for a in orm_assets]

    @staticmethod
    def _to_domain(orm: AssetORM) -> Asset:
        """Convert ORM model to domain model."""
        return Asset(
            asset_id=orm.asset_id,
            ticker=orm.ticker,
            currency=orm.currency,
            display_name=orm.display_name,
            status=orm.status,
        )
