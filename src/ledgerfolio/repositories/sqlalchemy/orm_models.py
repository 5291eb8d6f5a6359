"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from ledgerfolio.repositories.sqlalchemy.database import Base


class PortfolioORM(Base):
    """SQLAlchemy model for Portfolio."""

    __tablename__ = "portfolios"

    portfolio_id = Column(String(36), primary_key=True)
    name = Column(String(255), unique=True, nullable=False)
    base_currency = Column(String(3), nullable=False, default="GBP")
    created_at = Column(DateTime, nullable=True, default=datetime.utcnow)

    records = relationship("LedgerRecordORM", back_populates="portfolio")


class AssetORM(Base):
    """SQLAlchemy model for Asset (reference data)."""

    __tablename__ = "assets"

    asset_id = Column(String(36), primary_key=True)
    ticker = Column(String(32), unique=True, nullable=False)
    currency = Column(String(3), nullable=False)
    display_name = Column(String(255), nullable=True)
    status = Column(String(32), nullable=True)

    records = relationship("LedgerRecordORM", back_populates="asset")


class LedgerRecordORM(Base):
    """SQLAlchemy model for LedgerRecord (append-only)."""

    __tablename__ = "ledger_records"

    record_id = Column(String(36), primary_key=True)
    portfolio_id = Column(String(36), ForeignKey("portfolios.portfolio_id"), nullable=True)
    asset_id = Column(String(36), ForeignKey("assets.asset_id"), nullable=False)
    # Raw code, so rows with codes outside the taxonomy still load
    kind = Column(String(16), nullable=False)
    occurred_on = Column(Date, nullable=True, index=True)
    recorded_at = Column(DateTime, nullable=True)
    quantity = Column(Numeric(precision=24, scale=8), nullable=True)
    unit_price = Column(Numeric(precision=24, scale=8), nullable=True)
    fee = Column(Numeric(precision=18, scale=4), nullable=True)
    settlement_amount = Column(Numeric(precision=24, scale=6), nullable=True)
    settlement_currency = Column(String(3), nullable=True)
    cash_amount = Column(Numeric(precision=24, scale=6), nullable=True)
    cash_currency = Column(String(3), nullable=True)
    split_ratio = Column(Numeric(precision=18, scale=8), nullable=True)
    notes = Column(Text, nullable=True)

    portfolio = relationship("PortfolioORM", back_populates="records")
    asset = relationship("AssetORM", back_populates="records")
