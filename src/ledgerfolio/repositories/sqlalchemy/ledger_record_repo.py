"""SQLAlchemy implementation of LedgerRecordRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session, Query

from ledgerfolio.core.timezone import parse_calendar_date, parse_timestamp
from ledgerfolio.domain.models import LedgerRecord
from ledgerfolio.repositories.sqlalchemy.orm_models import LedgerRecordORM


def _decimal_or_none(value) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


class SqlAlchemyLedgerRecordRepository:
    """SQLAlchemy-backed append-only ledger."""

    def __init__(self, db: Session):
        self._db = db

    def append(self, record: LedgerRecord) -> LedgerRecord:
        """Persist a new record."""
        orm_record = self._to_orm(record)
        self._db.add(orm_record)
        self._db.commit()
        self._db.refresh(orm_record)
        return self._to_domain(orm_record)

    def get_by_id(self, record_id: str) -> Optional[LedgerRecord]:
        """Retrieve record by ID."""
        orm_record = self._db.query(LedgerRecordORM).filter(
            LedgerRecordORM.record_id == record_id
        ).first()
        return self._to_domain(orm_record) if orm_record else None

    def list_by_portfolio(self, portfolio_id: str) -> list[LedgerRecord]:
        """List a portfolio's records in (date, created, id) order."""
        query = self._ordered(
            self._db.query(LedgerRecordORM).filter(
                LedgerRecordORM.portfolio_id == portfolio_id
            )
        )
        return [self._to_domain(r) for r in query.all()]

    def list_page(
        self,
        offset: int,
        limit: int,
        portfolio_id: Optional[str] = None,
    ) -> list[LedgerRecord]:
        """Return one page of records in (date, created, id) order."""
        query = self._db.query(LedgerRecordORM)
        if portfolio_id is not None:
            query = query.filter(LedgerRecordORM.portfolio_id == portfolio_id)
        query = self._ordered(query).offset(offset).limit(limit)
        return [self._to_domain(r) for r in query.all()]

    def count(self, portfolio_id: Optional[str] = None) -> int:
        """Count records, optionally for one portfolio."""
        query = self._db.query(LedgerRecordORM)
        if portfolio_id is not None:
            query = query.filter(LedgerRecordORM.portfolio_id == portfolio_id)
        return query.count()

    @staticmethod
    def _ordered(query: Query) -> Query:
        return query.order_by(
            LedgerRecordORM.occurred_on,
            LedgerRecordORM.recorded_at,
            LedgerRecordORM.record_id,
        )

    @staticmethod
    def _to_orm(record: LedgerRecord) -> LedgerRecordORM:
        """Convert domain model to ORM model."""
        return LedgerRecordORM(
            record_id=record.record_id,
            portfolio_id=record.portfolio_id,
            asset_id=record.asset_id,
            kind=record.kind.value,
            occurred_on=parse_calendar_date(record.occurred_on),
            recorded_at=parse_timestamp(record.recorded_at),
            quantity=record.quantity,
            unit_price=record.unit_price,
            fee=record.fee,
            settlement_amount=record.settlement_amount,
            settlement_currency=record.settlement_currency,
            cash_amount=record.cash_amount,
            cash_currency=record.cash_currency,
            split_ratio=record.split_ratio,
            notes=record.notes,
        )

    @staticmethod
    def _to_domain(orm: LedgerRecordORM) -> LedgerRecord:
        """Convert ORM model to domain model."""
        return LedgerRecord(
            record_id=orm.record_id,
            portfolio_id=orm.portfolio_id,
            asset_id=orm.asset_id,
            kind=orm.kind,
            occurred_on=orm.occurred_on,
            recorded_at=orm.recorded_at,
            quantity=_decimal_or_none(orm.quantity),
            unit_price=_decimal_or_none(orm.unit_price),
            fee=_decimal_or_none(orm.fee),
            settlement_amount=_decimal_or_none(orm.settlement_amount),
            settlement_currency=orm.settlement_currency,
            cash_amount=_decimal_or_none(orm.cash_amount),
            cash_currency=orm.cash_currency,
            split_ratio=_decimal_or_none(orm.split_ratio),
            notes=orm.notes,
        )
