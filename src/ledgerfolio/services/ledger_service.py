"""Ledger service for portfolios, assets and append-only records."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerfolio.core.timezone import now_eastern
from ledgerfolio.core.exceptions import ValidationError, NotFoundError
from ledgerfolio.domain.models import (
    Asset,
    CASH_TICKER_PREFIX,
    LedgerRecord,
    Portfolio,
    RecordKind,
    cash_ticker_for,
    is_cash_ticker,
)
from ledgerfolio.repositories.protocols import (
    AssetRepository,
    LedgerRecordRepository,
    PortfolioRepository,
)
from ledgerfolio.services.cash_assets import resolve_cash_ticker

logger = logging.getLogger(__name__)

_NEEDS_QUANTITY = (
    RecordKind.BUY,
    RecordKind.SELL,
    RecordKind.TRANSFER_IN,
    RecordKind.TRANSFER_OUT,
)
_NEEDS_CASH = (RecordKind.DEPOSIT, RecordKind.WITHDRAWAL)
_CASH_EVENTS = (
    RecordKind.DEPOSIT,
    RecordKind.WITHDRAWAL,
    RecordKind.FEE,
    RecordKind.OTHER,
    RecordKind.BALANCE_ADJUSTMENT,
)


@dataclass
class LedgerRecordCreate:
    """Input data for appending a ledger record."""

    portfolio_id: str
    kind: RecordKind
    occurred_on: date
    asset_id: Optional[str] = None
    ticker: Optional[str] = None
    quantity: Optional[Decimal] = None
    unit_price: Optional[Decimal] = None
    fee: Optional[Decimal] = None
    settlement_amount: Optional[Decimal] = None
    settlement_currency: Optional[str] = None
    cash_amount: Optional[Decimal] = None
    cash_currency: Optional[str] = None
    split_ratio: Optional[Decimal] = None
    notes: Optional[str] = None


class LedgerService:
    """
    Service for managing the ledger.

    Handles portfolio creation, the asset registry and record appends.
    Records are never edited or deleted; corrections are new records.
    """

    def __init__(
        self,
        portfolio_repo: PortfolioRepository,
        asset_repo: AssetRepository,
        record_repo: LedgerRecordRepository,
    ):
        self._portfolio_repo = portfolio_repo
        self._asset_repo = asset_repo
        self._record_repo = record_repo

    # -------------------------------------------------------------------------
    # Portfolios
    # -------------------------------------------------------------------------

    def create_portfolio(self, name: str, base_currency: str = "GBP") -> Portfolio:
        """
        Create a new portfolio.

        Args:
            name: Unique portfolio name
            base_currency: Currency the portfolio's cash is held in

        Returns:
            Created Portfolio instance
        """
        if self._portfolio_repo.get_by_name(name):
            raise ValidationError(f"Portfolio with name '{name}' already exists")

        portfolio = Portfolio(
            portfolio_id=str(uuid.uuid4()),
            name=name,
            base_currency=base_currency,
            created_at=now_eastern(),
        )
        return self._portfolio_repo.create(portfolio)

    def get_portfolio(self, portfolio_id: str) -> Portfolio:
        """Get portfolio by ID."""
        portfolio = self._portfolio_repo.get_by_id(portfolio_id)
        if not portfolio:
            raise NotFoundError("Portfolio", portfolio_id)
        return portfolio

    def list_portfolios(self) -> list[Portfolio]:
        """List all portfolios."""
        return self._portfolio_repo.list_all()

    # -------------------------------------------------------------------------
    # Assets
    # -------------------------------------------------------------------------

    def register_asset(
        self,
        ticker: str,
        currency: str,
        display_name: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Asset:
        """Add an asset to the registry. Tickers are unique, case-insensitive."""
        ticker = (ticker or "").strip().upper()
        if not ticker:
            raise ValidationError("Ticker is required")
        if not currency or len(currency) != 3:
            raise ValidationError("Currency must be a 3-letter code")
        if self._asset_repo.get_by_ticker(ticker):
            raise ValidationError(f"Asset with ticker '{ticker}' already exists")

        asset = Asset(
            asset_id=str(uuid.uuid4()),
            ticker=ticker,
            currency=currency.upper(),
            display_name=display_name,
            status=status,
        )
        return self._asset_repo.create(asset)

    def get_asset(self, asset_id: str) -> Asset:
        """Get asset by ID."""
        asset = self._asset_repo.get_by_id(asset_id)
        if not asset:
            raise NotFoundError("Asset", asset_id)
        return asset

    def list_assets(self) -> list[Asset]:
        """List all registered assets."""
        return self._asset_repo.list_all()

    def asset_registry(self) -> dict[str, Asset]:
        """Registry keyed by asset_id, as consumed by the replay."""
        return {asset.asset_id: asset for asset in self._asset_repo.list_all()}

    def ensure_cash_asset(self, currency: str) -> Asset:
        """Fetch the CASH.<CCY> placeholder asset, creating it when missing."""
        ticker = cash_ticker_for(currency)
        existing = self._asset_repo.get_by_ticker(ticker)
        if existing:
            return existing

        logger.info("Creating cash placeholder asset %s", ticker)
        return self.register_asset(
            ticker=ticker,
            currency=currency,
            display_name=f"Cash ({currency.upper()})",
            status="active",
        )

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def append_record(self, data: LedgerRecordCreate) -> LedgerRecord:
        """
        Append a record to the ledger.

        Validates input based on record kind; the stored record gets a fresh
        id and creation timestamp.
        """
        portfolio = self.get_portfolio(data.portfolio_id)
        asset = self._resolve_asset(data, portfolio)
        self._validate_record_create(data, asset)

        record = LedgerRecord(
            record_id=str(uuid.uuid4()),
            portfolio_id=data.portfolio_id,
            asset_id=asset.asset_id,
            kind=data.kind,
            occurred_on=data.occurred_on,
            recorded_at=now_eastern(),
            quantity=data.quantity,
            unit_price=data.unit_price,
            fee=data.fee,
            settlement_amount=data.settlement_amount,
            settlement_currency=data.settlement_currency.upper() if data.settlement_currency else None,
            cash_amount=data.cash_amount,
            cash_currency=data.cash_currency.upper() if data.cash_currency else None,
            split_ratio=data.split_ratio,
            notes=data.notes,
        )
        created = self._record_repo.append(record)
        logger.debug("Appended %s record %s", created.kind.value, created.record_id)
        return created

    def get_record(self, record_id: str) -> LedgerRecord:
        """Get record by ID."""
        record = self._record_repo.get_by_id(record_id)
        if not record:
            raise NotFoundError("LedgerRecord", record_id)
        return record

    def list_records(self, portfolio_id: str) -> list[LedgerRecord]:
        """List a portfolio's records."""
        self.get_portfolio(portfolio_id)
        return self._record_repo.list_by_portfolio(portfolio_id)

    def _resolve_asset(self, data: LedgerRecordCreate, portfolio: Portfolio) -> Asset:
        """
        Find the record's asset by id, then by ticker.

        Cash events with no asset, or with a CASH.<CCY> ticker, are booked
        against the placeholder for their currency, created on demand.
        """
        if data.asset_id:
            return self.get_asset(data.asset_id)

        if data.ticker and not is_cash_ticker(data.ticker):
            asset = self._asset_repo.get_by_ticker(data.ticker)
            if not asset:
                raise NotFoundError("Asset", data.ticker)
            return asset

        if data.kind not in _CASH_EVENTS and not data.ticker:
            raise ValidationError(f"{data.kind.value} requires an asset")

        ticker = resolve_cash_ticker(data.ticker, data.cash_currency, portfolio.base_currency)
        return self.ensure_cash_asset(ticker[len(CASH_TICKER_PREFIX):])

    def _validate_record_create(self, data: LedgerRecordCreate, asset: Asset) -> None:
        """Validate record data based on kind."""
        if data.kind is RecordKind.UNKNOWN:
            raise ValidationError("Unknown record kind")
        if data.occurred_on is None:
            raise ValidationError("Record date is required")
        if data.fee is not None and data.fee < 0:
            raise ValidationError("Fee cannot be negative")

        if data.kind in _NEEDS_QUANTITY:
            if data.quantity is None or data.quantity <= 0:
                raise ValidationError(f"{data.kind.value} requires a positive quantity")

        if data.kind is RecordKind.SPLIT:
            if is_cash_ticker(asset.ticker):
                raise ValidationError("Cannot split a cash placeholder")
            if data.split_ratio is None or data.split_ratio <= 0:
                raise ValidationError("SPL requires a positive split ratio")

        if data.kind in _NEEDS_CASH:
            if data.cash_amount is None or data.cash_amount <= 0:
                raise ValidationError(f"{data.kind.value} requires a positive cash amount")

        if data.kind is RecordKind.BALANCE_ADJUSTMENT and data.cash_amount is None:
            raise ValidationError("BAL requires a cash amount")
