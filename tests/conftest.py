"""
Pytest configuration and fixtures for ledger replay tests.

This module provides:
- In-memory SQLite database fixtures
- Builders for in-memory assets and ledger records (pure engine tests)
- Factory helpers for persisted portfolios, assets and records
- Service and repository fixtures
- FastAPI test client
"""

import itertools
import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Callable, Optional, Union

import pytest
from sqlalchemy import StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from ledgerfolio.main import app
from ledgerfolio.repositories.sqlalchemy.database import (
    Base,
    create_db_engine,
    get_db,
    reset_database,
)
# Import ORM models to register them with Base before creating tables
from ledgerfolio.repositories.sqlalchemy import orm_models  # noqa: F401
from ledgerfolio.repositories.sqlalchemy import (
    SqlAlchemyPortfolioRepository,
    SqlAlchemyAssetRepository,
    SqlAlchemyLedgerRecordRepository,
)
from ledgerfolio.services import (
    LedgerService,
    LedgerRecordCreate,
    PortfolioViewService,
    BalanceAdjustmentService,
)
from ledgerfolio.domain.models import Asset, LedgerRecord, Portfolio, RecordKind
from ledgerfolio.core.timezone import EASTERN_TZ
from ledgerfolio.config.settings import Settings, reset_settings, set_settings


# =============================================================================
# TIMEZONE HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


# =============================================================================
# IN-MEMORY BUILDERS (no database)
# =============================================================================

_record_ids = itertools.count(1)


def make_asset(
    ticker: str,
    currency: str = "USD",
    asset_id: Optional[str] = None,
    display_name: Optional[str] = None,
) -> Asset:
    """Build an Asset; the id defaults to the ticker for readable tests."""
    return Asset(
        asset_id=asset_id or ticker,
        ticker=ticker,
        currency=currency,
        display_name=display_name,
    )


def make_record(
    kind: Union[RecordKind, str],
    asset: Union[Asset, str],
    occurred_on: Union[date, str, None] = date(2024, 1, 2),
    record_id: Optional[str] = None,
    recorded_at: Union[datetime, str, None] = None,
    portfolio_id: Optional[str] = "P1",
    **fields,
) -> LedgerRecord:
    """
    Build a LedgerRecord.

    Ids are sequential so insertion order is also the final tie-breaker.
    Numeric keyword arguments may be given as strings or ints.
    """
    if record_id is None:
        record_id = f"r{next(_record_ids):06d}"
    return LedgerRecord(
        record_id=record_id,
        portfolio_id=portfolio_id,
        asset_id=asset.asset_id if isinstance(asset, Asset) else asset,
        kind=kind,
        occurred_on=occurred_on,
        recorded_at=recorded_at,
        **fields,
    )


def registry(*assets: Asset) -> dict[str, Asset]:
    """Asset registry keyed by asset_id."""
    return {a.asset_id: a for a in assets}


@pytest.fixture
def usd_stock() -> Asset:
    """A US-listed stock priced in USD."""
    return make_asset("AAPL", "USD", display_name="Apple Inc")


@pytest.fixture
def gbp_stock() -> Asset:
    """A London-listed stock priced in GBP."""
    return make_asset("VOD", "GBP")


@pytest.fixture
def cash_gbp() -> Asset:
    """Cash placeholder for sterling."""
    return make_asset("CASH.GBP", "GBP")


@pytest.fixture
def cash_usd() -> Asset:
    """Cash placeholder for US dollars."""
    return make_asset("CASH.USD", "USD")


@pytest.fixture
def assets(usd_stock, gbp_stock, cash_gbp, cash_usd) -> dict[str, Asset]:
    """Registry with two stocks and two cash placeholders."""
    return registry(usd_stock, gbp_stock, cash_gbp, cash_usd)


# =============================================================================
# SETTINGS FIXTURES
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings with library defaults and an in-memory database URL."""
    settings = Settings(database_url="sqlite:///:memory:")
    set_settings(settings)
    yield settings
    reset_settings()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine(test_settings):
    """Create test database engine with shared in-memory SQLite."""
    engine = create_db_engine("sqlite:///:memory:", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def portfolio_repo(test_session) -> SqlAlchemyPortfolioRepository:
    """Provide test PortfolioRepository."""
    return SqlAlchemyPortfolioRepository(test_session)


@pytest.fixture
def asset_repo(test_session) -> SqlAlchemyAssetRepository:
    """Provide test AssetRepository."""
    return SqlAlchemyAssetRepository(test_session)


@pytest.fixture
def record_repo(test_session) -> SqlAlchemyLedgerRecordRepository:
    """Provide test LedgerRecordRepository."""
    return SqlAlchemyLedgerRecordRepository(test_session)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def ledger_service(portfolio_repo, asset_repo, record_repo) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(
        portfolio_repo=portfolio_repo,
        asset_repo=asset_repo,
        record_repo=record_repo,
    )


@pytest.fixture
def view_service(portfolio_repo, asset_repo, record_repo, test_settings) -> PortfolioViewService:
    """Provide test PortfolioViewService."""
    return PortfolioViewService(
        portfolio_repo=portfolio_repo,
        asset_repo=asset_repo,
        record_repo=record_repo,
        settings=test_settings,
    )


@pytest.fixture
def balance_service(ledger_service, test_settings) -> BalanceAdjustmentService:
    """Provide test BalanceAdjustmentService."""
    return BalanceAdjustmentService(
        ledger_service=ledger_service,
        settings=test_settings,
    )


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def portfolio_factory(ledger_service) -> Callable[..., Portfolio]:
    """Factory for creating test portfolios."""

    def _create_portfolio(
        name: Optional[str] = None,
        base_currency: str = "GBP",
    ) -> Portfolio:
        if name is None:
            name = f"Test Portfolio {uuid.uuid4().hex[:8]}"
        return ledger_service.create_portfolio(name=name, base_currency=base_currency)

    return _create_portfolio


@pytest.fixture
def asset_factory(ledger_service) -> Callable[..., Asset]:
    """Factory for registering test assets."""

    def _register_asset(ticker: str, currency: str = "USD", **kwargs) -> Asset:
        return ledger_service.register_asset(ticker=ticker, currency=currency, **kwargs)

    return _register_asset


@pytest.fixture
def record_factory(ledger_service) -> Callable[..., LedgerRecord]:
    """Factory for appending test records through the service."""

    def _append_record(
        portfolio: Portfolio,
        kind: RecordKind,
        occurred_on: date,
        asset: Optional[Asset] = None,
        **fields,
    ) -> LedgerRecord:
        return ledger_service.append_record(LedgerRecordCreate(
            portfolio_id=portfolio.portfolio_id,
            kind=kind,
            occurred_on=occurred_on,
            asset_id=asset.asset_id if asset else None,
            **fields,
        ))

    return _append_record


# =============================================================================
# PRESET DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_portfolio(portfolio_factory) -> Portfolio:
    """Create a sterling portfolio."""
    return portfolio_factory(name="ISA", base_currency="GBP")


@pytest.fixture
def sample_portfolio_with_trades(
    sample_portfolio,
    asset_factory,
    record_factory,
) -> tuple[Portfolio, Asset]:
    """
    Sterling portfolio holding a USD stock bought with sterling.

    - 2024-01-02 DEP 5000 GBP
    - 2024-01-03 BUY 10 AAPL, settlement 1000 USD, cash 800 GBP
    - 2024-02-01 SELL 4 AAPL, settlement 480 USD, cash 400 GBP
    """
    aapl = asset_factory("AAPL", "USD", display_name="Apple Inc")
    record_factory(
        sample_portfolio,
        RecordKind.DEPOSIT,
        date(2024, 1, 2),
        cash_amount=Decimal("5000"),
        cash_currency="GBP",
    )
    record_factory(
        sample_portfolio,
        RecordKind.BUY,
        date(2024, 1, 3),
        asset=aapl,
        quantity=Decimal("10"),
        unit_price=Decimal("100"),
        settlement_amount=Decimal("1000"),
        settlement_currency="USD",
        cash_amount=Decimal("800"),
        cash_currency="GBP",
    )
    record_factory(
        sample_portfolio,
        RecordKind.SELL,
        date(2024, 2, 1),
        asset=aapl,
        quantity=Decimal("4"),
        unit_price=Decimal("120"),
        settlement_amount=Decimal("480"),
        settlement_currency="USD",
        cash_amount=Decimal("400"),
        cash_currency="GBP",
    )
    return sample_portfolio, aapl


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine) -> TestClient:
    """Provide FastAPI test client with test database."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    reset_database()
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(actual) - Decimal(expected))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


def holding_for(view, ticker: str):
    """Return the holding with the given ticker, or None."""
    return next((h for h in view.holdings if h.ticker == ticker), None)


def cash_map(view_or_balances) -> dict[str, Decimal]:
    """Cash balances as a {currency: balance} dict."""
    balances = getattr(view_or_balances, "cash_balances", view_or_balances)
    return {c.currency: c.balance for c in balances}
