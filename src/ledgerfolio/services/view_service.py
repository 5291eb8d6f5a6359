"""Portfolio view service: replays stored records into point-in-time views."""

import logging
from typing import Optional

from ledgerfolio.config.settings import Settings, get_settings
from ledgerfolio.core.exceptions import NotFoundError
from ledgerfolio.core.timezone import DateLike
from ledgerfolio.domain.models import LedgerRecord
from ledgerfolio.domain.views import PortfolioView, ReplayView
from ledgerfolio.engine import ReplayOptions, build_view
from ledgerfolio.repositories.protocols import (
    AssetRepository,
    LedgerRecordRepository,
    PortfolioRepository,
)

logger = logging.getLogger(__name__)


def fetch_all_records(
    record_repo: LedgerRecordRepository,
    page_size: int,
    portfolio_id: Optional[str] = None,
) -> list[LedgerRecord]:
    """Read every record page by page until a short page comes back."""
    records: list[LedgerRecord] = []
    offset = 0
    while True:
        page = record_repo.list_page(offset, page_size, portfolio_id=portfolio_id)
        records.extend(page)
        if len(page) < page_size:
            break
        offset += page_size
    return records


class PortfolioViewService:
    """
    Service for building holdings and cash views.

    Nothing is cached: every call reloads the ledger and replays it.
    """

    def __init__(
        self,
        portfolio_repo: PortfolioRepository,
        asset_repo: AssetRepository,
        record_repo: LedgerRecordRepository,
        settings: Optional[Settings] = None,
    ):
        self._portfolio_repo = portfolio_repo
        self._asset_repo = asset_repo
        self._record_repo = record_repo
        self._settings = settings or get_settings()

    def get_portfolio_view(self, portfolio_id: str, as_of: DateLike = None) -> PortfolioView:
        """Replay one portfolio's records as of a date."""
        portfolio = self._portfolio_repo.get_by_id(portfolio_id)
        if not portfolio:
            raise NotFoundError("Portfolio", portfolio_id)

        records = fetch_all_records(
            self._record_repo,
            self._settings.record_page_size,
            portfolio_id=portfolio_id,
        )
        options = ReplayOptions.from_settings(
            self._settings,
            default_currency=portfolio.base_currency,
        )
        view = build_view(records, self._registry(), as_of=as_of, options=options)
        return PortfolioView(portfolio=portfolio, view=view)

    def list_portfolio_views(self, as_of: DateLike = None) -> list[PortfolioView]:
        """Replay every portfolio separately, each in its own base currency."""
        portfolios = self._portfolio_repo.list_all()
        registry = self._registry()
        records = fetch_all_records(self._record_repo, self._settings.record_page_size)

        by_portfolio: dict[str, list[LedgerRecord]] = {p.portfolio_id: [] for p in portfolios}
        for record in records:
            if record.portfolio_id in by_portfolio:
                by_portfolio[record.portfolio_id].append(record)

        views = []
        for portfolio in portfolios:
            options = ReplayOptions.from_settings(
                self._settings,
                default_currency=portfolio.base_currency,
            )
            view = build_view(
                by_portfolio[portfolio.portfolio_id],
                registry,
                as_of=as_of,
                options=options,
            )
            views.append(PortfolioView(portfolio=portfolio, view=view))
        logger.debug("Built %d portfolio views", len(views))
        return views

    def get_global_view(self, as_of: DateLike = None) -> ReplayView:
        """Replay all records pooled across portfolios."""
        records = fetch_all_records(self._record_repo, self._settings.record_page_size)
        options = ReplayOptions.from_settings(self._settings)
        return build_view(records, self._registry(), as_of=as_of, options=options)

    def _registry(self):
        return {asset.asset_id: asset for asset in self._asset_repo.list_all()}
