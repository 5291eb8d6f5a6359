"""Point-in-time view builder.

Orchestrates ordering, position replay and cash replay over one record
set. Pure: the same records, registry, as-of date and options always give
the same view.
"""

import logging
from typing import Iterable, Mapping, Optional

from ledgerfolio.core.exceptions import ConfigurationError
from ledgerfolio.core.timezone import DateLike, parse_calendar_date
from ledgerfolio.domain.models import Asset, IssueCode, LedgerRecord
from ledgerfolio.domain.views import ReplayIssue, ReplayView
from ledgerfolio.engine.cash_ledger import replay_cash
from ledgerfolio.engine.options import ReplayOptions
from ledgerfolio.engine.ordering import (
    filter_as_of,
    has_unparseable_date,
    sort_for_holdings,
    stable_sort,
)
from ledgerfolio.engine.positions import replay_positions

logger = logging.getLogger(__name__)


def affects_positions(record: LedgerRecord, asset: Asset, options: ReplayOptions) -> bool:
    """Return True if the record belongs in the position replay."""
    if asset.is_cash_placeholder:
        return False
    if record.kind.is_income and not options.income_in_holdings:
        return False
    return True


def build_view(
    records: Iterable[LedgerRecord],
    assets: Optional[Mapping[str, Asset]],
    as_of: DateLike = None,
    options: Optional[ReplayOptions] = None,
) -> ReplayView:
    """
    Rebuild holdings and cash balances from ledger records.

    Records referencing an asset missing from the registry are left out of
    both replays and reported as issues. A missing registry is a caller
    error and raises ConfigurationError.
    """
    if assets is None:
        raise ConfigurationError("An asset registry is required to replay the ledger")
    options = options or ReplayOptions()

    applied = filter_as_of(records, as_of)
    issues: list[ReplayIssue] = []
    known: list[LedgerRecord] = []

    for record in applied:
        if record.asset_id not in assets:
            issues.append(ReplayIssue(
                record_id=record.record_id,
                code=IssueCode.UNKNOWN_ASSET,
                message=f"asset {record.asset_id} is not in the registry; record excluded",
                asset_id=record.asset_id,
            ))
            continue
        if has_unparseable_date(record):
            issues.append(ReplayIssue(
                record_id=record.record_id,
                code=IssueCode.UNPARSEABLE_DATE,
                message=f"date {record.occurred_on!r} is unreadable; record kept",
                asset_id=record.asset_id,
            ))
        known.append(record)

    position_records = [
        r for r in known if affects_positions(r, assets[r.asset_id], options)
    ]
    states, position_issues = replay_positions(sort_for_holdings(position_records), assets)
    issues.extend(position_issues)

    ledger = replay_cash(stable_sort(known), assets, options)

    if issues:
        logger.info(
            "Replayed %d records with %d data-quality issues",
            len(known),
            len(issues),
        )

    return ReplayView(
        holdings=[state.to_holding() for state in states],
        cash_balances=ledger.to_cash_balances(),
        issues=issues,
        as_of=parse_calendar_date(as_of),
        record_count=len(known),
    )
