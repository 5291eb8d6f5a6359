"""Cash balance tool: reconcile a portfolio's cash against a known figure."""

import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from ledgerfolio.config.settings import Settings, get_settings
from ledgerfolio.core.exceptions import ValidationError
from ledgerfolio.core.timezone import DateLike, parse_calendar_date
from ledgerfolio.domain.models import AdjustmentMode, LedgerRecord, RecordKind
from ledgerfolio.domain.views import BalanceAdjustmentPreview, SameDayItem
from ledgerfolio.engine import (
    ReplayOptions,
    calculate_single_currency_balance,
    filter_before,
    records_on,
    single_currency_movement,
)
from ledgerfolio.services.ledger_service import LedgerRecordCreate, LedgerService

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


def _parse_mode(mode: Union[AdjustmentMode, str]) -> AdjustmentMode:
    try:
        return AdjustmentMode(str(getattr(mode, "value", mode)).lower())
    except ValueError:
        raise ValidationError(f"Mode must be 'pre' or 'post', got {mode!r}")


def _parse_target(target) -> Decimal:
    try:
        value = Decimal(str(target).replace(",", "").strip())
    except (InvalidOperation, ValueError):
        raise ValidationError("Target amount must be numeric")
    if not value.is_finite():
        raise ValidationError("Target amount must be numeric")
    return value


class BalanceAdjustmentService:
    """
    Preview and commit BAL records that bring cash to a target balance.

    The current balance counts records before the as-of day in "pre" mode
    and up to and including it in "post" mode.
    """

    def __init__(self, ledger_service: LedgerService, settings: Optional[Settings] = None):
        self._ledger = ledger_service
        self._settings = settings or get_settings()

    def preview(
        self,
        portfolio_id: str,
        as_of: DateLike,
        target,
        mode: Union[AdjustmentMode, str] = AdjustmentMode.PRE,
        currency: Optional[str] = None,
    ) -> BalanceAdjustmentPreview:
        """Compare the replayed balance with the target and summarise the day."""
        portfolio = self._ledger.get_portfolio(portfolio_id)
        day = parse_calendar_date(as_of)
        if day is None:
            raise ValidationError(f"Invalid as-of date: {as_of!r}")
        target_amount = _parse_target(target)
        adjustment_mode = _parse_mode(mode)
        ccy = (currency or portfolio.base_currency).upper()

        records = self._ledger.list_records(portfolio_id)
        registry = self._ledger.asset_registry()
        options = ReplayOptions.from_settings(self._settings, default_currency=ccy)

        counted = filter_before(records, day, inclusive=adjustment_mode is AdjustmentMode.POST)
        current = calculate_single_currency_balance(counted, registry, ccy, options).balance
        diff = (target_amount - current).quantize(CENT, rounding=ROUND_HALF_UP)

        return BalanceAdjustmentPreview(
            portfolio_id=portfolio.portfolio_id,
            portfolio_name=portfolio.name,
            as_of=day,
            currency=ccy,
            mode=adjustment_mode.value,
            current=current,
            target=target_amount,
            diff=diff,
            same_day=self._same_day_summary(records_on(records, day), registry, ccy, options),
        )

    def commit(
        self,
        portfolio_id: str,
        as_of: DateLike,
        target,
        mode: Union[AdjustmentMode, str] = AdjustmentMode.PRE,
        currency: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> tuple[BalanceAdjustmentPreview, Optional[LedgerRecord]]:
        """
        Append a BAL record for the difference, unless it is within tolerance.

        Returns the preview and the new record, or None when no adjustment
        was needed.
        """
        preview = self.preview(portfolio_id, as_of, target, mode=mode, currency=currency)
        if abs(preview.diff) < self._settings.balance_tolerance:
            logger.info(
                "No adjustment needed for %s: %s balance already %s",
                preview.portfolio_name,
                preview.currency,
                preview.current,
            )
            return preview, None

        cash_asset = self._ledger.ensure_cash_asset(preview.currency)
        record = self._ledger.append_record(LedgerRecordCreate(
            portfolio_id=portfolio_id,
            asset_id=cash_asset.asset_id,
            kind=RecordKind.BALANCE_ADJUSTMENT,
            occurred_on=preview.as_of,
            quantity=Decimal("1") if preview.diff > 0 else Decimal("-1"),
            cash_amount=abs(preview.diff),
            cash_currency=preview.currency,
            notes=notes or (
                f"BAL via tool; current={preview.current}; target={preview.target}; "
                f"diff={preview.diff}; ccy={preview.currency}; as_of={preview.as_of.isoformat()}"
            ),
        ))
        logger.info(
            "Committed %s %s balance adjustment for %s",
            preview.diff,
            preview.currency,
            preview.portfolio_name,
        )
        return preview, record

    def _same_day_summary(self, records, registry, currency, options) -> list[SameDayItem]:
        groups: dict[tuple[str, str], SameDayItem] = {}
        for record in records:
            asset = registry.get(record.asset_id)
            ticker = asset.ticker if asset else "-"
            key = (record.kind.value, ticker)
            if key not in groups:
                groups[key] = SameDayItem(kind=record.kind, ticker=ticker)
            item = groups[key]
            item.count += 1
            if asset is not None:
                amount = single_currency_movement(record, asset, currency, options)
                if amount is not None:
                    item.day_total += amount
        return [groups[key] for key in sorted(groups)]
