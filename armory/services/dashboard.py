"""
Asset dashboard — balances per asset type for a base, now or for a date range.

Without a complete date range the persisted snapshots are returned as they
are. With one, balances are reconstructed from the snapshots plus every
ledger row from the range start onwards (see armory.balance).
"""

import logging
from datetime import date, datetime

from django.db import DatabaseError
from django.utils.dateparse import parse_date

from armory.balance import BalanceRow, current_balances, day_bounds, reconstruct_balances
from armory.exceptions import ArmoryError
from armory.models.enums import LedgerCategory
from armory.services.queries import AssetQueries

logger = logging.getLogger('armory')


def parse_day(value, field: str) -> date | None:
    """
    Parse an ISO date parameter.

    Returns:
        date, or None when value is None/blank

    Raises:
        ArmoryError('INVALID_DATE'): If value is present but not a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if value is None or isinstance(value, date):
        return value

    value = str(value).strip()
    if not value:
        return None

    try:
        parsed = parse_date(value)
    except ValueError:
        parsed = None

    if parsed is None:
        raise ArmoryError('INVALID_DATE', field=field, value=value)
    return parsed


class AssetDashboard:
    """Dashboard computation."""

    @classmethod
    def dashboard(cls, base, start_date=None, end_date=None,
                  asset_type: str | None = None) -> list[BalanceRow]:
        """
        Balances per asset type for a base.

        Args:
            base: Base to report on
            start_date: Range start (date or 'YYYY-MM-DD'), inclusive
            end_date: Range end (date or 'YYYY-MM-DD'), inclusive through 23:59:59.999
            asset_type: Exact asset type filter (None = all)

        Returns:
            List of BalanceRow, one per asset type held by the base

        Raises:
            ArmoryError('BASE_REQUIRED'): If base is None
            ArmoryError('INVALID_DATE'): If a date cannot be parsed
            ArmoryError('INVALID_RANGE'): If start_date > end_date
            ArmoryError('RETRIEVAL_FAILED'): If the database query fails
        """
        if base is None:
            raise ArmoryError('BASE_REQUIRED')

        start_day = parse_day(start_date, 'startDate')
        end_day = parse_day(end_date, 'endDate')
        asset_type = asset_type or None

        if start_day and end_day and start_day > end_day:
            raise ArmoryError('INVALID_RANGE', start=start_day, end=end_day)

        try:
            snapshots = AssetQueries.find_snapshots(base, asset_type)

            if start_day is None or end_day is None:
                rows = current_balances(snapshots)
            else:
                start, end = day_bounds(start_day, end_day)
                movements = []
                for category in LedgerCategory.values:
                    movements.extend(
                        AssetQueries.find_transactions(category, base, start, asset_type)
                    )
                rows = reconstruct_balances(snapshots, movements, end)
        except DatabaseError as exc:
            logger.exception(
                "armory.dashboard.retrieval_failed",
                extra={"base": base.code, "asset_type": asset_type},
            )
            raise ArmoryError('RETRIEVAL_FAILED', error=str(exc)) from exc

        logger.debug(
            "armory.dashboard.built",
            extra={
                "base": base.code,
                "start": str(start_day),
                "end": str(end_day),
                "asset_type": asset_type,
                "rows": len(rows),
            },
        )
        return rows
