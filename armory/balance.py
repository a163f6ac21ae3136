"""
Balance reconstruction — pure functions over snapshots and ledger rows.

The snapshot only knows "now". Historical balances are recovered by
walking the ledger backwards from the snapshot:

    closing_at_end   = current_closing - net(rows after end)
    opening_at_start = closing_at_end - net(rows up to end)

Examples:
    Rifle closing is 100 today. 10 were purchased after the range ended,
    so the closing balance at the end of the range was 90.

No database access here: callers hand in snapshots and Movement rows.
"""

from dataclasses import dataclass
from datetime import date, datetime, time

from django.utils import timezone

from armory.models.enums import AssignmentKind, LedgerCategory

# Last representable instant of a day at millisecond precision
END_OF_DAY = time(23, 59, 59, 999000)

# Sign of each category when applied to a closing balance
_SIGN = {
    LedgerCategory.PURCHASE.value: 1,
    LedgerCategory.TRANSFER_IN.value: 1,
    LedgerCategory.TRANSFER_OUT.value: -1,
    LedgerCategory.ASSIGNMENT.value: -1,
}


@dataclass(frozen=True)
class Movement:
    """A transaction normalized to the point of view of one base."""

    category: str
    asset_type: str
    quantity: int | None
    timestamp: datetime
    kind: str = ''


@dataclass(frozen=True)
class BalanceRow:
    """Dashboard row for one asset type."""

    asset_type: str
    opening_balance: int
    purchases: int
    transfer_in: int
    transfer_out: int
    assigned: int
    expended: int
    closing_balance: int
    net_movement: int

    def as_dict(self) -> dict:
        return {
            'assetType': self.asset_type,
            'openingBalance': self.opening_balance,
            'purchases': self.purchases,
            'transferIn': self.transfer_in,
            'transferOut': self.transfer_out,
            'assigned': self.assigned,
            'expended': self.expended,
            'closingBalance': self.closing_balance,
            'netMovement': self.net_movement,
        }


def day_bounds(start_date: date, end_date: date) -> tuple[datetime, datetime]:
    """
    Expand a date range to aware datetimes in the current timezone.

    Returns:
        (start of start_date, 23:59:59.999 of end_date)
    """
    tz = timezone.get_current_timezone()
    start = timezone.make_aware(datetime.combine(start_date, time.min), tz)
    end = timezone.make_aware(datetime.combine(end_date, END_OF_DAY), tz)
    return start, end


def current_balances(snapshots) -> list[BalanceRow]:
    """
    Rows straight from the snapshots (no date range).

    net_movement here counts purchases and transfers only, unlike
    reconstruct_balances() which also subtracts assigned/expended.
    """
    return [
        BalanceRow(
            asset_type=s.asset_type,
            opening_balance=s.opening_balance,
            purchases=s.purchases,
            transfer_in=s.transfer_in,
            transfer_out=s.transfer_out,
            assigned=s.assigned,
            expended=s.expended,
            closing_balance=s.closing_balance,
            net_movement=s.purchases + s.transfer_in - s.transfer_out,
        )
        for s in snapshots
    ]


class _Tally:
    """Per asset type accumulator."""

    __slots__ = ('current_closing', 'purchases', 'transfer_in', 'transfer_out',
                 'assigned', 'expended', 'future_net_change')

    def __init__(self, current_closing: int):
        self.current_closing = current_closing
        self.purchases = 0
        self.transfer_in = 0
        self.transfer_out = 0
        self.assigned = 0
        self.expended = 0
        self.future_net_change = 0

    def add_within(self, entry: Movement, quantity: int) -> None:
        if entry.category == LedgerCategory.PURCHASE:
            self.purchases += quantity
        elif entry.category == LedgerCategory.TRANSFER_IN:
            self.transfer_in += quantity
        elif entry.category == LedgerCategory.TRANSFER_OUT:
            self.transfer_out += quantity
        elif entry.kind == AssignmentKind.EXPENDED:
            self.expended += quantity
        else:
            self.assigned += quantity

    def row(self, asset_type: str) -> BalanceRow:
        closing = self.current_closing - self.future_net_change
        net = (self.purchases + self.transfer_in - self.transfer_out
               - self.assigned - self.expended)
        return BalanceRow(
            asset_type=asset_type,
            opening_balance=closing - net,
            purchases=self.purchases,
            transfer_in=self.transfer_in,
            transfer_out=self.transfer_out,
            assigned=self.assigned,
            expended=self.expended,
            closing_balance=closing,
            net_movement=net,
        )


def reconstruct_balances(snapshots, entries, end: datetime) -> list[BalanceRow]:
    """
    Balances as of a past range, recovered from current snapshots.

    Args:
        snapshots: Current snapshots (need .asset_type, .closing_balance)
        entries: Movement rows at or after the range start
        end: Range end boundary, inclusive

    Returns:
        One BalanceRow per snapshot asset type, in snapshot order.

    Entries for asset types without a snapshot are skipped. Range totals
    include every entry up to `end`, so they are bounded below only by
    what the caller fetched.
    """
    tallies: dict[str, _Tally] = {}
    for snapshot in snapshots:
        tallies.setdefault(snapshot.asset_type, _Tally(snapshot.closing_balance))

    for entry in entries:
        tally = tallies.get(entry.asset_type)
        if tally is None:
            continue

        quantity = entry.quantity or 0
        if entry.timestamp > end:
            tally.future_net_change += _SIGN[str(entry.category)] * quantity
        else:
            tally.add_within(entry, quantity)

    return [tally.row(asset_type) for asset_type, tally in tallies.items()]
