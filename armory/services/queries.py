"""
Asset queries — read-only operations.

All methods are classmethods and use no locking.
"""

from datetime import datetime

from django.db.models import Q

from armory.balance import Movement
from armory.models.base import Base
from armory.models.enums import LedgerCategory
from armory.models.ledger import Assignment, AuditLog, Purchase, Transfer
from armory.models.snapshot import InventorySnapshot

# (model, field scoping the row to a base) per ledger category
_CATEGORY_SOURCES = {
    LedgerCategory.PURCHASE.value: (Purchase, 'base'),
    LedgerCategory.TRANSFER_IN.value: (Transfer, 'to_base'),
    LedgerCategory.TRANSFER_OUT.value: (Transfer, 'from_base'),
    LedgerCategory.ASSIGNMENT.value: (Assignment, 'base'),
}


class AssetQueries:
    """Read-only asset query methods."""

    @classmethod
    def find_snapshots(cls, base: Base, asset_type: str | None = None) -> list[InventorySnapshot]:
        """Current snapshots of a base, optionally for one asset type."""
        return list(InventorySnapshot.objects.for_base(base, asset_type))

    @classmethod
    def find_transactions(cls, category: str, base: Base, since: datetime,
                          asset_type: str | None = None) -> list[Movement]:
        """
        Ledger rows of one category touching a base, at or after `since`.

        Args:
            category: LedgerCategory value
            base: Base the rows are scoped to (source or destination for transfers)
            since: Inclusive lower bound on timestamp
            asset_type: Exact asset type filter (None = all)

        Returns:
            Movement list, oldest first
        """
        model, scope_field = _CATEGORY_SOURCES[str(category)]
        qs = model.objects.filter(**{scope_field: base, 'timestamp__gte': since})
        if asset_type:
            qs = qs.filter(asset_type=asset_type)

        return [
            Movement(
                category=str(category),
                asset_type=row.asset_type,
                quantity=row.quantity,
                timestamp=row.timestamp,
                kind=getattr(row, 'kind', ''),
            )
            for row in qs.order_by('timestamp')
        ]

    @classmethod
    def get_snapshot(cls, base: Base, asset_type: str) -> InventorySnapshot | None:
        """Get the snapshot of one (base, asset type)."""
        return InventorySnapshot.objects.filter(base=base, asset_type=asset_type).first()

    @classmethod
    def get_base(cls, code: str) -> Base | None:
        if not code:
            return None
        return Base.objects.filter(code=code).first()

    # ══════════════════════════════════════════════════════════════
    # LISTINGS (scoped by access context)
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def list_purchases(cls, context):
        """Purchases, newest first. Non-admins only see their own base."""
        qs = Purchase.objects.select_related('base', 'user')
        if not context.is_admin:
            qs = qs.filter(base=context.base)
        return qs.order_by('-timestamp')

    @classmethod
    def list_transfers(cls, context):
        """Transfers, newest first. Non-admins see rows from or to their base."""
        qs = Transfer.objects.select_related('from_base', 'to_base', 'user')
        if not context.is_admin:
            qs = qs.filter(Q(from_base=context.base) | Q(to_base=context.base))
        return qs.order_by('-timestamp')

    @classmethod
    def list_assignments(cls, context):
        """Assignments and expenditures, newest first."""
        qs = Assignment.objects.select_related('base', 'user')
        if not context.is_admin:
            qs = qs.filter(base=context.base)
        return qs.order_by('-timestamp')

    @classmethod
    def list_audit_logs(cls):
        return AuditLog.objects.select_related('user').order_by('-timestamp')
