"""
InventorySnapshot model — Counter cache per (base, asset type).
"""

import logging

from django.db import models, transaction
from django.db.models import Sum
from django.db.models.functions import Coalesce
from django.utils.translation import gettext_lazy as _

from armory.models.enums import AssignmentKind

logger = logging.getLogger('armory')

COUNTER_FIELDS = (
    'opening_balance',
    'purchases',
    'transfer_in',
    'transfer_out',
    'assigned',
    'expended',
    'closing_balance',
)


class SnapshotManager(models.Manager):
    """Manager with helper methods for snapshot queries."""

    def for_base(self, base, asset_type: str | None = None):
        """Filter snapshots of a base, optionally for one asset type."""
        qs = self.filter(base=base)
        if asset_type:
            qs = qs.filter(asset_type=asset_type)
        return qs


class InventorySnapshot(models.Model):
    """
    Current inventory of one asset type at one base.

    Coordinates:
    - base: WHERE
    - asset_type: WHAT (free-form name, e.g. "Rifle")

    Counters are cumulative since the snapshot was created and are
    updated atomically by ledger rows (Purchase, Transfer, Assignment).
    Never edit them by hand; use recalculate() for audit/correction.

    closing_balance = opening_balance + purchases + transfer_in
                      - transfer_out - assigned - expended
    """

    base = models.ForeignKey(
        'armory.Base',
        on_delete=models.PROTECT,
        related_name='snapshots',
        verbose_name=_('Base'),
    )
    asset_type = models.CharField(
        max_length=100,
        verbose_name=_('Asset Type'),
    )

    opening_balance = models.PositiveIntegerField(default=0, verbose_name=_('Opening Balance'))
    purchases = models.PositiveIntegerField(default=0, verbose_name=_('Purchases'))
    transfer_in = models.PositiveIntegerField(default=0, verbose_name=_('Transfer In'))
    transfer_out = models.PositiveIntegerField(default=0, verbose_name=_('Transfer Out'))
    assigned = models.PositiveIntegerField(default=0, verbose_name=_('Assigned'))
    expended = models.PositiveIntegerField(default=0, verbose_name=_('Expended'))
    closing_balance = models.PositiveIntegerField(default=0, verbose_name=_('Closing Balance'))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = SnapshotManager()

    class Meta:
        verbose_name = _('Inventory Snapshot')
        verbose_name_plural = _('Inventory Snapshots')
        ordering = ['base', 'asset_type']
        constraints = [
            models.UniqueConstraint(
                fields=['base', 'asset_type'],
                name='unique_snapshot_base_asset_type',
            )
        ]

    @property
    def net_movement(self) -> int:
        return (
            self.purchases + self.transfer_in - self.transfer_out
            - self.assigned - self.expended
        )

    @property
    def is_consistent(self) -> bool:
        """Does closing_balance agree with the other counters?"""
        return self.closing_balance == self.opening_balance + self.net_movement

    def ledger_totals(self) -> dict[str, int]:
        """Fold the ledger for this (base, asset_type) into counter values."""
        from armory.models.ledger import Assignment, Purchase, Transfer

        def total(qs):
            return qs.aggregate(t=Coalesce(Sum('quantity'), 0))['t']

        assignments = Assignment.objects.filter(base_id=self.base_id, asset_type=self.asset_type)
        totals = {
            'purchases': total(Purchase.objects.filter(
                base_id=self.base_id, asset_type=self.asset_type)),
            'transfer_in': total(Transfer.objects.filter(
                to_base_id=self.base_id, asset_type=self.asset_type)),
            'transfer_out': total(Transfer.objects.filter(
                from_base_id=self.base_id, asset_type=self.asset_type)),
            'assigned': total(assignments.filter(kind=AssignmentKind.ASSIGNED)),
            'expended': total(assignments.filter(kind=AssignmentKind.EXPENDED)),
        }
        totals['closing_balance'] = (
            self.opening_balance
            + totals['purchases'] + totals['transfer_in'] - totals['transfer_out']
            - totals['assigned'] - totals['expended']
        )
        return totals

    def recalculate(self, commit: bool = True) -> dict[str, tuple[int, int]]:
        """
        Recalculate counters from the ledger.

        Use for:
        - Integrity audit
        - Correction after detected inconsistency

        Returns:
            {field: (old, new)} for every counter that differed
        """
        totals = self.ledger_totals()
        changes = {
            field: (getattr(self, field), value)
            for field, value in totals.items()
            if getattr(self, field) != value
        }

        if changes and commit:
            with transaction.atomic():
                for field, (_old, new) in changes.items():
                    setattr(self, field, new)
                self.save(update_fields=[*changes, 'updated_at'])

            logger.warning(
                "armory.snapshot.recalculated",
                extra={
                    "snapshot_id": self.pk,
                    "base": self.base_id,
                    "asset_type": self.asset_type,
                    "changes": {k: f"{old} -> {new}" for k, (old, new) in changes.items()},
                },
            )

        return changes

    def __str__(self) -> str:
        return f"{self.asset_type} @ {self.base}: {self.closing_balance}"
