"""
Ledger models — Immutable record of every inventory movement.

Purchase, Transfer and Assignment rows are the source of truth.
InventorySnapshot is a cache of "all ledger rows applied so far".
"""

from django.conf import settings
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from armory.models.enums import AssignmentKind, AuditAction


def _bump(base_id, asset_type: str, **deltas: int) -> None:
    """Add deltas to the counters of a snapshot, creating it if needed."""
    from armory.models.snapshot import InventorySnapshot

    snapshot, _created = InventorySnapshot.objects.get_or_create(
        base_id=base_id,
        asset_type=asset_type,
    )
    InventorySnapshot.objects.filter(pk=snapshot.pk).update(
        updated_at=timezone.now(),
        **{field: F(field) + delta for field, delta in deltas.items()},
    )


class LedgerEntry(models.Model):
    """
    Immutable ledger row.

    Rules:
    - NEVER update() or delete()
    - Corrections are new rows
    - Applies its effect to InventorySnapshot atomically on save()

    Ledger rows are the ONLY thing that changes snapshot counters.
    """

    asset_type = models.CharField(max_length=100, verbose_name=_('Asset Type'))
    quantity = models.PositiveIntegerField(verbose_name=_('Quantity'))
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Date/Time'))
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('User'),
    )

    class Meta:
        abstract = True
        ordering = ['timestamp']

    def apply(self) -> None:
        """Apply this row to the snapshot counters."""
        raise NotImplementedError

    def save(self, *args, **kwargs):
        """Save row and update snapshot cache atomically."""
        if self.pk:
            raise ValueError(
                "Ledger rows are immutable. "
                "To correct, record a new movement."
            )

        if not self.quantity or self.quantity <= 0:
            raise ValueError("Quantity must be positive")

        with transaction.atomic():
            super().save(*args, **kwargs)
            self.apply()

    def delete(self, *args, **kwargs):
        """Ledger rows are immutable."""
        raise ValueError(
            "Ledger rows are immutable. "
            "To reverse, record a new movement."
        )


class Purchase(LedgerEntry):
    """Assets bought into a base."""

    base = models.ForeignKey(
        'armory.Base',
        on_delete=models.PROTECT,
        related_name='purchases',
        verbose_name=_('Base'),
    )

    class Meta(LedgerEntry.Meta):
        verbose_name = _('Purchase')
        verbose_name_plural = _('Purchases')
        indexes = [
            models.Index(fields=['base', 'timestamp'], name='armory_pur_base_ts_idx'),
        ]

    def apply(self) -> None:
        _bump(self.base_id, self.asset_type,
              purchases=self.quantity, closing_balance=self.quantity)

    def __str__(self) -> str:
        return f"+{self.quantity} {self.asset_type} | purchase @ {self.base_id}"


class Transfer(LedgerEntry):
    """Assets moved from one base to another."""

    from_base = models.ForeignKey(
        'armory.Base',
        on_delete=models.PROTECT,
        related_name='transfers_out',
        verbose_name=_('From Base'),
    )
    to_base = models.ForeignKey(
        'armory.Base',
        on_delete=models.PROTECT,
        related_name='transfers_in',
        verbose_name=_('To Base'),
    )

    class Meta(LedgerEntry.Meta):
        verbose_name = _('Transfer')
        verbose_name_plural = _('Transfers')
        indexes = [
            models.Index(fields=['from_base', 'timestamp'], name='armory_trf_from_ts_idx'),
            models.Index(fields=['to_base', 'timestamp'], name='armory_trf_to_ts_idx'),
        ]

    def apply(self) -> None:
        _bump(self.from_base_id, self.asset_type,
              transfer_out=self.quantity, closing_balance=-self.quantity)
        _bump(self.to_base_id, self.asset_type,
              transfer_in=self.quantity, closing_balance=self.quantity)

    def __str__(self) -> str:
        return f"{self.quantity} {self.asset_type} | {self.from_base_id} -> {self.to_base_id}"


class Assignment(LedgerEntry):
    """Assets handed to personnel or consumed."""

    base = models.ForeignKey(
        'armory.Base',
        on_delete=models.PROTECT,
        related_name='assignments',
        verbose_name=_('Base'),
    )
    kind = models.CharField(
        max_length=20,
        choices=AssignmentKind.choices,
        default=AssignmentKind.ASSIGNED,
        verbose_name=_('Type'),
    )
    assigned_to = models.CharField(
        max_length=255,
        verbose_name=_('Assigned To / Reason'),
        help_text=_('Personnel ID, or reason when expended'),
    )

    class Meta(LedgerEntry.Meta):
        verbose_name = _('Assignment')
        verbose_name_plural = _('Assignments')
        indexes = [
            models.Index(fields=['base', 'timestamp'], name='armory_asg_base_ts_idx'),
        ]

    @property
    def is_expended(self) -> bool:
        return self.kind == AssignmentKind.EXPENDED

    def apply(self) -> None:
        counter = 'expended' if self.is_expended else 'assigned'
        _bump(self.base_id, self.asset_type,
              **{counter: self.quantity, 'closing_balance': -self.quantity})

    def __str__(self) -> str:
        return f"-{self.quantity} {self.asset_type} | {self.kind}: {self.assigned_to}"


class AuditLog(models.Model):
    """Who did what, append-only."""

    action = models.CharField(
        max_length=32,
        choices=AuditAction.choices,
        db_index=True,
        verbose_name=_('Action'),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('User'),
    )
    details = models.JSONField(default=dict, blank=True, verbose_name=_('Details'))
    timestamp = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Date/Time'))

    class Meta:
        verbose_name = _('Audit Log')
        verbose_name_plural = _('Audit Logs')
        ordering = ['-timestamp']

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValueError("Audit log entries are immutable.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Audit log entries are immutable.")

    def __str__(self) -> str:
        return f"{self.action} | {self.timestamp:%Y-%m-%d %H:%M}"
