"""
Asset movements — state-changing operations (purchase, transfer, assign).

All methods use transaction.atomic() with appropriate locking.
Every movement writes one ledger row and one AuditLog row.
"""

import logging

from django.db import transaction

from armory.conf import armory_settings
from armory.exceptions import ArmoryError
from armory.models.enums import AssignmentKind, AuditAction
from armory.models.ledger import Assignment, AuditLog, Purchase, Transfer
from armory.models.snapshot import InventorySnapshot

logger = logging.getLogger('armory')

# Upper bound of the quantity columns (PositiveIntegerField)
MAX_QUANTITY = 2147483647


def _validate(quantity, asset_type) -> None:
    """Common input checks for every movement."""
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ArmoryError('INVALID_QUANTITY', requested=quantity)
    if not 0 < quantity <= MAX_QUANTITY:
        raise ArmoryError('INVALID_QUANTITY', requested=quantity)

    if not asset_type:
        raise ArmoryError('MISSING_FIELDS', field='assetType')

    allowed = armory_settings.ASSET_TYPES
    if allowed and asset_type not in allowed:
        raise ArmoryError('UNKNOWN_ASSET_TYPE', asset_type=asset_type)


def _locked_balances(bases, asset_type: str) -> dict:
    """
    Closing balances of asset_type at each base, under row locks.

    Rows are locked in primary key order, the same order for every caller.

    Returns:
        {base_id: closing_balance}, bases without a snapshot are absent
    """
    snapshots = (
        InventorySnapshot.objects.select_for_update()
        .filter(base__in=bases, asset_type=asset_type)
        .order_by('pk')
    )
    return {s.base_id: s.closing_balance for s in snapshots}


def _timestamp_kwargs(timestamp) -> dict:
    return {'timestamp': timestamp} if timestamp is not None else {}


class AssetMovements:
    """State-changing asset movement methods."""

    @classmethod
    def purchase(cls, quantity, asset_type, base, user=None, timestamp=None):
        """
        Assets bought into a base.

        Creates the snapshot on the first purchase of an asset type.

        Returns:
            Updated InventorySnapshot

        Raises:
            ArmoryError('INVALID_QUANTITY'): If quantity is not a positive int
        """
        _validate(quantity, asset_type)

        with transaction.atomic():
            purchase = Purchase.objects.create(
                base=base,
                asset_type=asset_type,
                quantity=quantity,
                user=user,
                **_timestamp_kwargs(timestamp)
            )
            AuditLog.objects.create(
                action=AuditAction.PURCHASE_CREATED,
                user=user,
                details={'base': base.code, 'assetType': asset_type, 'quantity': quantity},
            )

            snapshot = InventorySnapshot.objects.get(base=base, asset_type=asset_type)
            logger.info(
                "armory.purchase.recorded",
                extra={
                    "purchase_id": purchase.pk,
                    "base": base.code,
                    "asset_type": asset_type,
                    "qty": quantity,
                },
            )
            return snapshot

    @classmethod
    def transfer(cls, quantity, asset_type, from_base, to_base, user=None, timestamp=None):
        """
        Move assets between bases.

        Raises:
            ArmoryError('MISSING_FIELDS'): If to_base is None
            ArmoryError('SAME_BASE'): If from_base == to_base
            ArmoryError('INSUFFICIENT_QUANTITY'): If source balance < quantity

        Concurrency:
            - Runs under transaction.atomic()
            - Locks source and destination snapshots with select_for_update(),
              in primary key order
            - Verifies balance after lock, before writing anything
        """
        if to_base is None:
            raise ArmoryError('MISSING_FIELDS', field='toBaseId')
        _validate(quantity, asset_type)

        if from_base.pk == to_base.pk:
            raise ArmoryError('SAME_BASE', base=from_base.code)

        with transaction.atomic():
            balances = _locked_balances([from_base, to_base], asset_type)
            available = balances.get(from_base.pk, 0)
            if available < quantity:
                raise ArmoryError(
                    'INSUFFICIENT_QUANTITY',
                    available=available,
                    requested=quantity,
                )

            transfer = Transfer.objects.create(
                from_base=from_base,
                to_base=to_base,
                asset_type=asset_type,
                quantity=quantity,
                user=user,
                **_timestamp_kwargs(timestamp)
            )
            AuditLog.objects.create(
                action=AuditAction.ASSET_TRANSFER,
                user=user,
                details={
                    'fromBase': from_base.code,
                    'toBase': to_base.code,
                    'assetType': asset_type,
                    'quantity': quantity,
                },
            )
            logger.info(
                "armory.transfer.recorded",
                extra={
                    "transfer_id": transfer.pk,
                    "from_base": from_base.code,
                    "to_base": to_base.code,
                    "asset_type": asset_type,
                    "qty": quantity,
                },
            )
            return transfer

    @classmethod
    def assign(cls, quantity, asset_type, base, assigned_to,
               kind=AssignmentKind.ASSIGNED, user=None, timestamp=None):
        """
        Hand assets to personnel (or, with kind=EXPENDED, consume them).

        Raises:
            ArmoryError('MISSING_FIELDS'): If assigned_to is empty
            ArmoryError('INVALID_QUANTITY'): If quantity is not a positive int
            ArmoryError('INSUFFICIENT_QUANTITY'): If base balance < quantity
        """
        _validate(quantity, asset_type)

        if not assigned_to:
            raise ArmoryError('MISSING_FIELDS', field='assignedTo')

        if kind not in AssignmentKind.values:
            raise ArmoryError('INVALID_ASSIGNMENT_TYPE', value=kind)

        with transaction.atomic():
            available = _locked_balances([base], asset_type).get(base.pk, 0)
            if available < quantity:
                raise ArmoryError(
                    'INSUFFICIENT_QUANTITY',
                    available=available,
                    requested=quantity,
                )

            assignment = Assignment.objects.create(
                base=base,
                asset_type=asset_type,
                quantity=quantity,
                kind=kind,
                assigned_to=assigned_to,
                user=user,
                **_timestamp_kwargs(timestamp)
            )
            AuditLog.objects.create(
                action=(
                    AuditAction.ASSET_EXPENDED if assignment.is_expended
                    else AuditAction.ASSET_ASSIGNED
                ),
                user=user,
                details={
                    'base': base.code,
                    'assetType': asset_type,
                    'quantity': quantity,
                    'assignedTo': assigned_to,
                },
            )
            logger.info(
                "armory.assignment.recorded",
                extra={
                    "assignment_id": assignment.pk,
                    "base": base.code,
                    "asset_type": asset_type,
                    "kind": str(kind),
                    "qty": quantity,
                },
            )
            return assignment

    @classmethod
    def expend(cls, quantity, asset_type, base, reason, user=None, timestamp=None):
        """Shortcut for assign() with kind=EXPENDED."""
        return cls.assign(
            quantity=quantity,
            asset_type=asset_type,
            base=base,
            assigned_to=reason,
            kind=AssignmentKind.EXPENDED,
            user=user,
            timestamp=timestamp,
        )
