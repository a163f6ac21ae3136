"""
Tests for asset movements and the snapshot projection.
"""

import pytest
from django.db import transaction

from armory import assets, ArmoryError
from armory.models import (
    Assignment,
    AssignmentKind,
    AuditAction,
    AuditLog,
    InventorySnapshot,
    Purchase,
    Transfer,
)
from armory.services.movements import MAX_QUANTITY, _locked_balances


pytestmark = pytest.mark.django_db


def balance(base, asset_type='Rifle'):
    snapshot = assets.get_snapshot(base, asset_type)
    return snapshot.closing_balance if snapshot else 0


class TestPurchase:
    """Tests for assets.purchase()."""

    def test_purchase_creates_snapshot(self, alpha):
        snapshot = assets.purchase(100, 'Rifle', alpha)

        assert snapshot.base == alpha
        assert snapshot.purchases == 100
        assert snapshot.closing_balance == 100
        assert snapshot.is_consistent

    def test_purchases_accumulate(self, alpha):
        assets.purchase(100, 'Rifle', alpha)
        snapshot = assets.purchase(25, 'Rifle', alpha)

        assert snapshot.purchases == 125
        assert snapshot.closing_balance == 125
        assert InventorySnapshot.objects.filter(base=alpha, asset_type='Rifle').count() == 1

    def test_purchase_writes_ledger_and_audit(self, alpha, logistics):
        assets.purchase(10, 'Ammo', alpha, user=logistics)

        row = Purchase.objects.get()
        assert row.quantity == 10
        assert row.user == logistics

        log = AuditLog.objects.get()
        assert log.action == AuditAction.PURCHASE_CREATED
        assert log.user == logistics
        assert log.details == {'base': 'alpha', 'assetType': 'Ammo', 'quantity': 10}

    @pytest.mark.parametrize('quantity', [0, -5, 1.5, True, '10', None, MAX_QUANTITY + 1])
    def test_invalid_quantity(self, alpha, quantity):
        with pytest.raises(ArmoryError) as exc:
            assets.purchase(quantity, 'Rifle', alpha)

        assert exc.value.code == 'INVALID_QUANTITY'
        assert not Purchase.objects.exists()

    def test_blank_asset_type(self, alpha):
        with pytest.raises(ArmoryError) as exc:
            assets.purchase(5, '', alpha)

        assert exc.value.code == 'MISSING_FIELDS'

    def test_asset_type_whitelist(self, alpha, settings):
        settings.ARMORY = {'ASSET_TYPES': ['Rifle', 'Ammo']}

        assets.purchase(5, 'Rifle', alpha)
        with pytest.raises(ArmoryError) as exc:
            assets.purchase(5, 'Tank', alpha)

        assert exc.value.code == 'UNKNOWN_ASSET_TYPE'


class TestTransfer:
    """Tests for assets.transfer()."""

    def test_transfer_moves_balance(self, alpha, bravo):
        assets.purchase(50, 'Rifle', alpha)

        transfer = assets.transfer(20, 'Rifle', alpha, bravo)

        assert transfer.from_base == alpha
        assert transfer.to_base == bravo
        assert balance(alpha) == 30
        assert balance(bravo) == 20

        source = assets.get_snapshot(alpha, 'Rifle')
        target = assets.get_snapshot(bravo, 'Rifle')
        assert source.transfer_out == 20
        assert target.transfer_in == 20
        assert source.is_consistent and target.is_consistent

    def test_transfer_whole_balance(self, alpha, bravo):
        assets.purchase(50, 'Rifle', alpha)

        assets.transfer(50, 'Rifle', alpha, bravo)

        assert balance(alpha) == 0
        assert balance(bravo) == 50

    def test_insufficient_quantity(self, alpha, bravo):
        assets.purchase(10, 'Rifle', alpha)

        with pytest.raises(ArmoryError) as exc:
            assets.transfer(11, 'Rifle', alpha, bravo)

        assert exc.value.code == 'INSUFFICIENT_QUANTITY'
        assert exc.value.available == 10
        assert exc.value.requested == 11
        assert balance(alpha) == 10
        assert not Transfer.objects.exists()

    def test_insufficient_without_snapshot(self, alpha, bravo):
        with pytest.raises(ArmoryError) as exc:
            assets.transfer(1, 'Rifle', alpha, bravo)

        assert exc.value.code == 'INSUFFICIENT_QUANTITY'
        assert exc.value.available == 0

    def test_same_base(self, alpha):
        assets.purchase(10, 'Rifle', alpha)

        with pytest.raises(ArmoryError) as exc:
            assets.transfer(5, 'Rifle', alpha, alpha)

        assert exc.value.code == 'SAME_BASE'

    def test_missing_destination(self, alpha):
        with pytest.raises(ArmoryError) as exc:
            assets.transfer(5, 'Rifle', alpha, None)

        assert exc.value.code == 'MISSING_FIELDS'

    def test_transfer_writes_audit(self, alpha, bravo, logistics):
        assets.purchase(10, 'Rifle', alpha)
        assets.transfer(4, 'Rifle', alpha, bravo, user=logistics)

        log = AuditLog.objects.filter(action=AuditAction.ASSET_TRANSFER).get()
        assert log.details['fromBase'] == 'alpha'
        assert log.details['toBase'] == 'bravo'
        assert log.details['quantity'] == 4

    def test_opposite_transfers(self, alpha, bravo):
        assets.purchase(30, 'Rifle', alpha)
        assets.purchase(10, 'Rifle', bravo)

        assets.transfer(5, 'Rifle', alpha, bravo)
        assets.transfer(12, 'Rifle', bravo, alpha)

        assert balance(alpha) == 37
        assert balance(bravo) == 3

    def test_locks_source_and_destination(self, alpha, bravo):
        assets.purchase(30, 'Rifle', alpha)
        assets.purchase(10, 'Rifle', bravo)

        with transaction.atomic():
            balances = _locked_balances([bravo, alpha], 'Rifle')

        assert balances == {alpha.pk: 30, bravo.pk: 10}

    def test_locks_skip_missing_snapshot(self, alpha, bravo):
        assets.purchase(30, 'Rifle', alpha)

        with transaction.atomic():
            balances = _locked_balances([alpha, bravo], 'Rifle')

        assert balances == {alpha.pk: 30}


class TestAssign:
    """Tests for assets.assign() and assets.expend()."""

    def test_assign_to_personnel(self, alpha):
        assets.purchase(10, 'Rifle', alpha)

        assignment = assets.assign(3, 'Rifle', alpha, assigned_to='SGT-104')

        assert assignment.kind == AssignmentKind.ASSIGNED
        assert not assignment.is_expended
        snapshot = assets.get_snapshot(alpha, 'Rifle')
        assert snapshot.assigned == 3
        assert snapshot.expended == 0
        assert snapshot.closing_balance == 7

    def test_expend(self, alpha):
        assets.purchase(500, 'Ammo', alpha)

        assignment = assets.expend(120, 'Ammo', alpha, reason='Range training')

        assert assignment.is_expended
        assert assignment.assigned_to == 'Range training'
        snapshot = assets.get_snapshot(alpha, 'Ammo')
        assert snapshot.expended == 120
        assert snapshot.assigned == 0
        assert snapshot.closing_balance == 380

    def test_audit_action_follows_kind(self, alpha):
        assets.purchase(10, 'Ammo', alpha)
        assets.assign(1, 'Ammo', alpha, assigned_to='SGT-1')
        assets.expend(1, 'Ammo', alpha, reason='Drill')

        actions = set(AuditLog.objects.values_list('action', flat=True))
        assert AuditAction.ASSET_ASSIGNED in actions
        assert AuditAction.ASSET_EXPENDED in actions

    def test_missing_assignee(self, alpha):
        assets.purchase(10, 'Rifle', alpha)

        with pytest.raises(ArmoryError) as exc:
            assets.assign(1, 'Rifle', alpha, assigned_to='')

        assert exc.value.code == 'MISSING_FIELDS'

    def test_invalid_kind(self, alpha):
        assets.purchase(10, 'Rifle', alpha)

        with pytest.raises(ArmoryError) as exc:
            assets.assign(1, 'Rifle', alpha, assigned_to='SGT-1', kind='lost')

        assert exc.value.code == 'INVALID_ASSIGNMENT_TYPE'

    def test_insufficient_quantity(self, alpha):
        assets.purchase(2, 'Rifle', alpha)

        with pytest.raises(ArmoryError) as exc:
            assets.assign(3, 'Rifle', alpha, assigned_to='SGT-1')

        assert exc.value.code == 'INSUFFICIENT_QUANTITY'
        assert not Assignment.objects.exists()


class TestLedgerImmutability:
    """Ledger rows can only be appended."""

    def test_cannot_resave(self, alpha):
        assets.purchase(5, 'Rifle', alpha)
        row = Purchase.objects.get()

        row.quantity = 50
        with pytest.raises(ValueError):
            row.save()

    def test_cannot_delete(self, alpha):
        assets.purchase(5, 'Rifle', alpha)

        with pytest.raises(ValueError):
            Purchase.objects.get().delete()

    def test_audit_log_cannot_delete(self, alpha):
        assets.purchase(5, 'Rifle', alpha)

        with pytest.raises(ValueError):
            AuditLog.objects.get().delete()


class TestSnapshotRecalculate:
    """Tests for InventorySnapshot.recalculate()."""

    def test_consistent_snapshot_has_no_changes(self, alpha, bravo):
        assets.purchase(40, 'Rifle', alpha)
        assets.transfer(10, 'Rifle', alpha, bravo)
        assets.expend(5, 'Rifle', alpha, reason='Damaged')

        snapshot = assets.get_snapshot(alpha, 'Rifle')
        assert snapshot.recalculate() == {}

    def test_drift_is_corrected(self, alpha):
        assets.purchase(40, 'Rifle', alpha)
        InventorySnapshot.objects.filter(base=alpha).update(closing_balance=7, purchases=1)

        snapshot = assets.get_snapshot(alpha, 'Rifle')
        assert not snapshot.is_consistent

        changes = snapshot.recalculate()

        assert changes == {'purchases': (1, 40), 'closing_balance': (7, 40)}
        snapshot.refresh_from_db()
        assert snapshot.closing_balance == 40
        assert snapshot.is_consistent

    def test_dry_run_does_not_save(self, alpha):
        assets.purchase(40, 'Rifle', alpha)
        InventorySnapshot.objects.filter(base=alpha).update(closing_balance=7)

        snapshot = assets.get_snapshot(alpha, 'Rifle')
        changes = snapshot.recalculate(commit=False)

        assert changes == {'closing_balance': (7, 40)}
        snapshot.refresh_from_db()
        assert snapshot.closing_balance == 7
