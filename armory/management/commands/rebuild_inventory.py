"""
Management command to rebuild inventory snapshots from the ledger.

Usage:
    python manage.py rebuild_inventory
    python manage.py rebuild_inventory --dry-run
    python manage.py rebuild_inventory --base alpha
"""

from django.core.management.base import BaseCommand, CommandError

from armory.models import Base, InventorySnapshot


class Command(BaseCommand):
    """Rebuild inventory snapshots command."""

    help = 'Recalculates inventory snapshots from purchases, transfers and assignments'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would change without saving'
        )
        parser.add_argument(
            '--base',
            help='Only rebuild snapshots of this base code'
        )

    def handle(self, *args, **options):
        snapshots = InventorySnapshot.objects.select_related('base')

        if options['base']:
            if not Base.objects.filter(code=options['base']).exists():
                raise CommandError(f"Unknown base: {options['base']}")
            snapshots = snapshots.filter(base__code=options['base'])

        dry_run = options['dry_run']
        drifted = 0

        for snapshot in snapshots:
            changes = snapshot.recalculate(commit=not dry_run)
            if not changes:
                continue

            drifted += 1
            detail = ', '.join(f'{field}: {old} -> {new}' for field, (old, new) in changes.items())
            self.stdout.write(f'{snapshot.base.code}/{snapshot.asset_type}: {detail}')

        if dry_run:
            self.stdout.write(f'{drifted} snapshot(s) would be corrected')
        else:
            self.stdout.write(self.style.SUCCESS(f'{drifted} snapshot(s) corrected'))
