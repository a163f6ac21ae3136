"""
Initial migration for Armory models.
"""

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Armory models: Base, InventorySnapshot, ledger, AuditLog, Membership."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Base',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.SlugField(help_text='Unique identifier (e.g. alpha, bravo)', unique=True, verbose_name='Code')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
                ('metadata', models.JSONField(blank=True, default=dict, verbose_name='Metadata')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Base',
                'verbose_name_plural': 'Bases',
                'ordering': ['code'],
            },
        ),
        migrations.CreateModel(
            name='InventorySnapshot',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('asset_type', models.CharField(max_length=100, verbose_name='Asset Type')),
                ('opening_balance', models.PositiveIntegerField(default=0, verbose_name='Opening Balance')),
                ('purchases', models.PositiveIntegerField(default=0, verbose_name='Purchases')),
                ('transfer_in', models.PositiveIntegerField(default=0, verbose_name='Transfer In')),
                ('transfer_out', models.PositiveIntegerField(default=0, verbose_name='Transfer Out')),
                ('assigned', models.PositiveIntegerField(default=0, verbose_name='Assigned')),
                ('expended', models.PositiveIntegerField(default=0, verbose_name='Expended')),
                ('closing_balance', models.PositiveIntegerField(default=0, verbose_name='Closing Balance')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('base', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='snapshots', to='armory.base', verbose_name='Base')),
            ],
            options={
                'verbose_name': 'Inventory Snapshot',
                'verbose_name_plural': 'Inventory Snapshots',
                'ordering': ['base', 'asset_type'],
            },
        ),
        migrations.CreateModel(
            name='Membership',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('role', models.CharField(choices=[('admin', 'Admin'), ('commander', 'Base Commander'), ('logistics', 'Logistics Officer')], max_length=20, verbose_name='Role')),
                ('base', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='members', to='armory.base', verbose_name='Base')),
                ('user', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='armory_membership', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Membership',
                'verbose_name_plural': 'Memberships',
            },
        ),
        migrations.CreateModel(
            name='Purchase',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('asset_type', models.CharField(max_length=100, verbose_name='Asset Type')),
                ('quantity', models.PositiveIntegerField(verbose_name='Quantity')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Date/Time')),
                ('base', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='purchases', to='armory.base', verbose_name='Base')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Purchase',
                'verbose_name_plural': 'Purchases',
                'ordering': ['timestamp'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='Transfer',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('asset_type', models.CharField(max_length=100, verbose_name='Asset Type')),
                ('quantity', models.PositiveIntegerField(verbose_name='Quantity')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Date/Time')),
                ('from_base', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='transfers_out', to='armory.base', verbose_name='From Base')),
                ('to_base', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='transfers_in', to='armory.base', verbose_name='To Base')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Transfer',
                'verbose_name_plural': 'Transfers',
                'ordering': ['timestamp'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='Assignment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('asset_type', models.CharField(max_length=100, verbose_name='Asset Type')),
                ('quantity', models.PositiveIntegerField(verbose_name='Quantity')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Date/Time')),
                ('kind', models.CharField(choices=[('assigned', 'Assigned to personnel'), ('expended', 'Expended')], default='assigned', max_length=20, verbose_name='Type')),
                ('assigned_to', models.CharField(help_text='Personnel ID, or reason when expended', max_length=255, verbose_name='Assigned To / Reason')),
                ('base', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='assignments', to='armory.base', verbose_name='Base')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Assignment',
                'verbose_name_plural': 'Assignments',
                'ordering': ['timestamp'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='AuditLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=[('PURCHASE_CREATED', 'Purchase created'), ('ASSET_TRANSFER', 'Asset transfer'), ('ASSET_ASSIGNED', 'Asset assigned'), ('ASSET_EXPENDED', 'Asset expended')], db_index=True, max_length=32, verbose_name='Action')),
                ('details', models.JSONField(blank=True, default=dict, verbose_name='Details')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Date/Time')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Audit Log',
                'verbose_name_plural': 'Audit Logs',
                'ordering': ['-timestamp'],
            },
        ),
        # Constraints and indexes
        migrations.AddConstraint(
            model_name='inventorysnapshot',
            constraint=models.UniqueConstraint(fields=('base', 'asset_type'), name='unique_snapshot_base_asset_type'),
        ),
        migrations.AddIndex(
            model_name='purchase',
            index=models.Index(fields=['base', 'timestamp'], name='armory_pur_base_ts_idx'),
        ),
        migrations.AddIndex(
            model_name='transfer',
            index=models.Index(fields=['from_base', 'timestamp'], name='armory_trf_from_ts_idx'),
        ),
        migrations.AddIndex(
            model_name='transfer',
            index=models.Index(fields=['to_base', 'timestamp'], name='armory_trf_to_ts_idx'),
        ),
        migrations.AddIndex(
            model_name='assignment',
            index=models.Index(fields=['base', 'timestamp'], name='armory_asg_base_ts_idx'),
        ),
    ]
