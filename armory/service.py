"""
Asset Service — The single public interface for all inventory operations.

Usage:
    from armory import assets, ArmoryError

    assets.purchase(100, 'Rifle', alpha)
    assets.transfer(20, 'Rifle', alpha, bravo)
    assets.assign(5, 'Rifle', bravo, assigned_to='SGT-0042')
    assets.dashboard(bravo, '2024-01-01', '2024-01-31')
"""

from armory.services.dashboard import AssetDashboard
from armory.services.movements import AssetMovements
from armory.services.queries import AssetQueries


class Assets(AssetQueries, AssetMovements, AssetDashboard):
    """
    Single interface for all inventory operations.

    Parameter convention: (quantity, asset_type, base, ...)
    Follows natural language: "Purchase 100 rifles for Alpha"

    Movements run under transaction.atomic() with row locks on the
    affected snapshot. See each method's docstring.
    """
