"""
Asset services — modular organization of inventory operations.

    from armory.services import AssetQueries, AssetMovements, AssetDashboard
"""

from armory.services.dashboard import AssetDashboard
from armory.services.movements import AssetMovements
from armory.services.queries import AssetQueries

__all__ = [
    'AssetQueries',
    'AssetMovements',
    'AssetDashboard',
]
