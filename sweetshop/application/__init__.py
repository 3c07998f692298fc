"""
===============================================================================
APPLICATION LAYER (Public API / Exports)
===============================================================================

Expone los puntos de entrada estables de la capa de aplicación:
  - IdentityService: registro, login y lookup de usuarios
  - InventoryService: catálogo y movimientos de stock
  - authorize: guard de rol usado por la capa HTTP
  - ensure_dev_admin: seed de admin para entornos locales
===============================================================================
"""

from .authorization import authorize
from .dev_seed_admin import ensure_dev_admin
from .identity_service import IdentityService
from .inventory_service import InventoryService

__all__ = [
    "IdentityService",
    "InventoryService",
    "authorize",
    "ensure_dev_admin",
]
