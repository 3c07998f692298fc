"""
===============================================================================
TARJETA CRC - sweetshop/interfaces/api/http/routers/sweets.py
===============================================================================

Class/Module:
    Sweets Router

Responsibilities:
    - Exponer endpoints HTTP del catálogo (lectura pública, escritura admin).
    - Convertir requests HTTP -> llamadas a InventoryService.
    - Enforce de auth/roles en el borde (dependencias require_user/require_role).

Collaborators:
    - sweetshop.application.inventory_service.InventoryService
    - sweetshop.identity.access_control (require_user, require_role)
    - sweetshop.container (factories DI)
    - schemas.sweets (DTOs Pydantic)

Notas:
    - /sweets/search se declara antes de /sweets/{sweet_id} para que "search"
      no se interprete como id.
    - Los errores de dominio los traduce api/exception_handlers.py.
===============================================================================
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from sweetshop.application.inventory_service import InventoryService
from sweetshop.container import get_inventory_service
from sweetshop.identity.access_control import require_role, require_user
from sweetshop.identity.users import User, UserRole

from ..schemas.sweets import QuantityReq, SweetReq, SweetRes

router = APIRouter(prefix="/sweets", tags=["sweets"])

require_admin = require_role(UserRole.ADMIN)


# =============================================================================
# Lectura (pública)
# =============================================================================


@router.get("", response_model=list[SweetRes])
def list_sweets(inventory: InventoryService = Depends(get_inventory_service)):
    return [SweetRes.from_entity(s) for s in inventory.list()]


@router.get("/search", response_model=list[SweetRes])
def search_sweets(
    name: str | None = Query(None, max_length=100),
    category: str | None = Query(None, max_length=100),
    min_price: Decimal | None = Query(None, alias="minPrice", ge=0),
    max_price: Decimal | None = Query(None, alias="maxPrice", ge=0),
    inventory: InventoryService = Depends(get_inventory_service),
):
    """Búsqueda combinada (AND); filtros omitidos no restringen."""
    results = inventory.search(
        name=name, category=category, min_price=min_price, max_price=max_price
    )
    return [SweetRes.from_entity(s) for s in results]


@router.get("/{sweet_id}", response_model=SweetRes)
def get_sweet(
    sweet_id: UUID,
    inventory: InventoryService = Depends(get_inventory_service),
):
    return SweetRes.from_entity(inventory.get_by_id(sweet_id))


# =============================================================================
# Escritura (admin)
# =============================================================================


@router.post("", response_model=SweetRes, status_code=status.HTTP_201_CREATED)
def create_sweet(
    req: SweetReq,
    _admin: User = Depends(require_admin),
    inventory: InventoryService = Depends(get_inventory_service),
):
    sweet = inventory.add(
        req.name, req.category, req.price, req.quantity, req.description
    )
    return SweetRes.from_entity(sweet)


@router.put("/{sweet_id}", response_model=SweetRes)
def update_sweet(
    sweet_id: UUID,
    req: SweetReq,
    _admin: User = Depends(require_admin),
    inventory: InventoryService = Depends(get_inventory_service),
):
    sweet = inventory.update(
        sweet_id, req.name, req.category, req.price, req.quantity, req.description
    )
    return SweetRes.from_entity(sweet)


@router.delete("/{sweet_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sweet(
    sweet_id: UUID,
    _admin: User = Depends(require_admin),
    inventory: InventoryService = Depends(get_inventory_service),
):
    inventory.remove(sweet_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Movimientos de stock
# =============================================================================


@router.post("/{sweet_id}/purchase", response_model=SweetRes)
def purchase_sweet(
    sweet_id: UUID,
    req: QuantityReq,
    _user: User = Depends(require_user()),
    inventory: InventoryService = Depends(get_inventory_service),
):
    """Cualquier usuario autenticado puede comprar."""
    return SweetRes.from_entity(inventory.purchase(sweet_id, req.quantity))


@router.post("/{sweet_id}/restock", response_model=SweetRes)
def restock_sweet(
    sweet_id: UUID,
    req: QuantityReq,
    _admin: User = Depends(require_admin),
    inventory: InventoryService = Depends(get_inventory_service),
):
    return SweetRes.from_entity(inventory.restock(sweet_id, req.quantity))
