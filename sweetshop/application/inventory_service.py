"""
===============================================================================
SERVICE: Inventory (catálogo + movimientos de stock)
===============================================================================

Name:
    InventoryService

Business Goal:
    Mantener el catálogo de productos garantizando:
      - stock nunca negativo
      - precio estrictamente positivo y exacto (Decimal)
      - updated_at refrescado por cada mutación

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    InventoryService

Responsibilities:
    - Validar campos en alta y modificación (detalle por campo).
    - CRUD del catálogo (sin patch parcial: update reemplaza los 5 campos).
    - Búsqueda por nombre/categoría/rango de precio (AND).
    - purchase / restock con escritura condicional en el store.

Collaborators:
    - SweetRepository (puerto de persistencia)
    - domain.validation (reglas de campos)
    - domain.value_objects.SweetSearch (semántica de búsqueda)

Error Mapping:
    - ValidationError: campos inválidos
    - NotFoundError: id inexistente
    - InsufficientStockError: compra mayor al stock (stock intacto)

Notas:
    - Quantity >= 1 en purchase/restock lo valida el llamador (schema HTTP).
    - No hay estado cacheado entre llamadas: cada operación lee fresco.
===============================================================================
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import List
from uuid import UUID

from ..crosscutting.logger import logger
from ..domain.entities import Sweet, utcnow
from ..domain.errors import InsufficientStockError, NotFoundError, ValidationError
from ..domain.repositories import SweetRepository
from ..domain.validation import sweet_field_errors, to_decimal
from ..domain.value_objects import SweetSearch

RESOURCE_NAME = "Sweet"


class InventoryService:
    """Application service del catálogo."""

    def __init__(self, sweets: SweetRepository):
        self._sweets = sweets

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _require(self, sweet_id: UUID) -> Sweet:
        sweet = self._sweets.get_sweet(sweet_id)
        if sweet is None:
            raise NotFoundError(RESOURCE_NAME, sweet_id)
        return sweet

    @staticmethod
    def _clean_fields(
        *,
        name: str,
        category: str,
        price: Decimal | float | int | str,
        quantity: int,
        description: str,
    ) -> tuple[str, str, Decimal, int, str]:
        """Normaliza y valida; levanta ValidationError con todas las violaciones."""
        price_value: Decimal | None
        errors = []
        if price is None:
            price_value = None
        else:
            try:
                price_value = to_decimal(price)
            except (InvalidOperation, TypeError, ValueError):
                price_value = None
                errors.append({"field": "price", "msg": "Price must be a decimal number"})

        field_errors = sweet_field_errors(
            name=name,
            category=category,
            price=price_value,
            quantity=quantity,
            description=description,
        )
        if errors:
            field_errors = [e for e in field_errors if e["field"] != "price"] + errors
        if field_errors:
            raise ValidationError("Validation failed", errors=field_errors)

        return (
            name.strip(),
            category.strip(),
            price_value.quantize(Decimal("0.01")),
            quantity,
            description.strip(),
        )

    # ------------------------------------------------------------------
    # Lectura
    # ------------------------------------------------------------------

    def get_by_id(self, sweet_id: UUID) -> Sweet:
        return self._require(sweet_id)

    def list(self) -> List[Sweet]:
        return self._sweets.list_sweets()

    def search(
        self,
        name: str | None = None,
        category: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
    ) -> List[Sweet]:
        criteria = SweetSearch(
            name=name,
            category=category,
            min_price=min_price,
            max_price=max_price,
        )
        if criteria.is_empty:
            return self._sweets.list_sweets()
        return self._sweets.search_sweets(criteria)

    # ------------------------------------------------------------------
    # Escritura (admin)
    # ------------------------------------------------------------------

    def add(
        self,
        name: str,
        category: str,
        price: Decimal,
        quantity: int,
        description: str,
    ) -> Sweet:
        name, category, price, quantity, description = self._clean_fields(
            name=name,
            category=category,
            price=price,
            quantity=quantity,
            description=description,
        )
        sweet = Sweet(
            name=name,
            category=category,
            price=price,
            quantity=quantity,
            description=description,
        )
        saved = self._sweets.save_sweet(sweet)
        logger.info(
            "Sweet created",
            extra={"sweet_id": str(saved.id), "quantity": saved.quantity},
        )
        return saved

    def update(
        self,
        sweet_id: UUID,
        name: str,
        category: str,
        price: Decimal,
        quantity: int,
        description: str,
    ) -> Sweet:
        sweet = self._require(sweet_id)
        name, category, price, quantity, description = self._clean_fields(
            name=name,
            category=category,
            price=price,
            quantity=quantity,
            description=description,
        )
        sweet.replace_details(
            name=name,
            category=category,
            price=price,
            quantity=quantity,
            description=description,
        )
        saved = self._sweets.save_sweet(sweet)
        logger.info("Sweet updated", extra={"sweet_id": str(saved.id)})
        return saved

    def remove(self, sweet_id: UUID) -> None:
        if not self._sweets.delete_sweet(sweet_id):
            raise NotFoundError(RESOURCE_NAME, sweet_id)
        logger.info("Sweet deleted", extra={"sweet_id": str(sweet_id)})

    # ------------------------------------------------------------------
    # Movimientos de stock
    # ------------------------------------------------------------------

    def purchase(self, sweet_id: UUID, quantity: int) -> Sweet:
        """
        Descuenta `quantity` unidades.

        El chequeo previo da el error temprano; la escritura condicional del
        store es la que garantiza que dos compras concurrentes no dejen stock
        negativo.
        """
        sweet = self._require(sweet_id)
        if not sweet.has_stock_for(quantity):
            raise InsufficientStockError(requested=quantity, available=sweet.quantity)

        updated = self._sweets.adjust_quantity(sweet_id, -quantity, updated_at=utcnow())
        if updated is None:
            # Lost race: otra escritura cambió el stock o borró el producto.
            current = self._require(sweet_id)
            raise InsufficientStockError(requested=quantity, available=current.quantity)

        logger.info(
            "Sweet purchased",
            extra={
                "sweet_id": str(sweet_id),
                "quantity": quantity,
                "remaining": updated.quantity,
            },
        )
        return updated

    def restock(self, sweet_id: UUID, quantity: int) -> Sweet:
        self._require(sweet_id)
        updated = self._sweets.adjust_quantity(sweet_id, quantity, updated_at=utcnow())
        if updated is None:
            raise NotFoundError(RESOURCE_NAME, sweet_id)

        logger.info(
            "Sweet restocked",
            extra={
                "sweet_id": str(sweet_id),
                "quantity": quantity,
                "stock": updated.quantity,
            },
        )
        return updated
