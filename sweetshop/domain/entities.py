"""
===============================================================================
TARJETA CRC - domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Sweet)

Responsabilidades:
    - Definir el producto del catálogo (sin infraestructura).
    - Brindar helpers mínimos para mantener invariantes simples
      (timestamps explícitos, chequeo de stock).

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - application/inventory_service.py: construye/muta estas entidades.
    - interfaces/api: serializan DTOs basados en estas entidades.

Principios:
    - Sin dependencias a DB/FastAPI.
    - No hay hooks implícitos: quien muta la entidad refresca updated_at.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4


def utcnow() -> datetime:
    """Fecha/hora UTC (fuente única de tiempo)."""
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Sweet
# ---------------------------------------------------------------------------


@dataclass
class Sweet:
    """
    Producto del catálogo.

    Invariantes (las hace cumplir application + store):
      - quantity >= 0
      - price > 0 (Decimal exacto, nunca float)
    """

    name: str
    category: str
    price: Decimal
    quantity: int
    description: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.updated_at is None:
            self.updated_at = self.created_at

    def has_stock_for(self, quantity: int) -> bool:
        """True si una compra de `quantity` unidades es legal."""
        return self.quantity >= quantity

    def replace_details(
        self,
        *,
        name: str,
        category: str,
        price: Decimal,
        quantity: int,
        description: str,
        at: datetime | None = None,
    ) -> None:
        """Reemplazo total de los cinco campos editables (sin patch parcial)."""
        self.name = name
        self.category = category
        self.price = price
        self.quantity = quantity
        self.description = description
        self.touch(at=at)

    def touch(self, *, at: datetime | None = None) -> None:
        self.updated_at = at or utcnow()
