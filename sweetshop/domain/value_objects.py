"""
===============================================================================
TARJETA CRC - domain/value_objects.py
===============================================================================

Módulo:
    Value Objects del catálogo

Responsabilidades:
    - SweetSearch: criterios de búsqueda combinables (AND).
    - Definir la semántica de match en un solo lugar:
        * name: substring case-insensitive
        * category: match exacto
        * min_price / max_price: cotas inclusivas
        * filtro omitido (None) => matchea todo

Colaboradores:
    - domain.repositories.SweetRepository.search
    - infrastructure.repositories.in_memory.sweet (usa matches())
    - infrastructure.repositories.postgres.sweet (traduce a SQL equivalente)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .entities import Sweet


@dataclass(frozen=True, slots=True)
class SweetSearch:
    """Criterios de búsqueda (todos opcionales)."""

    name: str | None = None
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.name is None
            and self.category is None
            and self.min_price is None
            and self.max_price is None
        )

    def matches(self, sweet: Sweet) -> bool:
        if self.name is not None and self.name.lower() not in sweet.name.lower():
            return False
        if self.category is not None and sweet.category != self.category:
            return False
        if self.min_price is not None and sweet.price < self.min_price:
            return False
        if self.max_price is not None and sweet.price > self.max_price:
            return False
        return True
