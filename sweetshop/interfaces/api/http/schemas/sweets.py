"""
===============================================================================
TARJETA CRC - schemas/sweets.py
===============================================================================

Módulo:
    Schemas HTTP para el catálogo

Responsabilidades:
    - Definir DTOs de request/response para endpoints de sweets.
    - Validar campos con los mismos límites que domain.validation.
    - Serializar en camelCase: price como string decimal exacto,
      timestamps como epoch millis.

Colaboradores:
    - domain.validation (límites)
    - domain.entities.Sweet (mapeo a respuesta)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from sweetshop.domain.entities import Sweet
from sweetshop.domain.validation import (
    DESCRIPTION_MAX_LENGTH,
    DESCRIPTION_MIN_LENGTH,
    MIN_PRICE,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
)


def to_epoch_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class SweetReq(BaseModel):
    """Alta / reemplazo total de un producto."""

    name: Annotated[
        str,
        Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH),
    ]
    category: Annotated[str, Field(..., min_length=1, max_length=NAME_MAX_LENGTH)]
    price: Annotated[
        Decimal,
        Field(
            ...,
            ge=MIN_PRICE,
            max_digits=PRICE_MAX_DIGITS,
            decimal_places=PRICE_DECIMAL_PLACES,
            description="Precio exacto (> 0, dos decimales)",
        ),
    ]
    quantity: Annotated[int, Field(..., ge=0)]
    description: Annotated[
        str,
        Field(
            ...,
            min_length=DESCRIPTION_MIN_LENGTH,
            max_length=DESCRIPTION_MAX_LENGTH,
        ),
    ]

    @field_validator("name", "category", "description", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class QuantityReq(BaseModel):
    """Cantidad para purchase / restock (>= 1)."""

    quantity: Annotated[int, Field(..., ge=1)]


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class SweetRes(_CamelModel):
    id: UUID
    name: str
    category: str
    price: Decimal
    quantity: int
    description: str
    created_at: int
    updated_at: int

    @classmethod
    def from_entity(cls, sweet: Sweet) -> "SweetRes":
        return cls(
            id=sweet.id,
            name=sweet.name,
            category=sweet.category,
            price=sweet.price,
            quantity=sweet.quantity,
            description=sweet.description,
            created_at=to_epoch_millis(sweet.created_at),
            updated_at=to_epoch_millis(sweet.updated_at or sweet.created_at),
        )
