"""
===============================================================================
TARJETA CRC - domain/validation.py
===============================================================================

Módulo:
    Reglas de validación de campos (Sweet)

Responsabilidades:
    - Centralizar límites de campos (nombre, descripción, precio, stock).
    - Devolver errores por campo como lista de dicts ({"field", "msg"}),
      el mismo formato que usa la API en RFC7807 `errors`.

Colaboradores:
    - application/inventory_service.py: levanta ValidationError si hay errores.
    - interfaces/api/http/schemas/sweets.py: reutiliza los límites en Field(...).
===============================================================================
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Final

NAME_MIN_LENGTH: Final[int] = 2
NAME_MAX_LENGTH: Final[int] = 100
DESCRIPTION_MIN_LENGTH: Final[int] = 10
DESCRIPTION_MAX_LENGTH: Final[int] = 500
PRICE_DECIMAL_PLACES: Final[int] = 2
PRICE_MAX_DIGITS: Final[int] = 10
MIN_PRICE: Final[Decimal] = Decimal("0.01")


def _error(field: str, msg: str) -> dict[str, Any]:
    return {"field": field, "msg": msg}


def to_decimal(value: object) -> Decimal:
    """
    Convierte a Decimal sin pasar por float binario.

    Los floats se convierten vía str() para conservar la representación
    corta ("2.99" y no 2.9900000000000002131628...).
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise InvalidOperation(f"invalid decimal: {value!r}")
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)  # type: ignore[arg-type]


def _decimal_places(value: Decimal) -> int:
    exponent = value.as_tuple().exponent
    return -exponent if isinstance(exponent, int) and exponent < 0 else 0


def sweet_field_errors(
    *,
    name: str | None,
    category: str | None,
    price: Decimal | None,
    quantity: int | None,
    description: str | None,
) -> list[dict[str, Any]]:
    """Evalúa todos los campos y devuelve la lista de violaciones (vacía = OK)."""
    errors: list[dict[str, Any]] = []

    clean_name = (name or "").strip()
    if not clean_name:
        errors.append(_error("name", "Name is required"))
    elif not NAME_MIN_LENGTH <= len(clean_name) <= NAME_MAX_LENGTH:
        errors.append(
            _error(
                "name",
                f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters",
            )
        )

    if not (category or "").strip():
        errors.append(_error("category", "Category is required"))

    if price is None:
        errors.append(_error("price", "Price is required"))
    elif not price.is_finite() or price < MIN_PRICE:
        errors.append(_error("price", "Price must be greater than 0"))
    elif _decimal_places(price.normalize()) > PRICE_DECIMAL_PLACES:
        errors.append(
            _error("price", f"Price must have at most {PRICE_DECIMAL_PLACES} decimals")
        )

    if quantity is None:
        errors.append(_error("quantity", "Quantity is required"))
    elif isinstance(quantity, bool) or not isinstance(quantity, int):
        errors.append(_error("quantity", "Quantity must be an integer"))
    elif quantity < 0:
        errors.append(_error("quantity", "Quantity cannot be negative"))

    clean_description = (description or "").strip()
    if not clean_description:
        errors.append(_error("description", "Description is required"))
    elif (
        not DESCRIPTION_MIN_LENGTH
        <= len(clean_description)
        <= DESCRIPTION_MAX_LENGTH
    ):
        errors.append(
            _error(
                "description",
                "Description must be between "
                f"{DESCRIPTION_MIN_LENGTH} and {DESCRIPTION_MAX_LENGTH} characters",
            )
        )

    return errors
