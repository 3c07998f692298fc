"""
===============================================================================
MÓDULO: Errores tipados del dominio (taxonomía de negocio)
===============================================================================

Objetivo
--------
Tener excepciones coherentes para todas las reglas de negocio, con:
- error_code estable (el cliente maneja por code, no por mensaje)
- error_id para correlación con logs
- message "humana" (sin filtrar secretos ni detalles internos)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  SweetShopError + subclases

Responsabilidades:
  - Estandarizar los fallos que levantan los servicios de aplicación
  - Transportar detalle por campo en errores de validación

Colaboradores:
  - application/* (levantan estos errores)
  - api/exception_handlers.py (mapea a RFC7807)
===============================================================================
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4


class SweetShopError(Exception):
    """
    Base para errores del sistema.

    Provee error_code + error_id + message. Las subclases solo fijan el code.
    """

    error_code: str = "SWEETSHOP_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class ValidationError(SweetShopError):
    """Input malformado o fuera de rango (con detalle por campo)."""

    error_code: str = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
        error_id: str | None = None,
    ):
        super().__init__(message, error_id=error_id)
        self.errors = list(errors or [])


class DuplicateIdentityError(SweetShopError):
    """Conflicto de registro: username o email ya existentes."""

    error_code: str = "CONFLICT"


class InvalidCredentialsError(SweetShopError):
    """
    Login o lookup de usuario fallido.

    Deliberadamente genérico: no distingue "usuario no existe" de
    "password incorrecto".
    """

    error_code: str = "INVALID_CREDENTIALS"


class NotFoundError(SweetShopError):
    """Recurso inexistente (producto por id)."""

    error_code: str = "NOT_FOUND"

    def __init__(self, resource: str, identifier: object):
        super().__init__(f"{resource} not found with id: {identifier}")
        self.resource = resource
        self.identifier = str(identifier)


class InsufficientStockError(SweetShopError):
    """La compra excede el stock disponible."""

    error_code: str = "INSUFFICIENT_STOCK"

    def __init__(self, requested: int, available: int):
        super().__init__("Insufficient quantity available")
        self.requested = requested
        self.available = available


class UnauthenticatedError(SweetShopError):
    """Token ausente, inválido o expirado."""

    error_code: str = "UNAUTHORIZED"


class ForbiddenError(SweetShopError):
    """El rol del usuario no alcanza para la operación."""

    error_code: str = "FORBIDDEN"


class InternalError(SweetShopError):
    """Falla inesperada (el mensaje expuesto siempre es genérico)."""

    error_code: str = "INTERNAL_ERROR"
