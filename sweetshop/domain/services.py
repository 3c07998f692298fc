"""
===============================================================================
TARJETA CRC - domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios Externos (Protocols)

Responsabilidades:
    - Definir contratos para las capacidades criptográficas opacas:
        * PasswordHasher: encode/verify one-way.
        * TokenService: emitir/verificar tokens firmados con expiración.
    - Proteger a application de detalles del proveedor (argon2, PyJWT).

Colaboradores:
    - identity/auth_users.py: implementaciones concretas.
    - application/identity_service.py: consume PasswordHasher.
    - identity/access_control.py: consume TokenService.

Reglas:
    - SOLO interfaces: nada de implementación.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """Token emitido + vida útil en milisegundos."""

    token: str
    expires_in_ms: int


class PasswordHasher(Protocol):
    """Contrato para hashear/verificar passwords."""

    def hash(self, password: str) -> str:
        ...

    def verify(self, password: str, password_hash: str) -> bool:
        """False si no coincide (nunca levanta por mismatch)."""
        ...


class TokenService(Protocol):
    """Contrato para emitir/verificar tokens de identidad."""

    def issue(self, username: str) -> IssuedToken:
        ...

    def verify(self, token: str) -> str:
        """
        Devuelve el subject (username).

        Levanta UnauthenticatedError si el token es inválido, está mal formado
        o expiró (fail closed).
        """
        ...
