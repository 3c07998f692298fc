"""
===============================================================================
TARJETA CRC - identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario (JWT)

Responsabilidades:
    - Definir el enum de roles de usuario para autenticación/autorización.
    - Definir el dataclass User utilizado por registro, login y el guard de roles.

Colaboradores:
    - application/identity_service.py: crea y autentica usuarios.
    - application/authorization.py: compara User.role con el rol requerido.
    - infrastructure/repositories/*/user.py: mapean filas -> User.

Notas:
    - Este módulo NO contiene lógica de negocio: solo "shapes" de datos.
    - El rol es inmutable una vez creado el usuario (no hay endpoint de cambio).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class UserRole(str, Enum):
    """Roles soportados para autenticación JWT."""

    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True, slots=True)
class User:
    """Registro de usuario (el password solo se guarda como hash)."""

    id: UUID
    username: str
    email: str
    password_hash: str
    role: UserRole
    created_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
