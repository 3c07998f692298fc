"""
===============================================================================
TARJETA CRC - domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Mantener estable el "surface area" del dominio.

Colaboradores:
    - domain.entities: Sweet
    - domain.repositories: Puertos de persistencia
    - domain.services: Puertos criptográficos
    - domain.value_objects: SweetSearch

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import Sweet
from .repositories import SweetRepository, UserRepository
from .services import IssuedToken, PasswordHasher, TokenService
from .value_objects import SweetSearch

__all__ = [
    # Entities
    "Sweet",
    # Repository Interfaces (Ports)
    "SweetRepository",
    "UserRepository",
    # Service Interfaces (Ports)
    "IssuedToken",
    "PasswordHasher",
    "TokenService",
    # Value Objects
    "SweetSearch",
]
