"""
===============================================================================
TARJETA CRC - sweetshop/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, servicios, adapters) siguiendo DIP.
  - Exponer factories para FastAPI (Depends) y para scripts.
  - Mantener singletons con caching (lru_cache).
  - Elegir backend de persistencia según Settings (memory / postgres).

Colaboradores:
  - crosscutting.config.get_settings
  - domain.repositories.* / domain.services.* (puertos)
  - infrastructure.repositories.* / identity.auth_users (implementaciones)
  - application.* (servicios)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from functools import lru_cache

from .application.identity_service import IdentityService
from .application.inventory_service import InventoryService
from .crosscutting.config import get_settings
from .domain.repositories import SweetRepository, UserRepository
from .domain.services import PasswordHasher, TokenService
from .identity.auth_users import Argon2PasswordHasher, JWTTokenService
from .infrastructure.repositories import (
    InMemorySweetRepository,
    InMemoryUserRepository,
)

# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Repositorio de usuarios (in-memory en test/memory; Postgres en runtime)."""
    if get_settings().uses_postgres():
        from .infrastructure.repositories.postgres import PostgresUserRepository

        return PostgresUserRepository()
    return InMemoryUserRepository()


@lru_cache(maxsize=1)
def get_sweet_repository() -> SweetRepository:
    """Repositorio del catálogo (in-memory en test/memory; Postgres en runtime)."""
    if get_settings().uses_postgres():
        from .infrastructure.repositories.postgres import PostgresSweetRepository

        return PostgresSweetRepository()
    return InMemorySweetRepository()


# =============================================================================
# Servicios de identidad (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_password_hasher() -> PasswordHasher:
    return Argon2PasswordHasher()


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    return JWTTokenService()


# =============================================================================
# Servicios de aplicación
# =============================================================================


def get_identity_service() -> IdentityService:
    return IdentityService(
        users=get_user_repository(),
        password_hasher=get_password_hasher(),
    )


def get_inventory_service() -> InventoryService:
    return InventoryService(sweets=get_sweet_repository())


def reset_container() -> None:
    """Limpia los singletons (tests / cambio de settings en caliente)."""
    get_user_repository.cache_clear()
    get_sweet_repository.cache_clear()
    get_password_hasher.cache_clear()
    get_token_service.cache_clear()
