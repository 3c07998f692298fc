# infrastructure/repositories/__init__.py
"""
============================================================
TARJETA CRC - infrastructure/repositories/__init__.py
============================================================
Module: infrastructure.repositories (Public Export Surface)

Responsibilities:
  - Exponer una API pública y estable de repositorios de infraestructura.
  - Centralizar imports/exports para evitar paths largos.

Policy:
  - Este archivo NO contiene lógica de negocio.
  - Solo re-exporta la variante in-memory: la de Postgres se importa
    explícitamente desde `postgres` (requiere psycopg instalado y pool activo).
============================================================
"""

from .in_memory import InMemorySweetRepository, InMemoryUserRepository

__all__ = [
    "InMemorySweetRepository",
    "InMemoryUserRepository",
]
