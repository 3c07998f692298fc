"""
===============================================================================
CRC CARD - infrastructure/db/errors.py
===============================================================================

Componente:
  Errores tipados del Pool/Conectividad y de consultas

Responsabilidades:
  - Evitar RuntimeError genéricos.
  - Dar semántica clara: "no inicializado", "ya inicializado", etc.
  - DatabaseError: falla de query que la API traduce a 503.
===============================================================================
"""

from ...domain.errors import InternalError


class DatabasePoolError(Exception):
    """Base de errores de pool de base de datos."""


class PoolAlreadyInitializedError(DatabasePoolError):
    """Se intentó inicializar el pool más de una vez."""


class PoolNotInitializedError(DatabasePoolError):
    """Se intentó usar el pool sin init_pool()."""


class DatabaseConnectionError(DatabasePoolError):
    """Error al adquirir o validar una conexión del pool."""


class DatabaseError(InternalError):
    """Falla de lectura/escritura contra PostgreSQL (no se reintenta)."""

    error_code: str = "DATABASE_ERROR"
