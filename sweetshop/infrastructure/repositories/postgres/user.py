"""
============================================================
TARJETA CRC - infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar usuarios por username / email.
  - Crear usuarios (INSERT ... RETURNING).
  - Traducir violaciones de UNIQUE (uq_users_username / uq_users_email)
    a DuplicateIdentityError: el store es el árbitro final de unicidad.
  - Mapear filas crudas -> entidad `User` y validar `UserRole`.
  - Exponer fallos consistentes vía `DatabaseError` con logging estructurado.

Collaborators:
  - psycopg_pool.ConnectionPool (pool de conexiones)
  - infrastructure.db.pool.get_pool (accesor del pool global)
  - identity.users.User / UserRole

Constraints / Notes:
  - Repositorio puro: NO define reglas de negocio.
  - Retorna None cuando no existe el recurso.
  - SQL parametrizado siempre.
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg import errors as pg_errors
from psycopg_pool import ConnectionPool

from ....crosscutting.logger import logger
from ....domain.errors import DuplicateIdentityError
from ....identity.users import User, UserRole
from ...db.errors import DatabaseError

_USER_COLUMNS = "id, username, email, password_hash, role, created_at"

# R: nombre de constraint (migración 001) -> mensaje de negocio.
_UNIQUE_MESSAGES = {
    "uq_users_username": "Username already exists",
    "uq_users_email": "Email already exists",
}


def _row_to_user(row: tuple) -> User:
    """Convierte una fila de `users` a `User` (role estricto)."""
    try:
        role = UserRole(row[4])
    except ValueError as exc:
        raise DatabaseError(f"Invalid user role in database: {row[4]}") from exc

    return User(
        id=row[0],
        username=row[1],
        email=row[2],
        password_hash=row[3],
        role=role,
        created_at=row[5],
    )


class PostgresUserRepository:
    """Repositorio de usuarios sobre PostgreSQL."""

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        # Pool inyectable (para tests); si es None se usa el global.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool
        from ...db.pool import get_pool

        return get_pool()

    def _fetchone(
        self,
        *,
        query: str,
        params: Iterable[object],
        log_msg: str,
        log_extra: dict[str, object],
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except pg_errors.UniqueViolation as exc:
            constraint = getattr(exc.diag, "constraint_name", None) or ""
            message = _UNIQUE_MESSAGES.get(constraint, "User already exists")
            logger.warning(log_msg, extra={**log_extra, "constraint": constraint})
            raise DuplicateIdentityError(message) from exc
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}") from exc

    # --- Lectura ---
    def get_user_by_username(self, username: str) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE username = %s",
            params=(username,),
            log_msg="PostgresUserRepository: get_user_by_username failed",
            log_extra={"username": username},
        )
        return _row_to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[User]:
        row = self._fetchone(
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s",
            params=(email,),
            log_msg="PostgresUserRepository: get_user_by_email failed",
            log_extra={"email": email},
        )
        return _row_to_user(row) if row else None

    # --- Escritura ---
    def save_user(self, user: User) -> User:
        row = self._fetchone(
            query=f"""
                INSERT INTO users (id, username, email, password_hash, role, created_at)
                VALUES (%s, %s, %s, %s, %s, %s)
                RETURNING {_USER_COLUMNS}
            """,
            params=(
                user.id,
                user.username,
                user.email,
                user.password_hash,
                user.role.value,
                user.created_at,
            ),
            log_msg="PostgresUserRepository: save_user failed",
            log_extra={"user_id": str(user.id), "username": user.username},
        )
        if not row:
            raise DatabaseError(
                "PostgresUserRepository: save_user failed (no row returned)"
            )
        return _row_to_user(row)
