"""
============================================================
TARJETA CRC - infrastructure/repositories/postgres/sweet.py
============================================================
Class: PostgresSweetRepository

Responsibilities:
  - CRUD del catálogo sobre la tabla `sweets`.
  - Traducir SweetSearch a SQL con la misma semántica que el repo in-memory:
      name ILIKE %term%, category =, price BETWEEN inclusivo.
  - adjust_quantity como UPDATE condicional (una sola sentencia):
      SET quantity = quantity + delta WHERE id = ... AND quantity + delta >= 0
    Dos compras concurrentes nunca dejan stock negativo.

Collaborators:
  - psycopg_pool.ConnectionPool
  - domain.entities.Sweet / domain.value_objects.SweetSearch

Constraints / Notes:
  - SQL parametrizado siempre (el término de búsqueda se escapa para ILIKE).
  - Orden estable: created_at ASC, id ASC.
  - price NUMERIC(10,2) <-> Decimal sin pasar por float.
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional
from uuid import UUID

from psycopg_pool import ConnectionPool

from ....crosscutting.logger import logger
from ....domain.entities import Sweet
from ....domain.value_objects import SweetSearch
from ...db.errors import DatabaseError

_SWEET_COLUMNS = (
    "id, name, category, price, quantity, description, created_at, updated_at"
)
_SWEET_ORDER_BY = "created_at ASC, id ASC"


def _row_to_sweet(row: tuple) -> Sweet:
    return Sweet(
        id=row[0],
        name=row[1],
        category=row[2],
        price=row[3],
        quantity=row[4],
        description=row[5],
        created_at=row[6],
        updated_at=row[7],
    )


def _escape_like(term: str) -> str:
    """Escapa comodines de LIKE para que el término sea literal."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def build_search_query(criteria: SweetSearch) -> tuple[str, list[object]]:
    """Construye WHERE dinámico (cláusulas fijas, valores parametrizados)."""
    clauses: list[str] = []
    params: list[object] = []

    if criteria.name is not None:
        clauses.append("name ILIKE %s")
        params.append(f"%{_escape_like(criteria.name)}%")
    if criteria.category is not None:
        clauses.append("category = %s")
        params.append(criteria.category)
    if criteria.min_price is not None:
        clauses.append("price >= %s")
        params.append(criteria.min_price)
    if criteria.max_price is not None:
        clauses.append("price <= %s")
        params.append(criteria.max_price)

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    query = f"SELECT {_SWEET_COLUMNS} FROM sweets {where} ORDER BY {_SWEET_ORDER_BY}"
    return query, params


class PostgresSweetRepository:
    """Repositorio de productos sobre PostgreSQL."""

    def __init__(self, pool: ConnectionPool | None = None) -> None:
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
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}") from exc

    def _fetchall(
        self,
        *,
        query: str,
        params: Iterable[object] = (),
        log_msg: str,
        log_extra: dict[str, object],
    ) -> list[tuple]:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            logger.exception(log_msg, extra={**log_extra, "error": str(exc)})
            raise DatabaseError(f"{log_msg}: {exc}") from exc

    # --- Lectura ---
    def get_sweet(self, sweet_id: UUID) -> Optional[Sweet]:
        row = self._fetchone(
            query=f"SELECT {_SWEET_COLUMNS} FROM sweets WHERE id = %s",
            params=(sweet_id,),
            log_msg="PostgresSweetRepository: get_sweet failed",
            log_extra={"sweet_id": str(sweet_id)},
        )
        return _row_to_sweet(row) if row else None

    def list_sweets(self) -> List[Sweet]:
        rows = self._fetchall(
            query=f"SELECT {_SWEET_COLUMNS} FROM sweets ORDER BY {_SWEET_ORDER_BY}",
            log_msg="PostgresSweetRepository: list_sweets failed",
            log_extra={},
        )
        return [_row_to_sweet(r) for r in rows]

    def search_sweets(self, criteria: SweetSearch) -> List[Sweet]:
        query, params = build_search_query(criteria)
        rows = self._fetchall(
            query=query,
            params=params,
            log_msg="PostgresSweetRepository: search_sweets failed",
            log_extra={"search_name": criteria.name, "category": criteria.category},
        )
        return [_row_to_sweet(r) for r in rows]

    # --- Escritura ---
    def save_sweet(self, sweet: Sweet) -> Sweet:
        row = self._fetchone(
            query=f"""
                INSERT INTO sweets (
                    id, name, category, price, quantity, description,
                    created_at, updated_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                ON CONFLICT (id) DO UPDATE SET
                    name = EXCLUDED.name,
                    category = EXCLUDED.category,
                    price = EXCLUDED.price,
                    quantity = EXCLUDED.quantity,
                    description = EXCLUDED.description,
                    updated_at = EXCLUDED.updated_at
                RETURNING {_SWEET_COLUMNS}
            """,
            params=(
                sweet.id,
                sweet.name,
                sweet.category,
                sweet.price,
                sweet.quantity,
                sweet.description,
                sweet.created_at,
                sweet.updated_at,
            ),
            log_msg="PostgresSweetRepository: save_sweet failed",
            log_extra={"sweet_id": str(sweet.id)},
        )
        if not row:
            raise DatabaseError(
                "PostgresSweetRepository: save_sweet failed (no row returned)"
            )
        return _row_to_sweet(row)

    def delete_sweet(self, sweet_id: UUID) -> bool:
        row = self._fetchone(
            query="DELETE FROM sweets WHERE id = %s RETURNING id",
            params=(sweet_id,),
            log_msg="PostgresSweetRepository: delete_sweet failed",
            log_extra={"sweet_id": str(sweet_id)},
        )
        return row is not None

    def adjust_quantity(
        self, sweet_id: UUID, delta: int, *, updated_at: datetime
    ) -> Optional[Sweet]:
        row = self._fetchone(
            query=f"""
                UPDATE sweets
                SET quantity = quantity + %s,
                    updated_at = %s
                WHERE id = %s
                  AND quantity + %s >= 0
                RETURNING {_SWEET_COLUMNS}
            """,
            params=(delta, updated_at, sweet_id, delta),
            log_msg="PostgresSweetRepository: adjust_quantity failed",
            log_extra={"sweet_id": str(sweet_id), "delta": delta},
        )
        return _row_to_sweet(row) if row else None

    def ping(self) -> bool:
        row = self._fetchone(
            query="SELECT 1",
            params=(),
            log_msg="PostgresSweetRepository: ping failed",
            log_extra={},
        )
        return row is not None
