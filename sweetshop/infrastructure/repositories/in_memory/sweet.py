"""
============================================================
TARJETA CRC - infrastructure/repositories/in_memory/sweet.py
============================================================
Class: InMemorySweetRepository

Responsibilities:
  - Almacenar el catálogo en memoria (tests / local dev).
  - Implementar búsqueda con la misma semántica que Postgres (SweetSearch.matches).
  - adjust_quantity atómico: leer + chequear + escribir bajo el mismo lock.

Collaborators:
  - domain.entities.Sweet
  - domain.value_objects.SweetSearch
  - domain.repositories.SweetRepository (contrato a implementar)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: Sweet es mutable, el caller nunca recibe la instancia
    guardada.
  - Orden de listado: orden de inserción.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from threading import Lock
from typing import Dict, List, Optional
from uuid import UUID

from ....domain.entities import Sweet
from ....domain.value_objects import SweetSearch


class InMemorySweetRepository:
    """Repositorio in-memory, thread-safe, para productos."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._sweets: Dict[UUID, Sweet] = {}

    def get_sweet(self, sweet_id: UUID) -> Optional[Sweet]:
        with self._lock:
            sweet = self._sweets.get(sweet_id)
            return replace(sweet) if sweet is not None else None

    def list_sweets(self) -> List[Sweet]:
        with self._lock:
            return [replace(s) for s in self._sweets.values()]

    def search_sweets(self, criteria: SweetSearch) -> List[Sweet]:
        with self._lock:
            return [replace(s) for s in self._sweets.values() if criteria.matches(s)]

    def save_sweet(self, sweet: Sweet) -> Sweet:
        with self._lock:
            self._sweets[sweet.id] = replace(sweet)
            return replace(sweet)

    def delete_sweet(self, sweet_id: UUID) -> bool:
        with self._lock:
            return self._sweets.pop(sweet_id, None) is not None

    def adjust_quantity(
        self, sweet_id: UUID, delta: int, *, updated_at: datetime
    ) -> Optional[Sweet]:
        with self._lock:
            sweet = self._sweets.get(sweet_id)
            if sweet is None or sweet.quantity + delta < 0:
                return None
            sweet.quantity += delta
            sweet.touch(at=updated_at)
            return replace(sweet)

    def ping(self) -> bool:
        return True
