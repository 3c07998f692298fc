"""
============================================================
TARJETA CRC - infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar usuarios en memoria (tests / local dev).
  - Imponer unicidad de username y email al escribir (como los UNIQUE de Postgres).

Collaborators:
  - identity.users.User
  - domain.repositories.UserRepository (contrato a implementar)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - User es inmutable (frozen): se puede compartir sin copias.
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from ....domain.errors import DuplicateIdentityError
from ....identity.users import User


class InMemoryUserRepository:
    """Repositorio in-memory, thread-safe, para usuarios."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[UUID, User] = {}

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return next(
                (u for u in self._users.values() if u.username == username), None
            )

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return next((u for u in self._users.values() if u.email == email), None)

    def save_user(self, user: User) -> User:
        with self._lock:
            existing = list(self._users.values())
            if any(u.username == user.username for u in existing):
                raise DuplicateIdentityError("Username already exists")
            if any(u.email == user.email for u in existing):
                raise DuplicateIdentityError("Email already exists")
            self._users[user.id] = user
            return user
