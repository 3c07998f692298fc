"""
CRC - domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for the domain layer (ports).
- Keep the application layer independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing (fake repositories).

Collaborators
- domain.entities: Sweet
- domain.value_objects: SweetSearch
- identity.users: User
- infrastructure.repositories: postgres.*, in_memory.* implementations

Constraints
- Pure interfaces only: no side effects, no infrastructure imports, no SQL.
- Implementations MUST match method signatures exactly.
- "Not found" is expressed as None / False, never as an exception.

Notes
- We use typing.Protocol for structural subtyping ("duck typing").
- Outputs are concrete lists for predictable iteration/serialization.
"""

from datetime import datetime
from typing import List, Optional, Protocol
from uuid import UUID

from ..identity.users import User
from .entities import Sweet
from .value_objects import SweetSearch


class UserRepository(Protocol):
    """
    R: Interface for the credential store.

    Implementations must enforce username/email uniqueness at write time
    (raising DuplicateIdentityError) so concurrent registrations cannot both win.
    """

    def get_user_by_username(self, username: str) -> Optional[User]:
        """R: Fetch a user by exact username."""
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Fetch a user by exact email."""
        ...

    def save_user(self, user: User) -> User:
        """R: Insert a new user and return the stored record."""
        ...


class SweetRepository(Protocol):
    """
    R: Interface for the catalog store.

    Capability set: get / list / search / save / delete, plus a conditional
    quantity update used by purchase and restock.
    """

    def get_sweet(self, sweet_id: UUID) -> Optional[Sweet]:
        """R: Fetch a single sweet by ID."""
        ...

    def list_sweets(self) -> List[Sweet]:
        """R: Snapshot of the whole catalog (store-native order)."""
        ...

    def search_sweets(self, criteria: SweetSearch) -> List[Sweet]:
        """R: Sweets matching every supplied criterion (AND)."""
        ...

    def save_sweet(self, sweet: Sweet) -> Sweet:
        """R: Insert or wholesale-replace a sweet (upsert by id)."""
        ...

    def delete_sweet(self, sweet_id: UUID) -> bool:
        """R: Delete a sweet. Returns False if it did not exist."""
        ...

    def adjust_quantity(
        self, sweet_id: UUID, delta: int, *, updated_at: datetime
    ) -> Optional[Sweet]:
        """
        R: Atomically apply quantity += delta and refresh updated_at.

        The write only happens if the resulting quantity is >= 0.

        Returns:
            The updated Sweet, or None if the sweet does not exist or the
            change would make the quantity negative.
        """
        ...

    def ping(self) -> bool:
        """R: Health probe for readiness checks."""
        ...
