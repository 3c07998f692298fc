"""
===============================================================================
SERVICE: Identity (register / authenticate / lookup)
===============================================================================

Name:
    IdentityService

Business Goal:
    Administrar el ciclo de vida de credenciales:
      - registrar usuarios nuevos (siempre con rol USER)
      - autenticar por username + password
      - resolver un usuario por username (para el guard de autorización)

-------------------------------------------------------------------------------
CRC CARD (Class-Responsibility-Collaborator)
-------------------------------------------------------------------------------
Class:
    IdentityService

Responsibilities:
    - Garantizar unicidad de username y email (username se chequea primero).
    - Hashear el password antes de persistir (nunca texto plano).
    - No revelar qué parte del login falló (usuario vs password).

Collaborators:
    - UserRepository (puerto de persistencia)
    - PasswordHasher (puerto criptográfico)

Error Mapping:
    - DuplicateIdentityError: username o email ya registrados
    - InvalidCredentialsError: login fallido / usuario inexistente
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4

from ..crosscutting.logger import logger
from ..domain.entities import utcnow
from ..domain.errors import DuplicateIdentityError, InvalidCredentialsError
from ..domain.repositories import UserRepository
from ..domain.services import PasswordHasher
from ..identity.users import User, UserRole

MSG_USERNAME_TAKEN = "Username already exists"
MSG_EMAIL_TAKEN = "Email already exists"
MSG_INVALID_LOGIN = "Invalid username or password"
MSG_USER_NOT_FOUND = "User not found"


class IdentityService:
    """Application service para registro y autenticación."""

    def __init__(self, users: UserRepository, password_hasher: PasswordHasher):
        self._users = users
        self._hasher = password_hasher

    def register(self, username: str, email: str, password: str) -> User:
        """
        Crea un usuario con rol USER.

        El store vuelve a validar unicidad al escribir: si dos registros
        concurrentes pasan el chequeo, el segundo falla con DuplicateIdentityError.
        """
        if self._users.get_user_by_username(username) is not None:
            raise DuplicateIdentityError(MSG_USERNAME_TAKEN)
        if self._users.get_user_by_email(email) is not None:
            raise DuplicateIdentityError(MSG_EMAIL_TAKEN)

        user = User(
            id=uuid4(),
            username=username,
            email=email,
            password_hash=self._hasher.hash(password),
            role=UserRole.USER,
            created_at=utcnow(),
        )
        saved = self._users.save_user(user)
        logger.info(
            "User registered",
            extra={"user_id": str(saved.id), "username": saved.username},
        )
        return saved

    def authenticate(self, username: str, password: str) -> User:
        user = self._users.get_user_by_username(username)
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.warning("Login failed", extra={"username": username})
            raise InvalidCredentialsError(MSG_INVALID_LOGIN)
        return user

    def lookup_by_username(self, username: str) -> User:
        user = self._users.get_user_by_username(username)
        if user is None:
            raise InvalidCredentialsError(MSG_USER_NOT_FOUND)
        return user
