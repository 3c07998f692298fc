"""
===============================================================================
TARJETA CRC - identity/auth_users.py
===============================================================================

Módulo:
    Primitivas de Autenticación (Argon2 + JWT)

Responsabilidades:
    - Hashear/verificar passwords (Argon2).
    - Emitir JWT de acceso con expiración (access token).
    - Decodificar y validar JWT (firma, exp, claims mínimos, typ).
    - Extraer token desde Authorization: Bearer.

Colaboradores:
    - domain.services: PasswordHasher / TokenService (contratos que implementa).
    - crosscutting.config.get_settings: secreto y TTL.
    - domain.errors.UnauthenticatedError: fallas de token (fail closed).

Decisiones de diseño:
    - La lógica criptográfica vive acá (borde de identidad), NO en dominio.
    - Claims mínimos: sub (username), iat, exp, typ.
    - No loguear secretos ni tokens.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from ..crosscutting.config import get_settings
from ..domain.errors import UnauthenticatedError
from ..domain.services import IssuedToken

# ---------------------------------------------------------------------------
# Constantes (evitan strings mágicos)
# ---------------------------------------------------------------------------

JWT_ALGORITHM: str = "HS256"

CLAIM_SUB: str = "sub"
CLAIM_IAT: str = "iat"
CLAIM_EXP: str = "exp"
CLAIM_TYP: str = "typ"

TOKEN_TYPE_ACCESS: str = "access"


@dataclass(frozen=True, slots=True)
class AuthSettings:
    """Settings de auth (snapshot)."""

    jwt_secret: str
    jwt_access_ttl_minutes: int


def get_auth_settings() -> AuthSettings:
    """Construye un snapshot de settings de auth."""
    s = get_settings()
    return AuthSettings(
        jwt_secret=s.jwt_secret,
        jwt_access_ttl_minutes=s.jwt_access_ttl_minutes,
    )


# ---------------------------------------------------------------------------
# Passwords (Argon2)
# ---------------------------------------------------------------------------


class Argon2PasswordHasher:
    """Implementación de PasswordHasher sobre argon2-cffi."""

    def __init__(self, hasher: PasswordHasher | None = None):
        self._hasher = hasher or PasswordHasher()

    def hash(self, password: str) -> str:
        return self._hasher.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self._hasher.verify(password_hash, password)
        except (VerifyMismatchError, VerificationError, InvalidHashError):
            return False


# ---------------------------------------------------------------------------
# Tokens JWT (emitir / decodificar)
# ---------------------------------------------------------------------------


class JWTTokenService:
    """Implementación de TokenService con PyJWT (HS256)."""

    def __init__(self, settings: AuthSettings | None = None):
        self._settings = settings or get_auth_settings()

    @property
    def ttl_seconds(self) -> int:
        return int(self._settings.jwt_access_ttl_minutes * 60)

    def issue(self, username: str) -> IssuedToken:
        """Firma un access token para `username`."""
        now = datetime.now(timezone.utc)
        expires_in = self.ttl_seconds

        payload: dict[str, object] = {
            CLAIM_SUB: username,
            CLAIM_IAT: int(now.timestamp()),
            CLAIM_EXP: int((now + timedelta(seconds=expires_in)).timestamp()),
            CLAIM_TYP: TOKEN_TYPE_ACCESS,
        }

        token = jwt.encode(
            payload, self._settings.jwt_secret, algorithm=JWT_ALGORITHM
        )
        return IssuedToken(token=token, expires_in_ms=expires_in * 1000)

    def verify(self, token: str) -> str:
        """Valida firma/exp/claims y devuelve el username (sub)."""
        try:
            payload = jwt.decode(
                token,
                self._settings.jwt_secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": [CLAIM_SUB, CLAIM_EXP, CLAIM_IAT]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise UnauthenticatedError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise UnauthenticatedError("Invalid token") from exc

        if payload.get(CLAIM_TYP) != TOKEN_TYPE_ACCESS:
            raise UnauthenticatedError("Invalid token type")

        username = payload.get(CLAIM_SUB)
        if not isinstance(username, str) or not username.strip():
            raise UnauthenticatedError("Invalid token")
        return username


# ---------------------------------------------------------------------------
# Extracción de token (header)
# ---------------------------------------------------------------------------


def extract_bearer_token(authorization: str | None) -> str | None:
    """Extrae token desde `Authorization: Bearer <token>`."""
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    token = parts[1].strip()
    return token or None
