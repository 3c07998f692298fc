"""
===============================================================================
TARJETA CRC - identity/access_control.py
===============================================================================

Módulo:
    Dependencias FastAPI de autenticación/autorización

Responsabilidades:
    - Extraer el token Bearer del header Authorization.
    - Verificarlo con TokenService (fail closed -> UnauthenticatedError).
    - Delegar la decisión de rol al guard puro `authorize`.
    - Dejar el usuario en request.state.user y el username en el contexto de logs.

Colaboradores:
    - identity.auth_users.extract_bearer_token
    - application.authorization.authorize
    - container: get_identity_service / get_token_service

Notas:
    - require_user(): cualquier identidad autenticada.
    - require_role(UserRole.ADMIN): solo admins.
===============================================================================
"""

from __future__ import annotations

from typing import Callable

from fastapi import Depends, Header, Request

from ..application.authorization import authorize
from ..application.identity_service import IdentityService
from ..container import get_identity_service, get_token_service
from ..context import set_username
from ..domain.errors import UnauthenticatedError
from ..domain.services import TokenService
from .auth_users import extract_bearer_token
from .users import User, UserRole


def _resolve_identity(authorization: str | None, tokens: TokenService) -> str:
    token = extract_bearer_token(authorization)
    if not token:
        raise UnauthenticatedError("Missing Bearer token")
    return tokens.verify(token)


def _guard(required_role: UserRole | None) -> Callable:
    def dependency(
        request: Request,
        authorization: str | None = Header(None, alias="Authorization"),
        tokens: TokenService = Depends(get_token_service),
        identity_service: IdentityService = Depends(get_identity_service),
    ) -> User:
        identity = _resolve_identity(authorization, tokens)
        user = authorize(
            identity, required_role, identity_service=identity_service
        )
        request.state.user = user
        set_username(user.username)
        return user

    return dependency


def require_user() -> Callable:
    """Dependency FastAPI: requiere usuario autenticado por JWT."""
    return _guard(None)


def require_role(role: UserRole | str) -> Callable:
    """Dependency FastAPI: requiere un rol específico de usuario."""
    return _guard(UserRole(role))
