"""
===============================================================================
POLICY: Authorization Guard
===============================================================================

Name:
    authorize(identity, required_role)

Reglas (en orden):
    1) identity ausente               -> UnauthenticatedError
    2) usuario inexistente            -> InvalidCredentialsError (propaga)
    3) required_role != user.role     -> ForbiddenError
    4) OK                             -> devuelve el User (sin side effects)

    required_role=None significa "cualquier identidad autenticada".

Collaborators:
    - IdentityService.lookup_by_username
    - identity.access_control (dependencias FastAPI que llaman a esta función)
===============================================================================
"""

from __future__ import annotations

from ..crosscutting.logger import logger
from ..domain.errors import ForbiddenError, UnauthenticatedError
from ..identity.users import User, UserRole
from .identity_service import IdentityService

MSG_AUTH_REQUIRED = "Authentication required"
MSG_ADMIN_ONLY = "Only admins can perform this action"


def authorize(
    identity: str | None,
    required_role: UserRole | None,
    *,
    identity_service: IdentityService,
) -> User:
    if not identity:
        raise UnauthenticatedError(MSG_AUTH_REQUIRED)

    user = identity_service.lookup_by_username(identity)

    if required_role is not None and user.role != required_role:
        logger.warning(
            "Authorization denied",
            extra={
                "username": user.username,
                "role": user.role.value,
                "required_role": UserRole(required_role).value,
            },
        )
        raise ForbiddenError(MSG_ADMIN_ONLY)

    return user
