"""
===============================================================================
TARJETA CRC - sweetshop/api/auth_routes.py (Registro y Autenticación)
===============================================================================

Responsabilidades:
  - Exponer endpoints de identidad: register / login / me.
  - Validar el payload (username 3-50, email válido, password 6-128).
  - Emitir el token de acceso y devolver AuthResponse (camelCase).

Patrones aplicados:
  - Adapter / Presentation Layer: traduce HTTP <-> IdentityService.
  - Fail-safe security: si la autenticación falla, se deniega por defecto.

Colaboradores:
  - application.identity_service.IdentityService
  - domain.services.TokenService (JWT)
  - identity.access_control.require_user
===============================================================================
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from ..application.identity_service import IdentityService
from ..container import get_identity_service, get_token_service
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..domain.services import TokenService
from ..identity.access_control import require_user
from ..identity.users import User, UserRole

router = APIRouter(prefix="/auth", tags=["auth"], responses=OPENAPI_ERROR_RESPONSES)

TOKEN_TYPE_BEARER = "Bearer"


# -----------------------------------------------------------------------------
# Modelos HTTP (DTOs)
# -----------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=128)


class AuthResponse(_CamelModel):
    token: str
    token_type: str = TOKEN_TYPE_BEARER
    username: str
    email: str
    role: UserRole
    expires_in: int


class UserResponse(_CamelModel):
    id: UUID
    username: str
    email: str
    role: UserRole


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------


def _to_auth_response(user: User, tokens: TokenService) -> AuthResponse:
    issued = tokens.issue(user.username)
    return AuthResponse(
        token=issued.token,
        username=user.username,
        email=user.email,
        role=user.role,
        expires_in=issued.expires_in_ms,
    )


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------


@router.post(
    "/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
def register(
    req: RegisterRequest,
    identity: IdentityService = Depends(get_identity_service),
    tokens: TokenService = Depends(get_token_service),
):
    """Registra un usuario (rol USER) y devuelve un token de acceso."""
    user = identity.register(req.username, str(req.email), req.password)
    return _to_auth_response(user, tokens)


@router.post("/login", response_model=AuthResponse)
def login(
    req: LoginRequest,
    identity: IdentityService = Depends(get_identity_service),
    tokens: TokenService = Depends(get_token_service),
):
    user = identity.authenticate(req.username, req.password)
    return _to_auth_response(user, tokens)


@router.get("/me", response_model=UserResponse)
def me(user: User = Depends(require_user())):
    """Devuelve el usuario autenticado."""
    return UserResponse(
        id=user.id, username=user.username, email=user.email, role=user.role
    )
