# =============================================================================
# FILE: application/dev_seed_admin.py
# =============================================================================
"""
===============================================================================
TASK: Dev Seed Admin (local / test only)
===============================================================================

Name:
    Dev Seed Admin

Qué es:
    Asegura que exista un usuario ADMIN para desarrollo cuando está configurado.
    El registro público siempre crea USER, así que esta es la vía para tener
    un admin en local sin tocar la base a mano.

Seguridad:
    - Guard estricto: solo corre si app_env es "local" o un entorno de test.

Patrones:
    - Task orchestration (seed)
    - Dependency Injection (repo + hasher)
    - Fail-fast guard (safety boundary)
    - Idempotencia (ensure-create)

CRC:
    Component: ensure_dev_admin
    Responsibilities:
      - Validar guard de ambiente
      - Crear el admin si no existe (por username)
    Collaborators:
      - UserRepository
      - PasswordHasher
      - Settings
===============================================================================
"""

from __future__ import annotations

from typing import Final
from uuid import uuid4

from ..crosscutting.config import TEST_ENVS, Settings
from ..crosscutting.logger import logger
from ..domain.entities import utcnow
from ..domain.repositories import UserRepository
from ..domain.services import PasswordHasher
from ..identity.users import User, UserRole

_ALLOWED_ENVS: Final[frozenset[str]] = frozenset({"local", *TEST_ENVS})


def _assert_allowed_environment(settings: Settings) -> None:
    env = (settings.app_env or "").strip().lower()
    if env not in _ALLOWED_ENVS:
        raise RuntimeError(
            f"FATAL: DEV_SEED_ADMIN is enabled but ENV is '{env}' "
            "(must be 'local' or a test environment)."
        )


def ensure_dev_admin(
    settings: Settings,
    *,
    user_repo: UserRepository,
    password_hasher: PasswordHasher,
) -> User | None:
    """
    Ensure a development admin user exists if configured.

    Returns the admin (created or existing), or None when the task is disabled.
    """
    if not settings.dev_seed_admin:
        return None

    _assert_allowed_environment(settings)

    username = (settings.dev_seed_admin_username or "").strip()
    email = (settings.dev_seed_admin_email or "").strip()
    password = settings.dev_seed_admin_password or ""
    if not username or not email or not password:
        raise ValueError(
            "Dev seed admin is enabled but username/email/password are empty"
        )

    existing = user_repo.get_user_by_username(username)
    if existing is not None:
        logger.info(
            "Dev seed admin: user exists; skipping", extra={"username": username}
        )
        return existing

    admin = user_repo.save_user(
        User(
            id=uuid4(),
            username=username,
            email=email,
            password_hash=password_hasher.hash(password),
            role=UserRole.ADMIN,
            created_at=utcnow(),
        )
    )
    logger.info(
        "Dev seed admin: user created",
        extra={"username": username, "role": UserRole.ADMIN.value},
    )
    return admin
