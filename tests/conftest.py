"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (APP_ENV=test, no .env file)
  - Provide in-memory repositories and fast crypto doubles
  - Provide ready-to-use application services

Collaborators:
  - pytest: Test framework
  - sweetshop.infrastructure.repositories.in_memory: stores
  - sweetshop.application: services under test

Notes:
  - Env vars are set BEFORE importing sweetshop: the logger reads settings
    at import time.
  - Use @pytest.fixture(scope="function") for per-test isolation
"""

import os
import sys
from decimal import Decimal
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

os.environ["APP_ENV"] = "test"
os.environ.setdefault("JWT_SECRET", "test-secret-for-unit-tests")
os.environ.setdefault("LOG_JSON", "true")

from sweetshop.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None
app_config.get_settings.cache_clear()

from argon2 import PasswordHasher as _Argon2  # noqa: E402

from sweetshop.application.identity_service import IdentityService  # noqa: E402
from sweetshop.application.inventory_service import InventoryService  # noqa: E402
from sweetshop.domain.entities import Sweet  # noqa: E402
from sweetshop.identity.auth_users import (  # noqa: E402
    Argon2PasswordHasher,
    AuthSettings,
    JWTTokenService,
)
from sweetshop.infrastructure.repositories.in_memory import (  # noqa: E402
    InMemorySweetRepository,
    InMemoryUserRepository,
)


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Crypto doubles
# ============================================================================


@pytest.fixture
def password_hasher() -> Argon2PasswordHasher:
    """R: Real Argon2 with minimal cost (fast tests)."""
    return Argon2PasswordHasher(
        _Argon2(time_cost=1, memory_cost=8, parallelism=1, hash_len=16)
    )


@pytest.fixture
def token_service() -> JWTTokenService:
    return JWTTokenService(
        AuthSettings(jwt_secret="test-secret-for-unit-tests", jwt_access_ttl_minutes=30)
    )


# ============================================================================
# Stores + services
# ============================================================================


@pytest.fixture
def user_repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def sweet_repo() -> InMemorySweetRepository:
    return InMemorySweetRepository()


@pytest.fixture
def identity_service(user_repo, password_hasher) -> IdentityService:
    return IdentityService(users=user_repo, password_hasher=password_hasher)


@pytest.fixture
def inventory_service(sweet_repo) -> InventoryService:
    return InventoryService(sweets=sweet_repo)


@pytest.fixture
def gummy_bears() -> Sweet:
    """R: Sample product (not persisted)."""
    return Sweet(
        name="Gummy Bears",
        category="Gummies",
        price=Decimal("2.99"),
        quantity=50,
        description="Fruity gummy bears in five flavours",
    )
