"""
Name: Authorization Guard Tests

Responsibilities:
  - Validate the order of checks in authorize()
  - Validate admin-only decisions and "any authenticated user"
"""

from uuid import uuid4

import pytest
from sweetshop.application.authorization import authorize
from sweetshop.domain.entities import utcnow
from sweetshop.domain.errors import (
    ForbiddenError,
    InvalidCredentialsError,
    UnauthenticatedError,
)
from sweetshop.identity.users import User, UserRole

pytestmark = pytest.mark.unit


@pytest.fixture
def admin(user_repo, password_hasher):
    return user_repo.save_user(
        User(
            id=uuid4(),
            username="admin",
            email="admin@example.com",
            password_hash=password_hasher.hash("admin123"),
            role=UserRole.ADMIN,
            created_at=utcnow(),
        )
    )


@pytest.mark.parametrize("identity", [None, ""])
def test_missing_identity_is_unauthenticated(identity_service, identity):
    with pytest.raises(UnauthenticatedError, match="Authentication required"):
        authorize(identity, None, identity_service=identity_service)


def test_unknown_user_propagates_lookup_failure(identity_service):
    with pytest.raises(InvalidCredentialsError, match="User not found"):
        authorize("ghost", None, identity_service=identity_service)


def test_regular_user_passes_without_required_role(identity_service):
    identity_service.register("alice", "alice@example.com", "secret1")

    user = authorize("alice", None, identity_service=identity_service)

    assert user.username == "alice"
    assert user.role == UserRole.USER


def test_regular_user_is_forbidden_for_admin_role(identity_service):
    identity_service.register("alice", "alice@example.com", "secret1")

    with pytest.raises(ForbiddenError, match="Only admins can perform this action"):
        authorize("alice", UserRole.ADMIN, identity_service=identity_service)


def test_admin_passes_admin_role(identity_service, admin):
    user = authorize("admin", UserRole.ADMIN, identity_service=identity_service)

    assert user == admin
    assert user.is_admin
