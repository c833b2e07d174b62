"""
Test fixtures and factories for users of every role.

These users are plain entities and are not stored anywhere; use them for
evaluator and guard tests that never touch storage.
"""

from typing import List, Optional

import pytest

from shiftsync.core.entities import User
from shiftsync.core.enums import Permission, UserRole


class UserTestData:
    """Helper class for generating consistent user test data."""

    @staticmethod
    def build(
        user_id: int = 1,
        role: UserRole = UserRole.EMPLOYEE,
        assigned_venues: Optional[List[int]] = None,
        permissions: Optional[List[Permission]] = None,
        **overrides,
    ) -> User:
        """Build a User with sensible defaults."""
        data = {
            "id": user_id,
            "username": f"user{user_id}",
            "passwordHash": "not-a-real-hash",
            "fullName": f"Test User {user_id}",
            "email": f"user{user_id}@example.com",
            "role": role,
            "assignedVenues": assigned_venues or [],
            "permissions": permissions or [],
        }
        data.update(overrides)
        return User(**data)


@pytest.fixture
def owner_user() -> User:
    """Super admin with no venue assignments."""
    return UserTestData.build(1, UserRole.SUPER_ADMIN)


@pytest.fixture
def admin_user() -> User:
    """Admin with no venue assignments."""
    return UserTestData.build(2, UserRole.ADMIN)


@pytest.fixture
def manager_user() -> User:
    """Manager assigned to venue 1."""
    return UserTestData.build(3, UserRole.MANAGER, assigned_venues=[1])


@pytest.fixture
def employee_user() -> User:
    """Employee assigned to venue 1 with no granted permissions."""
    return UserTestData.build(4, UserRole.EMPLOYEE, assigned_venues=[1])


@pytest.fixture
def other_employee_user() -> User:
    """Employee assigned to venue 2."""
    return UserTestData.build(5, UserRole.EMPLOYEE, assigned_venues=[2])


@pytest.fixture
def supervisor_user() -> User:
    """Supervisor assigned to venue 1."""
    return UserTestData.build(6, UserRole.SUPERVISOR, assigned_venues=[1])


@pytest.fixture
def it_user() -> User:
    """IT support with no venue assignments."""
    return UserTestData.build(7, UserRole.IT)
