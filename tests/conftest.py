"""
Global pytest configuration and fixtures for the ShiftSync API test suite.
"""

import os

# Settings are read on import, so the environment must be set first
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only-32-chars"
os.environ["SEED_ADMIN_ENABLED"] = "false"

from typing import Callable, Dict, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from shiftsync.core.database import get_storage  # noqa: E402
from shiftsync.core.storage import MemStorage  # noqa: E402
from shiftsync.main import app  # noqa: E402
from tests.helpers.route_testing import RouteTestHelper  # noqa: E402

# Import fixtures from fixture modules
from tests.fixtures.storage_fixtures import *  # noqa: F403, F401, E402
from tests.fixtures.user_fixtures import *  # noqa: F403, F401, E402


@pytest.fixture
def client(populated_storage: MemStorage) -> Generator[TestClient, None, None]:
    """
    FastAPI test client backed by the populated storage.

    The storage dependency is overridden, so requests never touch the
    process-wide store.
    """
    app.dependency_overrides[get_storage] = lambda: populated_storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(populated_storage: MemStorage) -> Callable[[int], Dict[str, str]]:
    """Build bearer headers for a stored user by id."""

    def _headers(user_id: int) -> Dict[str, str]:
        user = populated_storage.users.get(user_id)
        assert user is not None, f"No stored user with id {user_id}"
        return RouteTestHelper.bearer_headers(user)

    return _headers
