"""
Tests for shared permissions dependencies (the route guards).

Guards are called directly with a mock request and a resolved user, the way
FastAPI calls them once get_optional_user has run.
"""

import logging
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient

from shiftsync.core.entities import User
from shiftsync.shared.exceptions import ForbiddenError, NotAuthenticatedError
from shiftsync.shared.permissions.dependencies import (
    permission_denied_message,
    require_admin,
    require_authenticated,
    require_permission,
    require_self_or_permission,
    require_super_admin,
    require_venue_access,
)
from shiftsync.shared.permissions.models import Permission
from tests.fixtures.storage_fixtures import (
    ADMIN_ID,
    EMPLOYEE_ID,
    HARBOUR_CAFE_ID,
    MAIN_BAR_ID,
    MANAGER_ID,
)
from tests.helpers.route_testing import RouteTestHelper


class TestRequirePermission:
    """Test the require_permission dependency factory."""

    @pytest.mark.asyncio
    async def test_role_permission_passes(self, manager_user: User):
        guard = require_permission(Permission.VIEW_ALL_SHIFTS)

        result = await guard(request=RouteTestHelper.build_request(), user=manager_user)

        assert result is manager_user

    @pytest.mark.asyncio
    async def test_super_admin_passes(self, owner_user: User):
        guard = require_permission(Permission.SYSTEM_SETTINGS)

        result = await guard(request=RouteTestHelper.build_request(), user=owner_user)

        assert result is owner_user

    @pytest.mark.asyncio
    async def test_granted_permission_passes(self, employee_user: User):
        employee_user.permissions = [Permission.SEND_MASS_MESSAGES]
        guard = require_permission(Permission.SEND_MASS_MESSAGES)

        result = await guard(request=RouteTestHelper.build_request(), user=employee_user)

        assert result is employee_user

    @pytest.mark.asyncio
    async def test_missing_permission_forbidden(self, employee_user: User):
        guard = require_permission(Permission.VIEW_ALL_USERS)

        with pytest.raises(ForbiddenError) as exc_info:
            await guard(request=RouteTestHelper.build_request(), user=employee_user)

        assert exc_info.value.status_code == 403
        assert exc_info.value.detail == (
            "You don't have permission to perform this action (view_all_users required)"
        )

    @pytest.mark.asyncio
    async def test_denial_is_logged(self, employee_user: User, caplog):
        guard = require_permission(Permission.MANAGE_USERS)
        request = RouteTestHelper.build_request(method="POST", path="/api/users")

        with caplog.at_level(logging.INFO, logger="shiftsync.shared.permissions"):
            with pytest.raises(ForbiddenError):
                await guard(request=request, user=employee_user)

        assert "Denied POST /api/users for user 4" in caplog.text


class TestRequireVenueAccess:
    """Test the require_venue_access dependency factory."""

    @pytest.mark.asyncio
    async def test_assigned_venue_passes(self, employee_user: User):
        request = RouteTestHelper.build_request(path_params={"venueId": "1"})

        result = await require_venue_access()(request=request, user=employee_user)

        assert result is employee_user

    @pytest.mark.asyncio
    async def test_other_venue_forbidden(self, employee_user: User):
        request = RouteTestHelper.build_request(query_params={"venueId": "2"})

        with pytest.raises(ForbiddenError) as exc_info:
            await require_venue_access()(request=request, user=employee_user)

        assert exc_info.value.detail == "You don't have access to this venue"

    @pytest.mark.asyncio
    async def test_venue_in_body(self, manager_user: User):
        request = RouteTestHelper.build_request(body={"venueId": 2}, method="POST")

        with pytest.raises(ForbiddenError):
            await require_venue_access()(request=request, user=manager_user)

    @pytest.mark.asyncio
    async def test_no_venue_context_passes(self, employee_user: User):
        request = RouteTestHelper.build_request(body={"title": "Close"})

        result = await require_venue_access()(request=request, user=employee_user)

        assert result is employee_user

    @pytest.mark.asyncio
    async def test_custom_param_name(self, employee_user: User):
        request = RouteTestHelper.build_request(
            path_params={"id": "2", "venueId": "1"}
        )

        with pytest.raises(ForbiddenError):
            await require_venue_access("id")(request=request, user=employee_user)

    @pytest.mark.asyncio
    async def test_admin_roles_pass_any_venue(
        self, admin_user: User, it_user: User, owner_user: User
    ):
        request = RouteTestHelper.build_request(path_params={"venueId": "99"})

        for user in (admin_user, it_user, owner_user):
            assert await require_venue_access()(request=request, user=user) is user


class TestRequireAdmin:
    @pytest.mark.asyncio
    async def test_admin_roles_pass(
        self, admin_user: User, it_user: User, owner_user: User
    ):
        for user in (admin_user, it_user, owner_user):
            result = await require_admin(
                request=RouteTestHelper.build_request(), user=user
            )
            assert result is user

    @pytest.mark.asyncio
    async def test_manager_forbidden(self, manager_user: User):
        with pytest.raises(ForbiddenError) as exc_info:
            await require_admin(request=RouteTestHelper.build_request(), user=manager_user)

        assert exc_info.value.detail == "Administrator privileges required"

    @pytest.mark.asyncio
    async def test_granted_permissions_do_not_make_an_admin(self, employee_user: User):
        employee_user.permissions = list(Permission)

        with pytest.raises(ForbiddenError):
            await require_admin(
                request=RouteTestHelper.build_request(), user=employee_user
            )


class TestRequireSuperAdmin:
    @pytest.mark.asyncio
    async def test_owner_passes(self, owner_user: User):
        result = await require_super_admin(
            request=RouteTestHelper.build_request(), user=owner_user
        )

        assert result is owner_user

    @pytest.mark.asyncio
    async def test_admin_forbidden(self, admin_user: User):
        with pytest.raises(ForbiddenError) as exc_info:
            await require_super_admin(
                request=RouteTestHelper.build_request(), user=admin_user
            )

        assert exc_info.value.detail == "Owner privileges required"


class TestRequireSelfOrPermission:
    """Test the require_self_or_permission dependency factory."""

    @pytest.mark.asyncio
    async def test_self_access_without_permission(self, employee_user: User):
        guard = require_self_or_permission("id", Permission.VIEW_ALL_USERS)
        request = RouteTestHelper.build_request(path_params={"id": "4"})

        result = await guard(request=request, user=employee_user)

        assert result is employee_user

    @pytest.mark.asyncio
    @pytest.mark.parametrize("permission", list(Permission))
    async def test_self_access_for_any_permission(
        self, employee_user: User, permission: Permission
    ):
        guard = require_self_or_permission("userId", permission)
        request = RouteTestHelper.build_request(query_params={"userId": "4"})

        assert await guard(request=request, user=employee_user) is employee_user

    @pytest.mark.asyncio
    async def test_other_user_forbidden(self, employee_user: User):
        guard = require_self_or_permission("id", Permission.VIEW_ALL_USERS)
        request = RouteTestHelper.build_request(path_params={"id": "5"})

        with pytest.raises(ForbiddenError) as exc_info:
            await guard(request=request, user=employee_user)

        assert exc_info.value.detail == permission_denied_message(
            Permission.VIEW_ALL_USERS
        )

    @pytest.mark.asyncio
    async def test_other_user_with_permission(self, manager_user: User):
        guard = require_self_or_permission("id", Permission.VIEW_ALL_USERS)
        request = RouteTestHelper.build_request(path_params={"id": "5"})

        assert await guard(request=request, user=manager_user) is manager_user

    @pytest.mark.asyncio
    async def test_no_target_passes(self, employee_user: User):
        guard = require_self_or_permission()

        result = await guard(request=RouteTestHelper.build_request(), user=employee_user)

        assert result is employee_user


class TestUnauthenticated:
    """Anonymous requests are rejected before any guard-specific check."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "guard",
        [
            require_permission(Permission.VIEW_ALL_USERS),
            require_venue_access(),
            require_admin,
            require_super_admin,
            require_self_or_permission("id", Permission.VIEW_ALL_USERS),
        ],
    )
    async def test_guards_reject_anonymous(self, guard):
        request = RouteTestHelper.build_request(path_params={"id": "4", "venueId": "1"})

        with pytest.raises(NotAuthenticatedError) as exc_info:
            await guard(request=request, user=None)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Unauthorized"
        request.body.assert_not_called()

    @pytest.mark.asyncio
    async def test_require_authenticated(self, employee_user: User):
        assert await require_authenticated(user=employee_user) is employee_user

        with pytest.raises(NotAuthenticatedError):
            await require_authenticated(user=None)


class TestGuardChains:
    """Guards declared on real routes, exercised through the app."""

    def test_anonymous_request_gets_plain_401(self, client: TestClient):
        for method, url in [
            ("get", "/api/users"),
            ("get", "/api/users/4"),
            ("get", "/api/venues/1"),
            ("patch", "/api/venues/1"),
            ("get", "/api/shifts"),
            ("get", "/api/till-verifications"),
        ]:
            response = getattr(client, method)(url)

            assert response.status_code == 401, url
            assert response.json() == {"detail": "Unauthorized"}

    def test_first_failing_guard_wins(
        self, client: TestClient, auth_headers: Callable[[int], Dict[str, str]]
    ):
        """The manager lacks MANAGE_VENUES, so the venue guard never runs."""
        response = client.patch(
            f"/api/venues/{HARBOUR_CAFE_ID}",
            json={"name": "Renamed"},
            headers=auth_headers(MANAGER_ID),
        )

        assert response.status_code == 403
        assert response.json()["detail"] == permission_denied_message(
            Permission.MANAGE_VENUES
        )

    def test_all_guards_pass(
        self, client: TestClient, auth_headers: Callable[[int], Dict[str, str]]
    ):
        response = client.patch(
            f"/api/venues/{MAIN_BAR_ID}",
            json={"name": "Main Bar & Grill"},
            headers=auth_headers(ADMIN_ID),
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Main Bar & Grill"

    def test_venue_guard_reads_query_string(
        self, client: TestClient, auth_headers: Callable[[int], Dict[str, str]]
    ):
        response = client.get(
            "/api/shifts",
            params={"venueId": HARBOUR_CAFE_ID},
            headers=auth_headers(EMPLOYEE_ID),
        )

        assert response.status_code == 403
        assert response.json()["detail"] == "You don't have access to this venue"
