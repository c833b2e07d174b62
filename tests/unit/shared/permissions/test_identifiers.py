"""
Tests for identifier lookup in shiftsync/shared/permissions/identifiers.py
"""

import pytest

from shiftsync.shared.permissions.identifiers import extract_identifier, parse_identifier
from tests.helpers.route_testing import RouteTestHelper


class TestParseIdentifier:
    """Values convert exactly as an ``int`` route parameter would."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (1, 1),
            (42, 42),
            ("7", 7),
            ("+5", 5),
            ("5.0", 5),
            (5.0, 5),
            ("0", 0),
            ("-3", -3),
        ],
    )
    def test_values_accepted_by_routes(self, value, expected):
        assert parse_identifier(value) == expected

    @pytest.mark.parametrize(
        "value",
        [None, "", "abc", "1.5", 1.5, [1], {"id": 1}],
    )
    def test_values_rejected_by_routes(self, value):
        assert parse_identifier(value) is None


class TestExtractIdentifier:
    """Path params win over the query string, which wins over the body."""

    @pytest.mark.asyncio
    async def test_path_param(self):
        request = RouteTestHelper.build_request(
            path_params={"venueId": "1"},
            query_params={"venueId": "2"},
            body={"venueId": 3},
        )

        assert await extract_identifier(request, "venueId") == 1

    @pytest.mark.asyncio
    async def test_query_param(self):
        request = RouteTestHelper.build_request(
            query_params={"venueId": "2"}, body={"venueId": 3}
        )

        assert await extract_identifier(request, "venueId") == 2

    @pytest.mark.asyncio
    async def test_body(self):
        request = RouteTestHelper.build_request(body={"venueId": 3})

        assert await extract_identifier(request, "venueId") == 3

    @pytest.mark.asyncio
    async def test_body_is_not_read_when_query_matches(self):
        request = RouteTestHelper.build_request(
            query_params={"venueId": "2"}, body={"venueId": 3}
        )

        await extract_identifier(request, "venueId")

        request.body.assert_not_called()

    @pytest.mark.asyncio
    async def test_unusable_value_falls_through(self):
        """Values a route would reject do not hide a usable one further down."""
        request = RouteTestHelper.build_request(
            path_params={"venueId": "abc"},
            query_params={"venueId": ""},
            body={"venueId": "5"},
        )

        assert await extract_identifier(request, "venueId") == 5

    @pytest.mark.asyncio
    async def test_signed_path_value_is_not_skipped(self):
        request = RouteTestHelper.build_request(
            path_params={"venueId": "+2"}, query_params={"venueId": "1"}
        )

        assert await extract_identifier(request, "venueId") == 2

    @pytest.mark.asyncio
    async def test_other_names_are_ignored(self):
        request = RouteTestHelper.build_request(
            path_params={"id": "1"}, body={"userId": 9}
        )

        assert await extract_identifier(request, "venueId") is None
        assert await extract_identifier(request, "userId") == 9

    @pytest.mark.asyncio
    async def test_no_body(self):
        request = RouteTestHelper.build_request()

        assert await extract_identifier(request, "venueId") is None
        request.json.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [b"not json", b"[1, 2]", b'"venueId"'])
    async def test_body_that_is_not_an_object(self, body: bytes):
        request = RouteTestHelper.build_request(body=body)

        assert await extract_identifier(request, "venueId") is None
