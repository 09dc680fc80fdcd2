"""Tests for daemon/middleware.py module.

Covers:
- RequestIdMiddleware
- Error rendering per category
"""

from __future__ import annotations

import pytest
from starlette.testclient import TestClient

from lootledger.core.errors import ErrorCategory
from lootledger.daemon.middleware import HTTP_STATUS


class TestHttpStatus:
    def test_every_category_mapped(self) -> None:
        assert set(HTTP_STATUS) == set(ErrorCategory)

    @pytest.mark.parametrize(
        ("category", "status"),
        [
            (ErrorCategory.NOT_FOUND, 404),
            (ErrorCategory.INVALID_INPUT, 400),
            (ErrorCategory.CONFLICT, 409),
            (ErrorCategory.NO_MATCHING_ITEM, 422),
            (ErrorCategory.UPSTREAM_FAILURE, 502),
        ],
    )
    def test_distinct_statuses(self, category: ErrorCategory, status: int) -> None:
        assert HTTP_STATUS[category] == status


class TestRequestIdMiddleware:
    def test_generates_request_id(self, client: TestClient) -> None:
        response = client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 12

    def test_echoes_incoming_request_id(self, client: TestClient) -> None:
        response = client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_error_responses_carry_request_id(self, client: TestClient) -> None:
        response = client.get("/members/nope", headers={"X-Request-ID": "err-1"})
        assert response.status_code == 404
        assert response.headers["X-Request-ID"] == "err-1"


class TestErrorRendering:
    def test_not_found_body(self, client: TestClient) -> None:
        body = client.get("/members/nope").json()
        assert body["code"] == 1001
        assert body["category"] == "not_found"
        assert body["details"] == {"member_id": "nope"}

    def test_validation_error_body(self, client: TestClient) -> None:
        response = client.post("/members", json={"name": "Alice", "shoeSize": 9})
        assert response.status_code == 400
        body = response.json()
        assert body["category"] == "invalid_input"
        assert body["details"]["errors"][0]["field"] == "shoeSize"

    def test_invalid_json_body(self, client: TestClient) -> None:
        response = client.post(
            "/members", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_VALUE"
