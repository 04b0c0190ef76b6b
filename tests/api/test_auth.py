# This file tests the API key gate in front of every route.
# It exists to confirm missing keys, wrong keys, and correct keys are answered consistently.

from __future__ import annotations

import pytest

from tests.api.support import AUTH_HEADERS, FakeDBClient, api_test_client, build_test_config

PROTECTED_PATHS = [
    "/prices?area=legs&bundle=single&sex=F",
    "/prices/by-size?size=medium",
    "/prices/bundles",
    "/bundles/80",
    "/health",
    "/metrics",
    "/does-not-exist",
]


@pytest.mark.parametrize("path", PROTECTED_PATHS)
def test_missing_api_key_returns_401(path: str) -> None:
    db = FakeDBClient()
    with api_test_client(db_client=db) as client:
        response = client.get(path)

    assert response.status_code == 401
    assert response.json() == {"error": "Missing API key"}
    assert db.calls == []


@pytest.mark.parametrize("path", PROTECTED_PATHS)
def test_wrong_api_key_returns_403(path: str) -> None:
    db = FakeDBClient()
    with api_test_client(db_client=db) as client:
        response = client.get(path, headers={"x-api-key": "not-the-secret"})

    assert response.status_code == 403
    assert response.json() == {"error": "Invalid API key"}
    assert db.calls == []


def test_empty_api_key_counts_as_missing() -> None:
    with api_test_client() as client:
        response = client.get("/prices/bundles", headers={"x-api-key": ""})

    assert response.status_code == 401


def test_api_key_comparison_is_exact() -> None:
    with api_test_client() as client:
        response = client.get("/health", headers={"x-api-key": AUTH_HEADERS["x-api-key"].upper()})

    assert response.status_code == 403


def test_header_name_lookup_is_case_insensitive() -> None:
    with api_test_client() as client:
        response = client.get("/health", headers={"X-API-Key": AUTH_HEADERS["x-api-key"]})

    assert response.status_code == 200


def test_custom_header_name_is_honoured() -> None:
    config = build_test_config(api_key_header="x-clinic-key")
    with api_test_client(config=config) as client:
        default_header = client.get("/health", headers=AUTH_HEADERS)
        custom_header = client.get("/health", headers={"x-clinic-key": AUTH_HEADERS["x-api-key"]})

    assert default_header.status_code == 401
    assert custom_header.status_code == 200


def test_rejected_requests_still_carry_request_id() -> None:
    with api_test_client() as client:
        response = client.get("/prices/bundles", headers={"x-request-id": "req-123"})

    assert response.status_code == 401
    assert response.headers["x-request-id"] == "req-123"
