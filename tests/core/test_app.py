"""
tests/core/test_app.py

Application wiring: root endpoint, security headers and error rendering.
"""

import pytest
from httpx import AsyncClient

from gladiator.core.exceptions import GladiatorError, TransportError


@pytest.mark.asyncio
async def test_root_endpoint_sets_security_headers(async_client: AsyncClient):
    response = await async_client.get("/")

    assert response.status_code == 200
    assert response.json() == {"detail": "Welcome to the Gladiator Jobs API"}
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


@pytest.mark.asyncio
async def test_transport_error_is_rendered_as_503(async_client: AsyncClient, store, monkeypatch):
    async def unavailable(table, filters=None, order_by=None):
        raise TransportError()

    monkeypatch.setattr(store, "fetch_all", unavailable)

    response = await async_client.get("/professionals")

    assert response.status_code == 503
    assert response.json() == {
        "error": {
            "kind": "transport",
            "code": "transport",
            "message": "The data service is unavailable",
        }
    }


def test_error_to_dict_uses_code_override():
    error = GladiatorError("boom", code="custom")
    assert error.to_dict() == {"kind": "error", "code": "custom", "message": "boom"}
