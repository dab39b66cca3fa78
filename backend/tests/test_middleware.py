"""Request log context."""

import pytest
import structlog
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from autocat.core.middleware import RequestLoggingMiddleware


def _app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)

    @app.get("/context")
    async def context():
        return structlog.contextvars.get_contextvars()

    return app


@pytest.mark.asyncio
async def test_request_binds_caller_to_log_context():
    async with AsyncClient(transport=ASGITransport(app=_app()), base_url="http://test") as ac:
        response = await ac.get("/context", headers={"X-User-Id": "user-1"})

    assert response.status_code == 200
    assert response.json() == {"user_id": "user-1", "method": "GET", "path": "/context"}
    assert structlog.contextvars.get_contextvars() == {}


@pytest.mark.asyncio
async def test_anonymous_request_has_no_user_id():
    async with AsyncClient(transport=ASGITransport(app=_app()), base_url="http://test") as ac:
        response = await ac.get("/context")

    assert response.json()["user_id"] is None
