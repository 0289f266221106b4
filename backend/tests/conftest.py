"""
Handlewrap — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── make_request:  Builds a bare Starlette Request (no server needed)
    ├── error_sink:    In-memory text sink for translated errors
    ├── markers:       Ordered list middleware/handlers append to
    ├── marking:       Factory for middleware that record pre/post markers
    └── test_client:   HTTPX AsyncClient bound to the demo application
"""

import io
import os
from typing import Callable, List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

# Keep test output quiet and deterministic before handlewrap reads settings.
os.environ["HANDLEWRAP_LOG_LEVEL"] = "WARNING"
os.environ["HANDLEWRAP_ERROR_SINK"] = "stderr"

from handlewrap.middleware.chain import Handler, Middleware  # noqa: E402
from handlewrap.response import ResponseWriter  # noqa: E402


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """
    Provides a factory for minimal HTTP requests.

    Usage:
        request = make_request("/notes/42", method="DELETE")
    """

    def _make(path: str = "/", method: str = "GET") -> Request:
        scope = {
            "type": "http",
            "method": method,
            "path": path,
            "raw_path": path.encode(),
            "query_string": b"",
            "headers": [],
        }
        return Request(scope)

    return _make


@pytest.fixture
def error_sink() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def markers() -> List[str]:
    return []


@pytest.fixture
def marking(markers) -> Callable[[str], Middleware]:
    """
    Provides a factory for middleware that record their execution order.

    marking("m1") appends "m1" before delegating and "m1-post" afterwards,
    even when the inner handler raises.
    """

    def _middleware(name: str) -> Middleware:
        def mw(next_handler: Handler) -> Handler:
            async def handler(w: ResponseWriter, request: Request) -> None:
                markers.append(name)
                try:
                    await next_handler(w, request)
                finally:
                    markers.append(f"{name}-post")

            return handler

        return mw

    return _middleware


@pytest.fixture
def terminal(markers) -> Handler:
    """Terminal handler that records "terminal" and writes "ok"."""

    async def handler(w: ResponseWriter, request: Request) -> None:
        markers.append("terminal")
        w.write("ok")

    return handler


@pytest_asyncio.fixture
async def test_client():
    """
    Provides an async HTTP test client for the demo application.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from handlewrap.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
