"""Pytest configuration for flp-preview tests."""

from collections.abc import Callable
from typing import Any

import httpx
import pytest

BASE_URL = "http://preview.test"


@pytest.fixture
def anyio_backend():
    """Configure anyio to use asyncio backend only."""
    return "asyncio"


@pytest.fixture
def requests() -> list[httpx.Request]:
    """Requests seen by the mock backend."""
    return []


@pytest.fixture
def make_client(requests) -> Callable[[dict[str, Any]], httpx.AsyncClient]:
    """Build an AsyncClient backed by httpx.MockTransport.

    Routes map a URL path to one of:
    - dict/list: served as a 200 JSON response
    - httpx.Response: returned as-is
    - Exception: raised while sending
    Unknown paths return 404.
    """

    def factory(routes: dict[str, Any]) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            route = routes.get(request.url.path)
            if route is None:
                return httpx.Response(404, text="Not Found")
            if isinstance(route, Exception):
                raise route
            if isinstance(route, httpx.Response):
                return route
            return httpx.Response(200, json=route)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)

    return factory


def build_manifest(libs=None, components=None, usages=None) -> dict[str, Any]:
    """Build a manifest.json with the given dependency sections."""
    ui5: dict[str, Any] = {}
    if libs is not None or components is not None:
        ui5["dependencies"] = {}
        if libs is not None:
            ui5["dependencies"]["libs"] = {name: {} for name in libs}
        if components is not None:
            ui5["dependencies"]["components"] = {name: {} for name in components}
    if usages is not None:
        ui5["componentUsages"] = {name: {"name": name} for name in usages}
    return {"_version": "1.12.0", "sap.app": {"id": "test.app"}, "sap.ui5": ui5}


@pytest.fixture
def manifest():
    """Factory for manifest.json documents."""
    return build_manifest
