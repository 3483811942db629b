"""Service test fixtures — fake graph server + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory graph server (httpx.MockTransport)
    - http_manager initialized against the fake server (ASGITransport skips lifespan)
    - View registry emptied after each test

Design Decisions:
    - MockTransport over a live server: no sockets, requests recorded for assertions
    - graph_server["routes"] keyed by path plus query, so query-string tests are exact
"""

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

import bomviz.infrastructure.http_client as http_module
from bomviz.api.routes.graph_view import _views
from bomviz.infrastructure.graph_loader import GraphLoader
from bomviz.main import app


@pytest.fixture
def graph_server():
    """Fake graph host. Set routes[path_with_query] = (status, body)."""
    routes: dict[str, tuple[int, object]] = {}
    requests: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        key = request.url.raw_path.decode().lstrip("/")
        requests.append(key)
        status, body = routes.get(key, (404, "not found"))
        if isinstance(body, (dict, list)):
            return httpx.Response(status, json=body)
        return httpx.Response(status, text=str(body))

    return {
        "routes": routes,
        "requests": requests,
        "transport": httpx.MockTransport(handler),
    }


@pytest.fixture
async def loader(graph_server):
    async with httpx.AsyncClient(
        base_url="http://graphs.test/", transport=graph_server["transport"],
    ) as client:
        yield GraphLoader(client)


@pytest.fixture
async def client(graph_server):
    """FastAPI test client with the graph HTTP client pointed at the fake server."""
    original_manager = http_module.http_manager
    http_module.init_http_client(
        "http://graphs.test/", transport=graph_server["transport"],
    )

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    await http_module.close_http_client()
    http_module.http_manager = original_manager
    _views.clear()
