"""Graph View Routes — HTTP round trips for view sessions.

Invariants:
    - POST /views runs the first load before responding (201)
    - Load failures return 200 with the failure text and last_error_code
    - Edges serialize with vis-network from/to keys
    - Unknown view ids return the structured 404 envelope
    - The registry closes the oldest session once max_views are open
"""

import json
from uuid import uuid4

from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

import bomviz.api.routes.graph_view as graph_view_routes
from bomviz.api.error_handlers import register_error_handlers
from bomviz.api.routes.graph_view import _views
from bomviz.config import Settings
from bomviz.core.domain_types import DETAILS_LOAD_FAILED, DETAILS_PROMPT


async def test_create_view_runs_first_load(client, graph_server, two_node_document):
    graph_server["routes"]["data/graph.json"] = (200, two_node_document)
    res = await client.post("/api/v1/views", json={})
    assert res.status_code == 201
    body = res.json()
    assert body["details"] == DETAILS_PROMPT
    assert body["fit_generation"] == 1
    assert "last_error_code" not in body
    assert [n["id"] for n in body["graph"]["nodes"]] == ["a", "b"]
    edge = body["graph"]["edges"][0]
    assert (edge["id"], edge["from"], edge["to"]) == ("e1", "a", "b")
    assert "label" not in body["graph"]["nodes"][0]


async def test_create_view_forwards_query_string(client, graph_server, two_node_document):
    graph_server["routes"]["data/graph.json?l=Component"] = (200, two_node_document)
    res = await client.post("/api/v1/views", json={"query": "?l=Component"})
    assert res.json()["path"] == "data/graph.json?l=Component"
    assert len(res.json()["graph"]["nodes"]) == 2


async def test_create_view_with_404_reports_failure(client):
    res = await client.post("/api/v1/views", json={})
    assert res.status_code == 201
    body = res.json()
    assert body["details"] == DETAILS_LOAD_FAILED
    assert body["last_error_code"] == "TRANSPORT_ERROR"
    assert body["graph"] == {"nodes": [], "edges": []}


async def test_malformed_document_reports_parse_error(client, graph_server):
    graph_server["routes"]["data/graph.json"] = (200, {
        "nodes": [{"id": "a"}], "edges": [{"id": "e2"}],
    })
    body = (await client.post("/api/v1/views", json={})).json()
    assert body["last_error_code"] == "PARSE_ERROR"
    assert body["graph"]["nodes"] == []


async def test_numeric_labels_and_titles_render(client, graph_server):
    graph_server["routes"]["data/graph.json"] = (200, {
        "nodes": [{"id": "a", "label": 42}, {"id": "b", "attributes": {"title": 7}}],
        "edges": [{"id": "e1", "source": "a", "target": "b", "label": 3}],
    })
    res = await client.post("/api/v1/views", json={})
    assert res.status_code == 201
    body = res.json()
    assert "last_error_code" not in body
    assert body["graph"]["nodes"][0]["label"] == "42"
    assert body["graph"]["nodes"][1]["title"] == "7"
    assert body["graph"]["edges"][0]["label"] == "3"

    again = await client.get(f"/api/v1/views/{body['id']}")
    assert again.status_code == 200


async def test_float_ids_load_and_select(client, graph_server):
    graph_server["routes"]["data/graph.json"] = (200, {
        "nodes": [{"id": 1.5, "version": "2.0"}, {"id": 2}],
        "edges": [{"id": 0.5, "source": 1.5, "target": 2}],
    })
    body = (await client.post("/api/v1/views", json={})).json()
    assert "last_error_code" not in body
    assert [n["id"] for n in body["graph"]["nodes"]] == [1.5, 2]
    edge = body["graph"]["edges"][0]
    assert (edge["id"], edge["from"], edge["to"]) == (0.5, 1.5, 2)

    res = await client.post(f"/api/v1/views/{body['id']}/select", json={"nodes": [1.5]})
    assert json.loads(res.json()["content"]) == {"version": "2.0"}


async def test_get_view_returns_current_state(client, graph_server, bom_document):
    graph_server["routes"]["data/graph.json"] = (200, bom_document)
    view_id = (await client.post("/api/v1/views", json={})).json()["id"]
    res = await client.get(f"/api/v1/views/{view_id}")
    assert res.status_code == 200
    assert len(res.json()["graph"]["nodes"]) == 3


async def test_select_node_returns_attributes(client, graph_server, bom_document):
    graph_server["routes"]["data/graph.json"] = (200, bom_document)
    view_id = (await client.post("/api/v1/views", json={})).json()["id"]
    res = await client.post(
        f"/api/v1/views/{view_id}/select", json={"nodes": ["component-2"], "edges": []},
    )
    assert res.status_code == 200
    assert json.loads(res.json()["content"]) == {
        "name": "libfoo", "version": "1.2", "license": "MIT",
    }


async def test_select_nothing_returns_prompt(client, graph_server, bom_document):
    graph_server["routes"]["data/graph.json"] = (200, bom_document)
    view_id = (await client.post("/api/v1/views", json={})).json()["id"]
    await client.post(f"/api/v1/views/{view_id}/select", json={"nodes": ["project-1"]})
    res = await client.post(f"/api/v1/views/{view_id}/select", json={})
    assert res.json()["content"] == DETAILS_PROMPT


async def test_load_refetches_and_keeps_graph_on_failure(client, graph_server, bom_document):
    graph_server["routes"]["data/graph.json"] = (200, bom_document)
    view_id = (await client.post("/api/v1/views", json={})).json()["id"]

    graph_server["routes"]["data/graph.json"] = (500, "boom")
    res = await client.post(f"/api/v1/views/{view_id}/load")
    body = res.json()
    assert body["details"] == DETAILS_LOAD_FAILED
    assert len(body["graph"]["nodes"]) == 3
    assert body["fit_generation"] == 1


async def test_load_with_new_query(client, graph_server, bom_document, two_node_document):
    graph_server["routes"]["data/graph.json"] = (200, bom_document)
    graph_server["routes"]["data/graph.json?m=1"] = (200, two_node_document)
    view_id = (await client.post("/api/v1/views", json={})).json()["id"]
    body = (await client.post(f"/api/v1/views/{view_id}/load", json={"query": "?m=1"})).json()
    assert body["path"] == "data/graph.json?m=1"
    assert {n["id"] for n in body["graph"]["nodes"]} == {"a", "b"}


async def test_reload_does_not_refetch(client, graph_server, two_node_document):
    graph_server["routes"]["data/graph.json"] = (200, two_node_document)
    view_id = (await client.post("/api/v1/views", json={})).json()["id"]
    body = (await client.post(f"/api/v1/views/{view_id}/reload")).json()
    assert graph_server["requests"] == ["data/graph.json"]
    assert body["fit_generation"] == 2


async def test_options_endpoint(client, graph_server, two_node_document):
    graph_server["routes"]["data/graph.json"] = (200, two_node_document)
    view_id = (await client.post("/api/v1/views", json={})).json()["id"]
    res = await client.get(f"/api/v1/views/{view_id}/options")
    assert res.json()["physics"]["barnesHut"]["springLength"] == 150


async def test_delete_view(client, graph_server, two_node_document):
    graph_server["routes"]["data/graph.json"] = (200, two_node_document)
    view_id = (await client.post("/api/v1/views", json={})).json()["id"]
    res = await client.delete(f"/api/v1/views/{view_id}")
    assert res.status_code == 204
    assert _views == {}
    assert (await client.get(f"/api/v1/views/{view_id}")).status_code == 404


async def test_unknown_view_returns_structured_404(client):
    res = await client.get(f"/api/v1/views/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_invalid_selection_body_returns_400(client, graph_server, two_node_document):
    graph_server["routes"]["data/graph.json"] = (200, two_node_document)
    view_id = (await client.post("/api/v1/views", json={})).json()["id"]
    res = await client.post(f"/api/v1/views/{view_id}/select", json={"nodes": "n1"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_health_and_readiness(client):
    assert (await client.get("/api/v1/health/")).json()["status"] == "healthy"
    ready = await client.get("/api/v1/health/ready")
    assert ready.status_code == 200
    assert ready.json()["checks"]["http_client"] == "open"


async def test_oldest_view_closed_when_registry_full(
    client, graph_server, two_node_document, monkeypatch,
):
    monkeypatch.setattr(
        graph_view_routes, "get_settings", lambda: Settings(_env_file=None, max_views=2),
    )
    graph_server["routes"]["data/graph.json"] = (200, two_node_document)
    ids = [(await client.post("/api/v1/views", json={})).json()["id"] for _ in range(3)]

    assert len(_views) == 2
    assert (await client.get(f"/api/v1/views/{ids[0]}")).status_code == 404
    assert (await client.get(f"/api/v1/views/{ids[2]}")).status_code == 200


async def test_unhandled_exception_returns_internal_envelope():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret detail")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        res = await c.get("/boom")

    assert res.status_code == 500
    error = res.json()["error"]
    assert (error["code"], error["category"]) == ("INTERNAL_ERROR", "internal")
    assert "secret" not in res.text
