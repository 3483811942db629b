"""Graph View Routes — one view session per browser page.

Invariants:
    - Views are in-memory, keyed by UUID, created by POST /views
    - Load endpoints await the load task so the response reflects its outcome
    - Load failures are not HTTP errors: the view stays usable and reports
      the failure text plus last_error_code
    - Unknown view id → 404 structured error

Design Decisions:
    - _views as module-level dict: single-process uvicorn, state lost on restart
    - Registry capped at settings.max_views: abandoned pages never send DELETE,
      so the oldest session is closed to make room (insertion order = age)
    - Edge endpoints serialized as from/to, None fields omitted for the canvas
"""

import asyncio
import logging
from uuid import UUID, uuid4

from fastapi import APIRouter, Response, status

from bomviz.config import get_settings
from bomviz.core.errors import ViewNotFoundError
from bomviz.infrastructure.browser_engine import BrowserRenderEngine
from bomviz.infrastructure.graph_loader import GraphLoader
from bomviz.infrastructure.http_client import get_http_client
from bomviz.schemas.graph import GraphData, GraphEdge, GraphNode
from bomviz.schemas.view import (
    DetailsResponse, SelectionRequest, ViewCreate, ViewLoad, ViewState,
)
from bomviz.services.graph_view import GraphView, build_graph_path

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/views", tags=["views"])

_views: dict[UUID, GraphView] = {}


def get_view_or_404(view_id: UUID) -> GraphView:
    view = _views.get(view_id)
    if view is None:
        raise ViewNotFoundError(str(view_id))
    return view


def _register(view_id: UUID, view: GraphView, limit: int) -> None:
    while len(_views) >= limit:
        oldest_id = next(iter(_views))
        _views.pop(oldest_id).close()
        logger.info(
            "View session evicted, registry full",
            extra={"view_id": str(oldest_id)},
        )
    _views[view_id] = view


def _engine_of(view: GraphView) -> BrowserRenderEngine:
    return view.engine  # type: ignore[return-value]


def _build_state(view_id: UUID, view: GraphView) -> ViewState:
    return ViewState(
        id=view_id,
        path=view.current_path,
        graph=GraphData(
            nodes=[GraphNode.from_record(n) for n in view.store.nodes.values()],
            edges=[GraphEdge.from_record(e) for e in view.store.edges.values()],
        ),
        details=view.panel.content,
        fit_generation=_engine_of(view).fit_generation,
        last_error_code=view.last_error.code if view.last_error else None,
    )


async def _settle(task: asyncio.Task) -> None:
    """Wait for a load task; a cancelled load leaves the view as it was."""
    try:
        await task
    except asyncio.CancelledError:
        if not task.cancelled():
            raise
        logger.info("Graph load cancelled before completion")


@router.post(
    "", response_model=ViewState, response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_view(body: ViewCreate):
    """Open a view session and run its first load."""
    settings = get_settings()
    view_id = uuid4()
    view = GraphView(
        loader=GraphLoader(get_http_client()),
        engine=BrowserRenderEngine(),
        graph_path=settings.graph_path,
        parse_options=settings.parse_options(),
        render_options=settings.render_options(),
        view_id=str(view_id),
    )
    _register(view_id, view, settings.max_views)
    await _settle(view.start(body.query))
    return _build_state(view_id, view)


@router.get("/{view_id}", response_model=ViewState, response_model_exclude_none=True)
async def get_view(view_id: UUID):
    """Current graph, details text and fit generation."""
    return _build_state(view_id, get_view_or_404(view_id))


@router.get("/{view_id}/options")
async def get_render_options(view_id: UUID):
    """vis-network options object for this view's canvas."""
    return _engine_of(get_view_or_404(view_id)).vis_options()


@router.post(
    "/{view_id}/load", response_model=ViewState, response_model_exclude_none=True,
)
async def load_view(view_id: UUID, body: ViewLoad | None = None):
    """Refetch the graph, optionally with a new query string."""
    view = get_view_or_404(view_id)
    path = None
    if body is not None and body.query is not None:
        path = build_graph_path(view.graph_path, body.query.strip())
    await _settle(view.load(path))
    return _build_state(view_id, view)


@router.post(
    "/{view_id}/reload", response_model=ViewState, response_model_exclude_none=True,
)
async def reload_view(view_id: UUID):
    """Re-render the retained snapshot without refetching."""
    view = get_view_or_404(view_id)
    view.reload()
    return _build_state(view_id, view)


@router.post("/{view_id}/select", response_model=DetailsResponse)
async def select_elements(view_id: UUID, body: SelectionRequest):
    """Feed a canvas click into the view and return the details text."""
    view = get_view_or_404(view_id)
    _engine_of(view).click(body.nodes, body.edges)
    return DetailsResponse(content=view.panel.content)


@router.delete("/{view_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_view(view_id: UUID):
    """Close the page session and cancel its pending loads."""
    view = _views.pop(view_id, None)
    if view is None:
        raise ViewNotFoundError(str(view_id))
    view.close()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
