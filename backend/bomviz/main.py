"""bomviz API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BomVizError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Shared graph HTTP client created on startup, closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Static shell mounted after API routes so /api/v1/* takes precedence
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from bomviz.api.error_handlers import register_error_handlers
from bomviz.api.routes import graph_view, health
from bomviz.config import get_settings
from bomviz.infrastructure.http_client import close_http_client, init_http_client
from bomviz.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_http_client(
        settings.graph_base_url,
        timeout_seconds=settings.graph_fetch_timeout_seconds,
    )
    logger.info("bomviz API started")
    yield
    for view in list(graph_view._views.values()):
        view.close()
    graph_view._views.clear()
    await close_http_client()
    logger.info("bomviz API shutting down")


app = FastAPI(title="bomviz API", version="1.0.0", lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(graph_view.router)

register_error_handlers(app)

# Static shell (HTML page, vis-network bundle, optionally data/graph.json)
if os.path.isdir(settings.static_dir):
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
