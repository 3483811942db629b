"""HTTP Client Manager — one shared httpx.AsyncClient for graph fetches.

Invariants:
    - One client per process, created in the FastAPI lifespan, closed on shutdown
    - Relative graph paths resolve against graph_base_url
    - No timeout unless configured (a hung fetch leaves the last good graph shown)

Design Decisions:
    - Singleton http_manager initialized on startup: lifespan manages lifecycle
      (no global import side effects)
    - Manager wraps the client so tests can swap in an httpx.MockTransport
"""

import logging

import httpx

logger = logging.getLogger(__name__)


class GraphHttpClientManager:
    """Owns the AsyncClient used by every GraphLoader."""

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
            follow_redirects=True,
        )

    async def close(self) -> None:
        await self.client.aclose()

    def is_open(self) -> bool:
        return not self.client.is_closed


# Singleton (initialized on startup)
http_manager: GraphHttpClientManager | None = None


def init_http_client(base_url: str, **kwargs) -> GraphHttpClientManager:
    global http_manager
    http_manager = GraphHttpClientManager(base_url, **kwargs)
    logger.info(f"Graph HTTP client ready for {base_url}")
    return http_manager


async def close_http_client() -> None:
    global http_manager
    if http_manager is not None:
        await http_manager.close()
        http_manager = None


def get_http_client() -> httpx.AsyncClient:
    """Shared client for GraphLoader construction."""
    if not http_manager:
        raise RuntimeError("HTTP client not initialized")
    return http_manager.client
