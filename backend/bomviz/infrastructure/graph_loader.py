"""Graph Loader — async fetch of Gephi JSON with stale-response guard and snapshot reuse.

Invariants:
    - load() schedules one asyncio.Task per call; every task gets a monotonic sequence
    - Only the most recently issued load may report; older results are discarded
    - HTTP 200 + JSON object → on_success; anything else → on_error with a typed
      GraphLoadError (TransportError or ParseError)
    - The retained snapshot changes only after on_success returns normally;
      failures (including ParseError raised by on_success) never touch it
    - A document without top-level "nodes" is a delta and resolves to the snapshot

Design Decisions:
    - Callbacks kept as the contract, tasks returned so callers can await or cancel
    - reload() is explicit and synchronous: no refetch, no sequence bump, so an
      in-flight fetch still lands afterwards
    - No retry: a failed load is terminal for that attempt, the caller decides
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import httpx

from bomviz.core.errors import (
    ErrorContext, GraphLoadError, NoSnapshotError, ParseError, TransportError,
)

logger = logging.getLogger(__name__)

GraphDocument = dict[str, Any]
SuccessCallback = Callable[[GraphDocument], None]
ErrorCallback = Callable[[GraphLoadError], None]


class GraphLoader:
    """Fetches graph documents and keeps the last good one for reparsing."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client
        self._snapshot: GraphDocument | None = None
        self._issued = 0
        self._pending: set[asyncio.Task] = set()

    @property
    def snapshot(self) -> GraphDocument | None:
        return self._snapshot

    @property
    def latest_sequence(self) -> int:
        return self._issued

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def load(
        self, path: str, on_success: SuccessCallback, on_error: ErrorCallback,
    ) -> asyncio.Task:
        """Start fetching path. Must be called from inside a running event loop."""
        self._issued += 1
        sequence = self._issued
        task = asyncio.get_running_loop().create_task(
            self._run(path, sequence, on_success, on_error),
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def reload(self, on_success: SuccessCallback, on_error: ErrorCallback) -> None:
        """Re-run on_success on the retained snapshot without refetching."""
        if self._snapshot is None:
            on_error(NoSnapshotError())
            return
        try:
            on_success(self._snapshot)
        except ParseError as e:
            on_error(e)

    def cancel_pending(self) -> int:
        """Cancel every in-flight load. Returns how many were cancelled."""
        cancelled = 0
        for task in list(self._pending):
            if task.cancel():
                cancelled += 1
        return cancelled

    async def fetch(self, path: str, sequence: int | None = None) -> GraphDocument:
        """GET path and decode a JSON object. Raises TransportError or ParseError."""
        context = ErrorContext(path=path, sequence=sequence)
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as e:
            raise TransportError(
                f"{type(e).__name__}: {e}", context=context,
            ) from e

        if response.status_code != 200:
            raise TransportError(
                f"HTTP {response.status_code}",
                status_code=response.status_code,
                context=context,
            )

        try:
            document = response.json()
        except ValueError as e:
            raise ParseError(f"invalid JSON: {e}", context=context) from e

        if not isinstance(document, dict):
            raise ParseError("document must be a JSON object", context=context)
        return document

    # ─── Internals ───────────────────────────────────────────────

    async def _run(
        self,
        path: str,
        sequence: int,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
    ) -> None:
        try:
            document = self._resolve_delta(await self.fetch(path, sequence), path, sequence)
        except GraphLoadError as e:
            if self._is_stale(sequence):
                self._log_discard(path, sequence, e.code)
                return
            on_error(e)
            return

        if self._is_stale(sequence):
            self._log_discard(path, sequence, None)
            return

        try:
            on_success(document)
        except ParseError as e:
            e.context.path = e.context.path or path
            e.context.sequence = e.context.sequence or sequence
            on_error(e)
            return

        self._snapshot = document
        logger.debug(
            f"Graph load {sequence} committed",
            extra={"path": path, "sequence": sequence},
        )

    def _resolve_delta(
        self, document: GraphDocument, path: str, sequence: int,
    ) -> GraphDocument:
        if "nodes" in document:
            return document
        if self._snapshot is None:
            raise ParseError(
                "document has no 'nodes' and no earlier graph to reuse",
                context=ErrorContext(path=path, sequence=sequence),
            )
        logger.info(
            "Delta document received, re-rendering retained snapshot",
            extra={"path": path, "sequence": sequence},
        )
        return self._snapshot

    def _is_stale(self, sequence: int) -> bool:
        return sequence < self._issued

    def _log_discard(self, path: str, sequence: int, error_code: str | None) -> None:
        logger.info(
            f"Discarding stale graph load {sequence} (latest {self._issued})",
            extra={"path": path, "sequence": sequence, "error_code": error_code},
        )
