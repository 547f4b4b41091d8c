"""Search indexing channel implementations.

Signals are posted as JSON to the indexing service in background tasks;
the comment mutation that emitted them never waits for delivery.
"""

import asyncio

import httpx
import logfire

from commentary.adapter.error import SearchIndexError
from commentary.domain.service.search_index import SearchIndexer
from commentary.domain.value import IndexSignal


class HttpSearchIndexer(SearchIndexer):
    """Delivers index signals to an HTTP job endpoint, fire-and-forget."""

    def __init__(
        self,
        endpoint: str | None,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize HTTP search indexer.

        Args:
            endpoint: Job endpoint of the indexing service (None = log only)
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests)
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self.transport = transport
        self._pending: set[asyncio.Task[None]] = set()

    def emit(self, signal: IndexSignal) -> None:
        """Schedule delivery of a signal and return immediately."""
        logfire.info(
            "Search index signal",
            action=signal.action.value,
            target=signal.target,
            key=signal.key,
        )
        if not self.endpoint:
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logfire.warn("No running event loop, search index signal dropped", key=signal.key)
            return

        task = loop.create_task(self._deliver(signal))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for signals still in flight (shutdown, tests)."""
        if self._pending:
            await asyncio.gather(*self._pending)

    async def _deliver(self, signal: IndexSignal) -> None:
        try:
            await self._post(signal)
        except SearchIndexError as e:
            logfire.error(
                "Search index signal failed",
                action=signal.action.value,
                key=signal.key,
                error=str(e),
            )

    async def _post(self, signal: IndexSignal) -> None:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    self.endpoint, json=signal.model_dump(mode="json")
                )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise SearchIndexError(f"Failed to deliver signal {signal.key}: {e}") from e


class MockSearchIndexer(SearchIndexer):
    """Records signals instead of delivering them."""

    def __init__(self) -> None:
        self.signals: list[IndexSignal] = []

    def emit(self, signal: IndexSignal) -> None:
        self.signals.append(signal)
