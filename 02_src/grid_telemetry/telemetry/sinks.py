"""Sinks that receive every emitted TelemetryEvent."""

import asyncio
from typing import Protocol

import httpx

from ..logging_config import get_logger
from ..models import TelemetryEvent

logger = get_logger(__name__)


class ITelemetrySink(Protocol):
    """Destination for emitted events (trace log, external collector)."""

    def handle(self, event: TelemetryEvent) -> None:
        """Receive one event. Must not block the event loop."""
        ...

    async def aclose(self) -> None:
        """Release resources at shutdown."""
        ...


class LogSink:
    """Writes a diagnostic trace of each event to the log."""

    def __init__(self, logger_name: str = "grid_telemetry.events"):
        self._logger = get_logger(logger_name)

    def handle(self, event: TelemetryEvent) -> None:
        self._logger.info(
            "Telemetry event: %s",
            event.event_type,
            extra={"context": event.to_wire()},
        )

    async def aclose(self) -> None:
        return


class HttpSink:
    """Forwards each event's wire JSON to an external collector.

    Each POST runs as a fire-and-forget task on the running loop. There is
    no retry: a failed delivery is logged and the event stays only in the
    local buffer.
    """

    def __init__(
        self,
        endpoint: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 5.0,
    ):
        self._endpoint = endpoint
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._pending: set[asyncio.Task] = set()

    @property
    def pending_count(self) -> int:
        """Number of deliveries still in flight."""
        return len(self._pending)

    def handle(self, event: TelemetryEvent) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                "No running event loop, event %s not forwarded", event.id
            )
            return

        task = loop.create_task(self._post(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _post(self, event: TelemetryEvent) -> None:
        try:
            response = await self._client.post(self._endpoint, json=event.to_wire())
            response.raise_for_status()
        except (httpx.HTTPError, TypeError, ValueError) as e:
            logger.error(
                "Failed to forward event %s to %s: %s", event.id, self._endpoint, e
            )

    async def aclose(self) -> None:
        """Wait for in-flight deliveries, then close the client."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        await self._client.aclose()
