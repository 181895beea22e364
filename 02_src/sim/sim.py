"""SIM implementation - scripted grid interaction over the HTTP API."""

import asyncio
import random
from typing import Protocol

import httpx

from grid_telemetry.logging_config import get_logger

logger = get_logger(__name__)


class ISim(Protocol):
    """Drive the grid like a user would."""

    async def start(self) -> None:
        """Start scripted scenario."""
        ...

    async def stop(self) -> None:
        """Stop scenario."""
        ...


class Sim:
    """SIM with a scripted browsing session: scroll bursts, selections, extractions."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        transport: httpx.AsyncBaseTransport | None = None,
        scroll_interval: float = 0.05,
        pause: tuple[float, float] = (0.5, 1.5),
    ):
        self._api_url = api_url
        self._transport = transport
        self._scroll_interval = scroll_interval
        self._pause = pause
        self._running = False
        self._task: asyncio.Task | None = None
        self._client: httpx.AsyncClient | None = None
        self._requests_sent = 0

    @property
    def requests_sent(self) -> int:
        return self._requests_sent

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start scripted scenario."""
        if self._running:
            return

        self._running = True
        self._client = httpx.AsyncClient(base_url=self._api_url, transport=self._transport)

        # Start background task
        self._task = asyncio.create_task(self._run_scenario())

    async def stop(self) -> None:
        """Stop scenario."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client:
            await self._client.aclose()
            self._client = None

    async def wait(self) -> None:
        """Wait for the scenario to finish on its own."""
        if self._task:
            await self._task

    async def _run_scenario(self) -> None:
        """Run scripted scenario."""
        try:
            logger.info("SIM: scenario started")

            await self._post("/api/grid/extract/visible")

            # Scroll burst, then let the debounce settle
            for top in range(48, 48 * 7, 48):
                if not self._running:
                    return
                await self._post("/api/grid/scroll", {"top": top})
                await asyncio.sleep(self._scroll_interval)
            await self._idle()

            for row_id in random.sample(range(1, 16), 3):
                if not self._running:
                    return
                await self._post(f"/api/grid/rows/{row_id}/selection", {"selected": True})
            await self._post("/api/grid/extract/selected")
            await self._idle()

            await self._put("/api/grid/filter-model", {
                "category": {"type": "equals", "filter": "Electronics"},
            })
            await self._put("/api/grid/sort", {
                "sort_model": [{"col_id": "price", "sort": "desc"}],
            })
            await self._post("/api/grid/extract/full")

            logger.info("SIM: scenario completed, %d requests", self._requests_sent)

        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error("SIM scenario error: %s", e)
        finally:
            self._running = False

    async def _idle(self) -> None:
        await asyncio.sleep(random.uniform(*self._pause))

    async def _post(self, path: str, body: dict | None = None) -> None:
        await self._request("POST", path, body)

    async def _put(self, path: str, body: dict) -> None:
        await self._request("PUT", path, body)

    async def _request(self, method: str, path: str, body: dict | None) -> None:
        """Send one request via HTTP API."""
        if not self._client:
            return

        try:
            response = await self._client.request(method, path, json=body, timeout=10.0)
            self._requests_sent += 1

            if response.status_code == 200:
                logger.info("SIM: %s %s", method, path)
            else:
                logger.error(
                    "SIM: %s %s failed: %s", method, path, response.status_code
                )

        except httpx.HTTPError as e:
            logger.error("SIM: Failed to send %s %s: %s", method, path, e)
