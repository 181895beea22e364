"""Debounced scroll telemetry."""

import asyncio
from enum import Enum
from typing import Callable

from ..config import DEFAULT_SCROLL_DEBOUNCE_SECONDS
from ..grid import IGridSurface
from ..logging_config import get_logger
from ..models import GridScrolledPayload, ScrollEvent
from ..telemetry import ITelemetryService

logger = get_logger(__name__)


class ScrollState(str, Enum):
    """Debounce state of a ScrollTracker."""

    IDLE = "idle"
    PENDING = "pending"
    CLOSED = "closed"


class ScrollTracker:
    """Trailing-edge debounce of body-scroll events into grid_scrolled.

    Each scroll event (re)arms a single timer on the event loop. When the
    quiet period elapses the viewport is re-read from the grid, so the
    emitted bounds reflect the state at fire time. Direction and offsets
    come from the last scroll event of the burst.
    """

    def __init__(
        self,
        telemetry: ITelemetryService,
        grid_provider: Callable[[], IGridSurface | None],
        delay: float = DEFAULT_SCROLL_DEBOUNCE_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self._telemetry = telemetry
        self._grid_provider = grid_provider
        self._delay = delay
        self._loop = loop

        self._timer: asyncio.TimerHandle | None = None
        self._last_event: ScrollEvent | None = None
        self._closed = False

    @property
    def state(self) -> ScrollState:
        if self._closed:
            return ScrollState.CLOSED
        return ScrollState.PENDING if self._timer is not None else ScrollState.IDLE

    @property
    def delay(self) -> float:
        return self._delay

    def on_scroll(self, event: ScrollEvent) -> None:
        """Record a scroll event and restart the quiet-period timer."""
        if self._closed or self._grid_provider() is None:
            return

        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.warning("No running event loop, scroll event not tracked")
                return

        self.cancel()
        self._last_event = event
        self._timer = loop.call_later(self._delay, self._fire)

    def cancel(self) -> bool:
        """Disarm the pending timer. Returns True if one was armed."""
        if self._timer is None:
            return False
        self._timer.cancel()
        self._timer = None
        self._last_event = None
        return True

    def close(self) -> None:
        """Cancel any pending emission and stop accepting scroll events."""
        if self.cancel():
            logger.debug("Pending scroll emission cancelled on close")
        self._closed = True

    def _fire(self) -> None:
        event = self._last_event
        self._timer = None
        self._last_event = None

        grid = self._grid_provider()
        if grid is None or event is None:
            logger.debug("Grid gone before scroll debounce fired, nothing emitted")
            return

        payload = GridScrolledPayload(
            scroll_direction=event.direction,
            first_row=grid.first_displayed_index(),
            last_row=grid.last_displayed_index(),
            top=event.top,
            left=event.left,
        )
        self._telemetry.emit(payload)
