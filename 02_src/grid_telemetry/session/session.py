"""GridSession: wires one grid to one TelemetryService."""

import asyncio
from dataclasses import dataclass
from typing import Callable, Protocol

from ..config import DEFAULT_SCROLL_DEBOUNCE_SECONDS, GRID_VERSION
from ..extraction import GridExtractor, RowAggregator, ScrollTracker
from ..grid import IInteractiveGrid
from ..logging_config import get_logger
from ..models import (
    GridInitializedPayload,
    RowSelectedPayload,
    RowSelectionChange,
    TelemetryEvent,
)
from ..telemetry import ITelemetryService

logger = get_logger(__name__)

SELECTION_SOURCE = "user_click"


@dataclass
class GridStats:
    """Counters shown alongside the event stream."""

    total_events: int = 0
    visible_rows: int = 0
    selected_rows: int = 0


class IGridSession(Protocol):
    """Telemetry capture for a single grid."""

    def attach(self, grid: IInteractiveGrid) -> TelemetryEvent:
        """Start observing a ready grid, emit grid_initialized."""
        ...

    def detach(self) -> None:
        """Stop observing the grid, cancel pending scroll emission."""
        ...

    def close(self) -> None:
        """Detach and stop listening to the telemetry service."""
        ...

    def extract_visible_rows(self) -> TelemetryEvent | None:
        ...

    def extract_selected_rows(self) -> TelemetryEvent | None:
        ...

    def extract_full_state(self) -> TelemetryEvent | None:
        ...

    def clear_telemetry(self) -> None:
        """Clear buffered events and reset stats."""
        ...

    @property
    def stats(self) -> GridStats:
        ...


class GridSession:
    """Owns the extractors, the scroll tracker and the observable stats."""

    def __init__(
        self,
        telemetry: ITelemetryService,
        scroll_delay: float = DEFAULT_SCROLL_DEBOUNCE_SECONDS,
        aggregator: RowAggregator | None = None,
        grid_version: str = GRID_VERSION,
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self._telemetry = telemetry
        self._scroll_delay = scroll_delay
        self._aggregator = aggregator or RowAggregator()
        self._grid_version = grid_version
        self._loop = loop

        self._grid: IInteractiveGrid | None = None
        self._extractor = GridExtractor(telemetry, aggregator=self._aggregator)
        self._scroll_tracker: ScrollTracker | None = None
        self._unsubscribers: list[Callable[[], None]] = []
        self._stats = GridStats()

        telemetry.subscribe(self._on_event)

    @property
    def grid(self) -> IInteractiveGrid | None:
        return self._grid

    @property
    def scroll_tracker(self) -> ScrollTracker | None:
        return self._scroll_tracker

    @property
    def stats(self) -> GridStats:
        """Copy of the current counters."""
        return GridStats(**vars(self._stats))

    def attach(self, grid: IInteractiveGrid) -> TelemetryEvent:
        """Start observing a ready grid, emit grid_initialized."""
        if self._grid is not None:
            self.detach()

        self._grid = grid
        self._extractor = GridExtractor(
            self._telemetry, key_field=grid.key_field, aggregator=self._aggregator
        )
        self._scroll_tracker = ScrollTracker(
            self._telemetry,
            grid_provider=lambda: self._grid,
            delay=self._scroll_delay,
            loop=self._loop,
        )
        self._unsubscribers = [
            grid.subscribe_row_selected(self.on_row_selected),
            grid.subscribe_body_scroll(self._scroll_tracker.on_scroll),
        ]
        logger.info("Grid attached: %d rows", grid.row_count)

        return self._telemetry.emit(
            GridInitializedPayload(
                total_rows=grid.row_count,
                columns=grid.column_ids,
                grid_version=self._grid_version,
            )
        )

    def detach(self) -> None:
        """Stop observing the grid, cancel pending scroll emission."""
        if self._scroll_tracker:
            self._scroll_tracker.close()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        if self._grid is not None:
            logger.info("Grid detached")
        self._grid = None

    def close(self) -> None:
        """Detach and stop listening to the telemetry service."""
        self.detach()
        self._telemetry.unsubscribe(self._on_event)

    def extract_visible_rows(self) -> TelemetryEvent | None:
        event = self._extractor.extract_visible_rows(self._grid)
        if event is not None:
            self._stats.visible_rows = event.data.visible_row_count
        return event

    def extract_selected_rows(self) -> TelemetryEvent | None:
        event = self._extractor.extract_selected_rows(self._grid)
        if event is not None:
            self._stats.selected_rows = event.data.selected_count
        return event

    def extract_full_state(self) -> TelemetryEvent | None:
        return self._extractor.extract_full_state(self._grid)

    def on_row_selected(self, change: RowSelectionChange) -> None:
        """Log selections individually; refresh the selected count on any change."""
        if change.selected and change.data is not None:
            self._telemetry.emit(
                RowSelectedPayload(
                    row_id=change.row_id,
                    row_data=change.data,
                    selection_source=SELECTION_SOURCE,
                )
            )

        if self._grid is not None:
            self._stats.selected_rows = len(self._grid.selected_rows())

    def clear_telemetry(self) -> None:
        """Clear buffered events and reset stats."""
        self._telemetry.clear()
        self._stats = GridStats()

    def _on_event(self, event: TelemetryEvent) -> None:
        self._stats.total_events = len(self._telemetry.snapshot())
