"""Grid telemetry: event pipeline for interactive data grids."""

from .app import Application, IApplication
from .extraction import GridExtractor, RowAggregator, ScrollState, ScrollTracker
from .grid import ColumnDef, IGridSurface, IInteractiveGrid, InMemoryGrid
from .models import (
    ColumnState,
    EventType,
    ExtractionPayload,
    RowSelectionChange,
    ScrollEvent,
    TelemetryEvent,
)
from .session import GridSession, GridStats, IGridSession
from .telemetry import (
    EventBuffer,
    HttpSink,
    ITelemetryService,
    ITelemetrySink,
    LogSink,
    TelemetryService,
)

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "EventType",
    "TelemetryEvent",
    "ExtractionPayload",
    "ColumnState",
    "ScrollEvent",
    "RowSelectionChange",
    # Components
    "EventBuffer",
    "ITelemetryService",
    "TelemetryService",
    "ITelemetrySink",
    "LogSink",
    "HttpSink",
    "IGridSurface",
    "IInteractiveGrid",
    "InMemoryGrid",
    "ColumnDef",
    "GridExtractor",
    "RowAggregator",
    "ScrollState",
    "ScrollTracker",
    "IGridSession",
    "GridSession",
    "GridStats",
]
