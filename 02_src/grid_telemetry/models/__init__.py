"""Core data models for grid telemetry."""

from .grid import (
    ColumnState,
    PinnedSide,
    Row,
    RowSelectionChange,
    ScrollDirection,
    ScrollEvent,
    SortDirection,
)
from .payloads import (
    ExtractionPayload,
    FullGridStatePayload,
    GridAggregations,
    GridInitializedPayload,
    GridScrolledPayload,
    RowSelectedPayload,
    SelectedRowsPayload,
    VisibleRowsPayload,
)
from .telemetry import EventType, TelemetryEvent

__all__ = [
    # Telemetry
    "EventType",
    "TelemetryEvent",
    # Grid
    "Row",
    "ColumnState",
    "ScrollEvent",
    "RowSelectionChange",
    "SortDirection",
    "PinnedSide",
    "ScrollDirection",
    # Payloads
    "ExtractionPayload",
    "GridInitializedPayload",
    "VisibleRowsPayload",
    "SelectedRowsPayload",
    "GridAggregations",
    "FullGridStatePayload",
    "GridScrolledPayload",
    "RowSelectedPayload",
]
