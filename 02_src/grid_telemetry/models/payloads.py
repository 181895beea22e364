"""Typed payloads for each telemetry event type.

Every payload is self-contained and read-only: row and filter collections
are deep-frozen on construction (tuples of MappingProxyType) and no payload
references another event. ``to_dict()`` produces the plain wire shape
carried in ``TelemetryEvent.to_wire()["data"]``.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from .grid import ColumnState, ScrollDirection
from .telemetry import EventType, freeze, thaw


@dataclass(frozen=True)
class GridInitializedPayload:
    """Grid attached and ready."""

    event_type: ClassVar[EventType] = EventType.GRID_INITIALIZED

    total_rows: int
    columns: tuple[str, ...]
    grid_version: str

    def __post_init__(self):
        object.__setattr__(self, "columns", tuple(self.columns))

    def to_dict(self) -> dict:
        return {
            "totalRows": self.total_rows,
            "columns": list(self.columns),
            "gridVersion": self.grid_version,
        }


@dataclass(frozen=True)
class VisibleRowsPayload:
    """Rows inside the rendered viewport."""

    event_type: ClassVar[EventType] = EventType.VISIBLE_ROWS_EXTRACTED

    first_row_index: int
    last_row_index: int
    visible_rows: tuple[Mapping[str, Any], ...]
    visible_ids: tuple[Any, ...]
    total_value: float

    def __post_init__(self):
        object.__setattr__(self, "visible_rows", freeze(self.visible_rows))
        object.__setattr__(self, "visible_ids", freeze(self.visible_ids))

    @property
    def visible_row_count(self) -> int:
        return len(self.visible_rows)

    def to_dict(self) -> dict:
        return {
            "viewport": {
                "firstRowIndex": self.first_row_index,
                "lastRowIndex": self.last_row_index,
                "visibleRowCount": self.visible_row_count,
            },
            "visibleRows": thaw(self.visible_rows),
            "visibleProductIds": thaw(self.visible_ids),
            "totalValue": self.total_value,
        }


@dataclass(frozen=True)
class SelectedRowsPayload:
    """Rows in the current selection."""

    event_type: ClassVar[EventType] = EventType.SELECTED_ROWS_EXTRACTED

    selected_rows: tuple[Mapping[str, Any], ...]
    selected_ids: tuple[Any, ...]
    total_selected_value: float

    def __post_init__(self):
        object.__setattr__(self, "selected_rows", freeze(self.selected_rows))
        object.__setattr__(self, "selected_ids", freeze(self.selected_ids))

    @property
    def selected_count(self) -> int:
        return len(self.selected_rows)

    def to_dict(self) -> dict:
        return {
            "selectedCount": self.selected_count,
            "selectedRows": thaw(self.selected_rows),
            "selectedIds": thaw(self.selected_ids),
            "totalSelectedValue": self.total_selected_value,
        }


@dataclass(frozen=True)
class GridAggregations:
    """Fixed aggregate set computed over every row known to the grid."""

    total_inventory_value: float
    avg_price: float
    in_stock_count: int
    out_of_stock_count: int

    def to_dict(self) -> dict:
        return {
            "totalInventoryValue": self.total_inventory_value,
            "avgPrice": self.avg_price,
            "inStockCount": self.in_stock_count,
            "outOfStockCount": self.out_of_stock_count,
        }


@dataclass(frozen=True)
class FullGridStatePayload:
    """Complete grid snapshot: rows, columns, filters, viewport, aggregates."""

    event_type: ClassVar[EventType] = EventType.FULL_GRID_STATE_EXTRACTED

    total_rows: int
    displayed_rows: int
    selected_rows: int
    all_data: tuple[Mapping[str, Any], ...]
    column_state: tuple[ColumnState, ...]
    active_filters: Mapping[str, Any]
    first_row: int
    last_row: int
    aggregations: GridAggregations

    def __post_init__(self):
        object.__setattr__(self, "all_data", freeze(self.all_data))
        object.__setattr__(self, "column_state", tuple(self.column_state))
        object.__setattr__(self, "active_filters", freeze(self.active_filters))

    def to_dict(self) -> dict:
        return {
            "gridMetadata": {
                "totalRows": self.total_rows,
                "displayedRows": self.displayed_rows,
                "selectedRows": self.selected_rows,
            },
            "allData": thaw(self.all_data),
            "columnState": [col.to_dict() for col in self.column_state],
            "activeFilters": thaw(self.active_filters),
            "viewport": {"firstRow": self.first_row, "lastRow": self.last_row},
            "aggregations": self.aggregations.to_dict(),
        }


@dataclass(frozen=True)
class GridScrolledPayload:
    """Viewport after a quiet period following scroll activity."""

    event_type: ClassVar[EventType] = EventType.GRID_SCROLLED

    scroll_direction: ScrollDirection
    first_row: int
    last_row: int
    top: float
    left: float

    @property
    def visible_row_count(self) -> int:
        return self.last_row - self.first_row + 1

    def to_dict(self) -> dict:
        return {
            "scrollDirection": self.scroll_direction,
            "viewport": {
                "firstRow": self.first_row,
                "lastRow": self.last_row,
                "visibleRowCount": self.visible_row_count,
            },
            "scrollPosition": {"top": self.top, "left": self.left},
        }


@dataclass(frozen=True)
class RowSelectedPayload:
    """A single row transitioned to selected."""

    event_type: ClassVar[EventType] = EventType.ROW_SELECTED

    row_id: Any
    row_data: Mapping[str, Any] = field(default_factory=dict)
    selection_source: str = "user_click"

    def __post_init__(self):
        object.__setattr__(self, "row_data", freeze(self.row_data))

    def to_dict(self) -> dict:
        return {
            "rowId": self.row_id,
            "rowData": thaw(self.row_data),
            "selectionSource": self.selection_source,
        }


ExtractionPayload = Union[
    GridInitializedPayload,
    VisibleRowsPayload,
    SelectedRowsPayload,
    FullGridStatePayload,
    GridScrolledPayload,
    RowSelectedPayload,
]
