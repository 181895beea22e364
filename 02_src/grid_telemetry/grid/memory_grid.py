"""In-memory grid implementing IGridSurface.

Stands in for a browser data grid: holds the rows, applies the filter model
and sort state to produce the displayed rows, derives the rendered window
from the vertical scroll offset, and reports selection and scroll changes
to subscribed callbacks the way grid components deliver UI events.
"""

import copy
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Literal

from ..config import DEFAULT_ROW_HEIGHT, DEFAULT_VIEWPORT_HEIGHT
from ..logging_config import get_logger
from ..models import ColumnState, Row, RowSelectionChange, ScrollEvent, SortDirection

logger = get_logger(__name__)


RowSelectedCallback = Callable[[RowSelectionChange], None]
BodyScrollCallback = Callable[[ScrollEvent], None]

TEXT_FILTER_TYPES = {
    "equals",
    "notEqual",
    "contains",
    "notContains",
    "startsWith",
    "endsWith",
}
NUMBER_FILTER_TYPES = {
    "equals",
    "notEqual",
    "lessThan",
    "lessThanOrEqual",
    "greaterThan",
    "greaterThanOrEqual",
    "inRange",
}


@dataclass(frozen=True)
class ColumnDef:
    """Static definition of a grid column."""

    field: str
    width: int | None = None
    filter: Literal["text", "number"] | None = None
    hide: bool = False


def _matches_text(value: Any, condition: dict) -> bool:
    text = "" if value is None else str(value).lower()
    needle = str(condition.get("filter", "")).lower()
    kind = condition.get("type", "contains")
    if kind == "equals":
        return text == needle
    if kind == "notEqual":
        return text != needle
    if kind == "contains":
        return needle in text
    if kind == "notContains":
        return needle not in text
    if kind == "startsWith":
        return text.startswith(needle)
    return text.endswith(needle)


def _matches_number(value: Any, condition: dict) -> bool:
    if value is None:
        return False
    number = float(value)
    target = float(condition.get("filter", 0))
    kind = condition.get("type", "equals")
    if kind == "equals":
        return number == target
    if kind == "notEqual":
        return number != target
    if kind == "lessThan":
        return number < target
    if kind == "lessThanOrEqual":
        return number <= target
    if kind == "greaterThan":
        return number > target
    if kind == "greaterThanOrEqual":
        return number >= target
    upper = float(condition.get("filterTo", target))
    return target <= number <= upper


class InMemoryGrid:
    """Row/column grid with filtering, sorting, a virtual viewport and selection."""

    def __init__(
        self,
        rows: Iterable[Row],
        columns: Iterable[ColumnDef],
        key_field: str = "id",
        row_height: int = DEFAULT_ROW_HEIGHT,
        viewport_height: int = DEFAULT_VIEWPORT_HEIGHT,
    ):
        if row_height <= 0 or viewport_height <= 0:
            raise ValueError("row_height and viewport_height must be positive")

        self._key_field = key_field
        self._rows: list[dict] = [dict(row) for row in rows]
        self._rows_by_key: dict[Any, dict] = {}
        for row in self._rows:
            key = row[key_field]
            if key in self._rows_by_key:
                raise ValueError(f"Duplicate row key: {key!r}")
            self._rows_by_key[key] = row

        self._column_defs: dict[str, ColumnDef] = {col.field: col for col in columns}
        self._columns: dict[str, ColumnState] = {
            col.field: ColumnState(col_id=col.field, width=col.width, hide=col.hide)
            for col in self._column_defs.values()
        }

        self._row_height = row_height
        self._viewport_height = viewport_height
        self._scroll_top = 0.0
        self._scroll_left = 0.0

        self._filter_model: dict[str, dict] = {}
        self._selected: dict[Any, None] = {}  # insertion-ordered set of keys
        self._displayed: list[dict] = list(self._rows)

        self._row_selected_listeners: list[RowSelectedCallback] = []
        self._body_scroll_listeners: list[BodyScrollCallback] = []

    # Capability surface

    def first_displayed_index(self) -> int:
        if not self._displayed:
            return 0
        return int(self._scroll_top // self._row_height)

    def last_displayed_index(self) -> int:
        if not self._displayed:
            return -1
        bottom = int((self._scroll_top + self._viewport_height - 1) // self._row_height)
        return min(len(self._displayed) - 1, bottom)

    def row_at(self, index: int) -> Row | None:
        if 0 <= index < len(self._displayed):
            return self._displayed[index]
        return None

    def selected_rows(self) -> list[Row]:
        return [self._rows_by_key[key] for key in self._selected]

    def for_each_row(self, visit: Callable[[Row], None]) -> None:
        for row in self._rows:
            visit(row)

    def column_state(self) -> list[ColumnState]:
        return list(self._columns.values())

    def filter_model(self) -> dict[str, Any]:
        return copy.deepcopy(self._filter_model)

    def displayed_row_count(self) -> int:
        return len(self._displayed)

    # Metadata

    @property
    def key_field(self) -> str:
        return self._key_field

    @property
    def column_ids(self) -> list[str]:
        return list(self._column_defs)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def scroll_position(self) -> tuple[float, float]:
        return self._scroll_top, self._scroll_left

    # Interaction

    def subscribe_row_selected(self, callback: RowSelectedCallback) -> Callable[[], None]:
        """Register a row-selection callback. Returns an unsubscribe function."""
        self._row_selected_listeners.append(callback)
        return lambda: self._discard(self._row_selected_listeners, callback)

    def subscribe_body_scroll(self, callback: BodyScrollCallback) -> Callable[[], None]:
        """Register a body-scroll callback. Returns an unsubscribe function."""
        self._body_scroll_listeners.append(callback)
        return lambda: self._discard(self._body_scroll_listeners, callback)

    def set_selected(self, row_id: Any, selected: bool) -> bool:
        """Select or deselect a row. Returns True if the selection changed."""
        if row_id not in self._rows_by_key:
            raise KeyError(row_id)

        if selected == (row_id in self._selected):
            return False

        if selected:
            self._selected[row_id] = None
        else:
            del self._selected[row_id]

        change = RowSelectionChange(
            row_id=row_id, data=self._rows_by_key[row_id], selected=selected
        )
        for callback in list(self._row_selected_listeners):
            callback(change)
        return True

    def deselect_all(self) -> None:
        """Deselect every row, reporting each transition."""
        for row_id in list(self._selected):
            self.set_selected(row_id, False)

    def scroll_to(self, top: float | None = None, left: float | None = None) -> ScrollEvent | None:
        """Move the viewport. Returns the delivered ScrollEvent, or None if nothing moved."""
        new_top = self._clamp_top(self._scroll_top if top is None else top)
        new_left = max(0.0, float(self._scroll_left if left is None else left))

        if new_top != self._scroll_top:
            direction = "vertical"
        elif new_left != self._scroll_left:
            direction = "horizontal"
        else:
            return None

        self._scroll_top, self._scroll_left = new_top, new_left
        event = ScrollEvent(direction=direction, top=new_top, left=new_left)
        for callback in list(self._body_scroll_listeners):
            callback(event)
        return event

    def set_filter_model(self, model: dict[str, dict] | None) -> None:
        """Replace the active filter model."""
        model = model or {}
        for col_id, condition in model.items():
            column = self._column_defs.get(col_id)
            if column is None:
                raise ValueError(f"Unknown column: {col_id}")
            if column.filter is None:
                raise ValueError(f"Column {col_id} is not filterable")
            allowed = TEXT_FILTER_TYPES if column.filter == "text" else NUMBER_FILTER_TYPES
            if condition.get("type") not in allowed:
                raise ValueError(
                    f"Unsupported {column.filter} filter type for {col_id}: "
                    f"{condition.get('type')!r}"
                )
            if column.filter == "number":
                for bound in ("filter", "filterTo"):
                    if bound in condition and not isinstance(condition[bound], (int, float)):
                        raise ValueError(f"Number filter on {col_id} needs a numeric {bound}")

        self._filter_model = {
            col_id: {**condition, "filterType": self._column_defs[col_id].filter}
            for col_id, condition in model.items()
        }
        self._refresh_displayed()

    def apply_sort(self, sort_model: list[tuple[str, SortDirection]]) -> None:
        """Replace the sort state. Earlier entries take priority."""
        sort_index = {col_id: i for i, (col_id, _) in enumerate(sort_model)}
        directions = dict(sort_model)
        for col_id, direction in directions.items():
            if col_id not in self._columns:
                raise ValueError(f"Unknown column: {col_id}")
            if direction not in ("asc", "desc"):
                raise ValueError(f"Invalid sort direction for {col_id}: {direction!r}")

        self._columns = {
            col_id: replace(
                state,
                sort=directions.get(col_id),
                sort_index=sort_index.get(col_id),
            )
            for col_id, state in self._columns.items()
        }
        self._refresh_displayed()

    # Internals

    def _refresh_displayed(self) -> None:
        rows = [row for row in self._rows if self._passes_filters(row)]

        sorted_columns = sorted(
            (state for state in self._columns.values() if state.sort),
            key=lambda state: state.sort_index or 0,
        )
        # Stable sorts applied from lowest to highest priority
        for state in reversed(sorted_columns):
            rows.sort(
                key=lambda row: (row.get(state.col_id) is None, row.get(state.col_id)),
                reverse=state.sort == "desc",
            )

        self._displayed = rows
        self._scroll_top = self._clamp_top(self._scroll_top)
        logger.debug(
            "Displayed rows refreshed: %d of %d", len(self._displayed), len(self._rows)
        )

    def _passes_filters(self, row: dict) -> bool:
        for col_id, condition in self._filter_model.items():
            value = row.get(col_id)
            if condition["filterType"] == "number":
                if not _matches_number(value, condition):
                    return False
            elif not _matches_text(value, condition):
                return False
        return True

    def _clamp_top(self, top: float) -> float:
        content_height = len(self._displayed) * self._row_height
        max_top = max(0, content_height - self._viewport_height)
        return float(min(max(0.0, float(top)), max_top))

    @staticmethod
    def _discard(listeners: list, callback: Callable) -> None:
        if callback in listeners:
            listeners.remove(callback)
