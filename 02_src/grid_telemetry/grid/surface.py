"""Grid capability surface consumed by the extraction adapters."""

from typing import Any, Callable, Protocol

from ..models import ColumnState, Row, RowSelectionChange, ScrollEvent


class IGridSurface(Protocol):
    """Read-only queries over the grid's current render and interaction state."""

    def first_displayed_index(self) -> int:
        """Index of the first rendered row."""
        ...

    def last_displayed_index(self) -> int:
        """Index of the last rendered row (inclusive). Below first when nothing is displayed."""
        ...

    def row_at(self, index: int) -> Row | None:
        """Displayed row at index, or None."""
        ...

    def selected_rows(self) -> list[Row]:
        """All currently selected rows."""
        ...

    def for_each_row(self, visit: Callable[[Row], None]) -> None:
        """Visit every row known to the grid, displayed or not."""
        ...

    def column_state(self) -> list[ColumnState]:
        """Per-column width, visibility, sort and pinning."""
        ...

    def filter_model(self) -> dict[str, Any]:
        """Active filters keyed by column id."""
        ...

    def displayed_row_count(self) -> int:
        """Number of rows passing the current filters."""
        ...


class IInteractiveGrid(IGridSurface, Protocol):
    """A grid that also reports UI events and describes itself."""

    @property
    def key_field(self) -> str:
        """Name of the unique row key."""
        ...

    @property
    def column_ids(self) -> list[str]:
        """Column identifiers in display order."""
        ...

    @property
    def row_count(self) -> int:
        """Number of rows loaded into the grid."""
        ...

    def subscribe_row_selected(
        self, callback: Callable[[RowSelectionChange], None]
    ) -> Callable[[], None]:
        """Register a row-selection callback. Returns an unsubscribe function."""
        ...

    def subscribe_body_scroll(
        self, callback: Callable[[ScrollEvent], None]
    ) -> Callable[[], None]:
        """Register a body-scroll callback. Returns an unsubscribe function."""
        ...
