"""Extraction adapters turning grid state into telemetry payloads."""

from ..grid import IGridSurface
from ..logging_config import get_logger
from ..models import (
    FullGridStatePayload,
    Row,
    SelectedRowsPayload,
    TelemetryEvent,
    VisibleRowsPayload,
)
from ..telemetry import ITelemetryService
from .aggregates import RowAggregator

logger = get_logger(__name__)


class GridExtractor:
    """Viewport, selection and full-state extraction.

    Every method takes the grid as it currently stands; ``None`` means the
    grid is not ready yet and the call emits nothing and returns ``None``.
    """

    def __init__(
        self,
        telemetry: ITelemetryService,
        key_field: str = "id",
        aggregator: RowAggregator | None = None,
    ):
        self._telemetry = telemetry
        self._key_field = key_field
        self._aggregator = aggregator or RowAggregator()

    def extract_visible_rows(self, grid: IGridSurface | None) -> TelemetryEvent | None:
        """Emit visible_rows_extracted for the rendered window."""
        if grid is None:
            logger.debug("Grid not ready, skipping visible rows extraction")
            return None

        first = grid.first_displayed_index()
        last = grid.last_displayed_index()

        visible: list[Row] = []
        for index in range(first, last + 1):
            row = grid.row_at(index)
            if row is not None:
                visible.append(row)

        payload = VisibleRowsPayload(
            first_row_index=first,
            last_row_index=last,
            visible_rows=visible,
            visible_ids=[row.get(self._key_field) for row in visible],
            total_value=self._aggregator.total_value(visible),
        )
        return self._telemetry.emit(payload)

    def extract_selected_rows(self, grid: IGridSurface | None) -> TelemetryEvent | None:
        """Emit selected_rows_extracted for the current selection."""
        if grid is None:
            logger.debug("Grid not ready, skipping selected rows extraction")
            return None

        selected = grid.selected_rows()
        payload = SelectedRowsPayload(
            selected_rows=selected,
            selected_ids=[row.get(self._key_field) for row in selected],
            total_selected_value=self._aggregator.total_value(selected),
        )
        return self._telemetry.emit(payload)

    def extract_full_state(self, grid: IGridSurface | None) -> TelemetryEvent | None:
        """Emit full_grid_state_extracted: every row plus columns, filters and aggregates.

        Scans all rows; callers trigger this on demand rather than per render.
        """
        if grid is None:
            logger.debug("Grid not ready, skipping full state extraction")
            return None

        all_rows: list[Row] = []
        grid.for_each_row(all_rows.append)

        payload = FullGridStatePayload(
            total_rows=len(all_rows),
            displayed_rows=grid.displayed_row_count(),
            selected_rows=len(grid.selected_rows()),
            all_data=all_rows,
            column_state=grid.column_state(),
            active_filters=grid.filter_model(),
            first_row=grid.first_displayed_index(),
            last_row=grid.last_displayed_index(),
            aggregations=self._aggregator.summarize(all_rows),
        )
        logger.debug("Full grid state extracted: %d rows", len(all_rows))
        return self._telemetry.emit(payload)
