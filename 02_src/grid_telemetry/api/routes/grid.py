"""Grid interaction and extraction API routes."""

from typing import Any, Literal

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException

from ...app import IApplication


class ExtractionResponse(BaseModel):
    """Response model for an extraction; event is null when the grid is not ready."""

    event: dict[str, Any] | None


class ScrollRequest(BaseModel):
    """Request model for scrolling the grid body."""

    top: float | None = Field(None, ge=0)
    left: float | None = Field(None, ge=0)


class ScrollResponse(BaseModel):
    """Response model for a scroll."""

    moved: bool
    scroll_state: str
    first_row: int
    last_row: int


class SelectionRequest(BaseModel):
    """Request model for selecting or deselecting a row."""

    selected: bool = True


class SelectionResponse(BaseModel):
    """Response model for a selection change."""

    changed: bool
    selected_rows: int


class SortEntry(BaseModel):
    """One column of the sort model."""

    col_id: str
    sort: Literal["asc", "desc"]


class SortRequest(BaseModel):
    """Request model for replacing the sort state."""

    sort_model: list[SortEntry] = []


class DisplayedRowsResponse(BaseModel):
    """Response model after filter or sort changes."""

    displayed_rows: int


def create_grid_router(app: IApplication) -> APIRouter:
    """Create grid router."""
    router = APIRouter(prefix="/api/grid", tags=["grid"])

    def _extraction(event) -> dict:
        return {"event": event.to_wire() if event is not None else None}

    @router.post("/extract/visible", response_model=ExtractionResponse)
    async def extract_visible() -> dict:
        """Extract rows in the current viewport."""
        try:
            return _extraction(app.session.extract_visible_rows())
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/extract/selected", response_model=ExtractionResponse)
    async def extract_selected() -> dict:
        """Extract currently selected rows."""
        try:
            return _extraction(app.session.extract_selected_rows())
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/extract/full", response_model=ExtractionResponse)
    async def extract_full() -> dict:
        """Extract the full grid state."""
        try:
            return _extraction(app.session.extract_full_state())
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/scroll", response_model=ScrollResponse)
    async def scroll(request: ScrollRequest) -> dict:
        """Scroll the grid body; grid_scrolled follows after the quiet period."""
        try:
            event = app.grid.scroll_to(top=request.top, left=request.left)
            tracker = app.session.scroll_tracker
            return {
                "moved": event is not None,
                "scroll_state": tracker.state.value if tracker else "idle",
                "first_row": app.grid.first_displayed_index(),
                "last_row": app.grid.last_displayed_index(),
            }
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.post("/rows/{row_id}/selection", response_model=SelectionResponse)
    async def set_selection(row_id: int, request: SelectionRequest) -> dict:
        """Select or deselect a row."""
        try:
            changed = app.grid.set_selected(row_id, request.selected)
            return {
                "changed": changed,
                "selected_rows": app.session.stats.selected_rows,
            }
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Row {row_id} not found")
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.put("/filter-model", response_model=DisplayedRowsResponse)
    async def set_filter_model(model: dict[str, dict[str, Any]]) -> dict:
        """Replace the active filter model."""
        try:
            app.grid.set_filter_model(model)
            return {"displayed_rows": app.grid.displayed_row_count()}
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.put("/sort", response_model=DisplayedRowsResponse)
    async def set_sort(request: SortRequest) -> dict:
        """Replace the sort state."""
        try:
            app.grid.apply_sort([(entry.col_id, entry.sort) for entry in request.sort_model])
            return {"displayed_rows": app.grid.displayed_row_count()}
        except ValueError as e:
            raise HTTPException(status_code=422, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
