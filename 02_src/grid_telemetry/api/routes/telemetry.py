"""Telemetry stream API routes."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, Query

from ...app import IApplication


class TelemetryEventResponse(BaseModel):
    """Response model for a telemetry event (wire shape)."""

    id: str
    eventType: str
    timestamp: datetime
    data: Any


class StatsResponse(BaseModel):
    """Response model for grid statistics."""

    total_events: int
    visible_rows: int
    selected_rows: int
    buffer_capacity: int
    evicted_events: int


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


def create_telemetry_router(app: IApplication) -> APIRouter:
    """Create telemetry router."""
    router = APIRouter(prefix="/api/telemetry", tags=["telemetry"])

    @router.get("/events", response_model=list[TelemetryEventResponse])
    async def get_events(
        limit: int = Query(50, ge=1, le=1000),
        event_type: str | None = Query(None, description="Filter by event type"),
    ) -> list[dict]:
        """Get buffered events, newest first."""
        events = app.telemetry.snapshot()
        if event_type:
            events = tuple(e for e in events if e.event_type == event_type)
        return [e.to_wire() for e in events[:limit]]

    @router.delete("/events", response_model=StatusResponse)
    async def clear_events() -> dict:
        """Clear the event buffer and statistics."""
        app.session.clear_telemetry()
        return {"status": "ok"}

    @router.get("/stats", response_model=StatsResponse)
    async def get_stats() -> dict:
        """Get observable grid statistics."""
        stats = app.session.stats
        return {
            "total_events": stats.total_events,
            "visible_rows": stats.visible_rows,
            "selected_rows": stats.selected_rows,
            "buffer_capacity": app.telemetry.capacity,
            "evicted_events": app.telemetry.evicted_count,
        }

    return router
