"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from grid_telemetry.api import create_fastapi_app
from grid_telemetry.api.routes import control
from grid_telemetry.app import Application
from grid_telemetry.config import TelemetrySettings


@pytest.fixture
def client():
    """Create a TestClient over a fresh Application."""
    application = Application(settings=TelemetrySettings(scroll_debounce_seconds=0.05))
    with TestClient(create_fastapi_app(application)) as test_client:
        yield test_client


class TestTelemetryRoutes:
    """Tests for /api/telemetry."""

    def test_events_after_start(self, client):
        """Test that grid_initialized is the first event."""
        response = client.get("/api/telemetry/events")

        assert response.status_code == 200
        events = response.json()
        assert len(events) == 1
        assert events[0]["eventType"] == "grid_initialized"
        assert events[0]["data"]["totalRows"] == 15
        assert set(events[0]) == {"id", "eventType", "timestamp", "data"}

    def test_events_filter_and_limit(self, client):
        """Test event_type and limit query parameters."""
        for _ in range(3):
            client.post("/api/grid/extract/visible")

        visible = client.get(
            "/api/telemetry/events", params={"event_type": "visible_rows_extracted"}
        ).json()
        limited = client.get("/api/telemetry/events", params={"limit": 2}).json()

        assert len(visible) == 3
        assert len(limited) == 2
        assert limited[0]["eventType"] == "visible_rows_extracted"

    def test_clear_events(self, client):
        """Test DELETE /events."""
        response = client.delete("/api/telemetry/events")

        assert response.json() == {"status": "ok"}
        assert client.get("/api/telemetry/events").json() == []
        stats = client.get("/api/telemetry/stats").json()
        assert stats["total_events"] == 0

    def test_stats(self, client):
        """Test GET /stats."""
        client.post("/api/grid/extract/visible")

        stats = client.get("/api/telemetry/stats").json()

        assert stats == {
            "total_events": 2,
            "visible_rows": 10,
            "selected_rows": 0,
            "buffer_capacity": 50,
            "evicted_events": 0,
        }

    def test_stats_report_evictions(self, client):
        """Test that events pushed out of the buffer are counted."""
        for _ in range(54):
            client.post("/api/grid/extract/visible")

        stats = client.get("/api/telemetry/stats").json()

        assert stats["total_events"] == 50
        assert stats["evicted_events"] == 5


class TestGridRoutes:
    """Tests for /api/grid."""

    def test_extract_visible(self, client):
        """Test viewport extraction."""
        event = client.post("/api/grid/extract/visible").json()["event"]

        assert event["eventType"] == "visible_rows_extracted"
        assert event["data"]["viewport"]["visibleRowCount"] == 10
        assert event["data"]["visibleProductIds"] == list(range(1, 11))

    def test_selection_then_extract(self, client):
        """Test row selection followed by selection extraction."""
        first = client.post("/api/grid/rows/3/selection", json={"selected": True}).json()
        repeat = client.post("/api/grid/rows/3/selection", json={"selected": True}).json()
        event = client.post("/api/grid/extract/selected").json()["event"]

        assert first == {"changed": True, "selected_rows": 1}
        assert repeat == {"changed": False, "selected_rows": 1}
        assert event["data"]["selectedIds"] == [3]
        assert event["data"]["totalSelectedValue"] == 149 * 28

    def test_deselect_emits_no_event(self, client):
        """Test that deselection is not logged individually."""
        client.post("/api/grid/rows/3/selection", json={"selected": True})
        response = client.post("/api/grid/rows/3/selection", json={"selected": False})

        selected_events = client.get(
            "/api/telemetry/events", params={"event_type": "row_selected"}
        ).json()
        assert response.json() == {"changed": True, "selected_rows": 0}
        assert len(selected_events) == 1

    def test_unknown_row(self, client):
        """Test selecting a missing row."""
        response = client.post("/api/grid/rows/99/selection", json={"selected": True})
        assert response.status_code == 404

    def test_extract_full(self, client):
        """Test full state extraction over HTTP."""
        client.put("/api/grid/filter-model", json={"category": {"type": "equals", "filter": "Electronics"}})
        client.put("/api/grid/sort", json={"sort_model": [{"col_id": "price", "sort": "desc"}]})

        data = client.post("/api/grid/extract/full").json()["event"]["data"]

        assert data["gridMetadata"]["totalRows"] == 15
        assert data["gridMetadata"]["displayedRows"] == 8
        assert data["aggregations"]["inStockCount"] == 12
        assert data["activeFilters"]["category"]["filterType"] == "text"

    def test_filter_model(self, client):
        """Test valid and invalid filter models."""
        ok = client.put("/api/grid/filter-model", json={"price": {"type": "greaterThan", "filter": 500}})
        bad = client.put("/api/grid/filter-model", json={"nope": {"type": "equals", "filter": 1}})

        assert ok.json() == {"displayed_rows": 5}
        assert bad.status_code == 422

    def test_sort(self, client):
        """Test valid and invalid sort models."""
        ok = client.put("/api/grid/sort", json={"sort_model": [{"col_id": "price", "sort": "asc"}]})
        bad_column = client.put("/api/grid/sort", json={"sort_model": [{"col_id": "nope", "sort": "asc"}]})
        bad_direction = client.put("/api/grid/sort", json={"sort_model": [{"col_id": "price", "sort": "up"}]})

        assert ok.json() == {"displayed_rows": 15}
        assert bad_column.status_code == 422
        assert bad_direction.status_code == 422

    def test_scroll(self, client):
        """Test that scrolling arms the debounce."""
        response = client.post("/api/grid/scroll", json={"top": 96})

        assert response.json() == {
            "moved": True,
            "scroll_state": "pending",
            "first_row": 2,
            "last_row": 11,
        }

    def test_scroll_without_movement(self, client):
        """Test a scroll that changes nothing."""
        response = client.post("/api/grid/scroll", json={"top": 0})
        assert response.json()["moved"] is False
        assert response.json()["scroll_state"] == "idle"


class TestControlRoutes:
    """Tests for /api/control."""

    def test_reset(self, client):
        """Test reset clears telemetry and selection."""
        client.post("/api/grid/rows/1/selection", json={"selected": True})

        response = client.post("/api/control/reset")

        assert response.json() == {"status": "ok"}
        assert client.get("/api/telemetry/events").json() == []
        assert client.post("/api/grid/extract/selected").json()["event"]["data"]["selectedCount"] == 0

    def test_sim_not_configured(self, client):
        """Test SIM routes without a SIM."""
        assert client.post("/api/control/sim/start").status_code == 404
        assert client.post("/api/control/sim/stop").status_code == 404

    def test_sim_start_stop(self, client):
        """Test SIM routes delegate to the configured SIM."""

        class FakeSim:
            def __init__(self):
                self.calls = []

            async def start(self):
                self.calls.append("start")

            async def stop(self):
                self.calls.append("stop")

        sim = FakeSim()
        control.set_sim_instance(sim)

        assert client.post("/api/control/sim/start").json() == {"status": "ok"}
        assert client.post("/api/control/sim/stop").json() == {"status": "ok"}
        assert sim.calls == ["start", "stop"]
