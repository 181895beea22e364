"""Tests for TelemetryService."""

from datetime import datetime, timedelta, timezone

import pytest

from grid_telemetry.models import EventType, GridInitializedPayload
from grid_telemetry.telemetry import TelemetryService
from grid_telemetry.telemetry import service as service_module


class TestTelemetryServiceSend:
    """Tests for TelemetryService.send()."""

    def test_send_returns_stamped_event(self, telemetry):
        """Test that send() builds and stores an event."""
        event = telemetry.send("grid_scrolled", {"top": 10})

        assert event.event_type == "grid_scrolled"
        assert event.data == {"top": 10}
        assert event.id
        assert event.timestamp.tzinfo is not None
        assert telemetry.snapshot() == (event,)

    def test_send_accepts_event_type_enum(self, telemetry):
        """Test that EventType members are stored by value."""
        event = telemetry.send(EventType.ROW_SELECTED, {})
        assert event.event_type == "row_selected"

    def test_buffer_bound_keeps_50_newest(self, telemetry):
        """Test that after more than 50 sends exactly the newest 50 remain."""
        sent = []
        for n in range(75):
            sent.append(telemetry.send("test", n))
            assert len(telemetry.snapshot()) <= 50

        snapshot = telemetry.snapshot()
        assert len(snapshot) == 50
        assert list(snapshot) == list(reversed(sent[-50:]))
        assert telemetry.evicted_count == 25

    def test_ids_are_unique(self, telemetry):
        """Test that every event gets a distinct id."""
        ids = {telemetry.send("test", n).id for n in range(200)}
        assert len(ids) == 200

    def test_timestamps_non_decreasing(self, telemetry):
        """Test timestamps in insertion order."""
        for n in range(20):
            telemetry.send("test", n)

        stamps = [e.timestamp for e in reversed(telemetry.snapshot())]
        assert stamps == sorted(stamps)

    def test_timestamp_clamped_when_clock_steps_back(self, telemetry, monkeypatch):
        """Test that a clock stepping backwards doesn't reorder timestamps."""
        base = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        readings = [base, base - timedelta(seconds=5), base + timedelta(seconds=1)]

        class FakeDatetime:
            @staticmethod
            def now(tz=None):
                return readings.pop(0)

        monkeypatch.setattr(service_module, "datetime", FakeDatetime)

        first = telemetry.send("test", 1)
        second = telemetry.send("test", 2)
        third = telemetry.send("test", 3)

        assert first.timestamp == base
        assert second.timestamp == base
        assert third.timestamp == base + timedelta(seconds=1)

    def test_send_accepts_unserializable_data(self, telemetry):
        """Test that send() does not serialize data itself."""
        marker = object()
        event = telemetry.send("test", {"obj": marker})
        assert event.data["obj"] is marker

    def test_emit_uses_payload_event_type(self, telemetry):
        """Test typed emission."""
        payload = GridInitializedPayload(total_rows=1, columns=["id"], grid_version="v")
        event = telemetry.emit(payload)

        assert event.event_type == "grid_initialized"
        assert event.data is payload


class TestTelemetryServiceSinks:
    """Tests for sink and listener fan-out."""

    def test_sinks_receive_events(self, telemetry, sink):
        """Test that each event reaches the sinks."""
        event = telemetry.send("test", 1)
        assert sink.events == [event]

    def test_failing_sink_does_not_break_send(self, sink):
        """Test that sink errors are absorbed."""

        class FailingSink:
            def handle(self, event):
                raise RuntimeError("boom")

            async def aclose(self):
                pass

        telemetry = TelemetryService(sinks=[FailingSink(), sink])
        event = telemetry.send("test", 1)

        assert sink.events == [event]
        assert len(telemetry) == 1

    def test_add_sink(self, sink):
        """Test attaching a sink after construction."""
        telemetry = TelemetryService(sinks=[])
        telemetry.add_sink(sink)
        telemetry.send("test", 1)
        assert len(sink.events) == 1

    def test_listeners(self, telemetry):
        """Test subscribe and unsubscribe."""
        seen = []
        telemetry.subscribe(seen.append)
        telemetry.send("test", 1)
        telemetry.unsubscribe(seen.append)
        telemetry.send("test", 2)

        assert [e.data for e in seen] == [1]

    def test_failing_listener_is_absorbed(self, telemetry):
        """Test that listener errors don't propagate."""

        def bad_listener(event):
            raise ValueError("bad")

        telemetry.subscribe(bad_listener)
        event = telemetry.send("test", 1)
        assert telemetry.snapshot() == (event,)

    @pytest.mark.asyncio
    async def test_aclose_closes_sinks_once(self, telemetry, sink):
        """Test closing the service closes sinks and is idempotent."""
        await telemetry.aclose()
        await telemetry.aclose()
        assert sink.closed


class TestTelemetryServiceClear:
    """Tests for clear() and snapshots."""

    def test_clear_empties_buffer(self, telemetry):
        """Test clear() and its idempotence."""
        telemetry.send("test", 1)
        telemetry.clear()
        telemetry.clear()
        assert telemetry.snapshot() == ()

    def test_snapshot_not_retroactively_mutated(self, telemetry):
        """Test that snapshots are isolated from later send/clear."""
        telemetry.send("test", 1)
        snap = telemetry.snapshot()

        telemetry.send("test", 2)
        assert len(snap) == 1

        telemetry.clear()
        assert len(snap) == 1

    def test_custom_capacity(self):
        """Test a smaller configured capacity."""
        telemetry = TelemetryService(capacity=2, sinks=[])
        for n in range(5):
            telemetry.send("test", n)

        assert telemetry.capacity == 2
        assert [e.data for e in telemetry.snapshot()] == [4, 3]
