"""Tests for EventBuffer."""

from datetime import datetime, timezone

import pytest

from grid_telemetry.models import TelemetryEvent
from grid_telemetry.telemetry import EventBuffer


def make_event(n: int) -> TelemetryEvent:
    return TelemetryEvent(
        id=f"e{n}", event_type="test", timestamp=datetime.now(timezone.utc), data=n
    )


class TestEventBuffer:
    """Tests for bounded, newest-first storage."""

    def test_default_capacity(self):
        """Test that the default capacity is 50."""
        assert EventBuffer().capacity == 50

    def test_invalid_capacity(self):
        """Test that capacity below 1 is rejected."""
        with pytest.raises(ValueError):
            EventBuffer(0)

    def test_newest_first(self):
        """Test that the newest event is at the head."""
        buffer = EventBuffer()
        for n in range(3):
            buffer.add(make_event(n))

        assert [e.id for e in buffer.snapshot()] == ["e2", "e1", "e0"]

    def test_evicts_oldest_at_capacity(self):
        """Test that the tail is evicted once capacity is reached."""
        buffer = EventBuffer(capacity=3)
        for n in range(5):
            buffer.add(make_event(n))
            assert len(buffer) <= 3

        assert [e.id for e in buffer.snapshot()] == ["e4", "e3", "e2"]
        assert buffer.evicted_count == 2

    def test_snapshot_is_a_copy(self):
        """Test that later inserts don't change an earlier snapshot."""
        buffer = EventBuffer()
        buffer.add(make_event(0))
        snap = buffer.snapshot()

        buffer.add(make_event(1))
        buffer.clear()

        assert isinstance(snap, tuple)
        assert [e.id for e in snap] == ["e0"]

    def test_clear_is_idempotent(self):
        """Test clearing twice."""
        buffer = EventBuffer()
        buffer.add(make_event(0))
        buffer.clear()
        buffer.clear()

        assert len(buffer) == 0
        assert buffer.snapshot() == ()
