"""EventBuffer implementation."""

from collections import deque

from ..config import DEFAULT_BUFFER_CAPACITY
from ..models import TelemetryEvent


class EventBuffer:
    """Rolling window of the most recent TelemetryEvents, newest first.

    Inserting at capacity evicts the oldest entry. Readers get tuple
    snapshots, never the underlying deque.
    """

    def __init__(self, capacity: int = DEFAULT_BUFFER_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        # appendleft on a full bounded deque drops the rightmost (oldest) item
        self._events: deque[TelemetryEvent] = deque(maxlen=capacity)
        self._evicted_count = 0

    @property
    def capacity(self) -> int:
        """Maximum number of retained events."""
        return self._events.maxlen or 0

    @property
    def evicted_count(self) -> int:
        """Number of events dropped off the tail since creation."""
        return self._evicted_count

    def add(self, event: TelemetryEvent) -> None:
        """Insert an event at the head of the buffer."""
        if len(self._events) == self._events.maxlen:
            self._evicted_count += 1
        self._events.appendleft(event)

    def snapshot(self) -> tuple[TelemetryEvent, ...]:
        """Get an immutable copy of the current contents."""
        return tuple(self._events)

    def clear(self) -> None:
        """Clear the buffer."""
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
