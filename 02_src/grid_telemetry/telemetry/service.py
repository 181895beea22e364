"""TelemetryService implementation for stamping and storing events."""

import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Protocol

from ..config import DEFAULT_BUFFER_CAPACITY
from ..logging_config import get_logger
from ..models import EventType, ExtractionPayload, TelemetryEvent
from .buffer import EventBuffer
from .sinks import ITelemetrySink, LogSink

logger = get_logger(__name__)


EventListener = Callable[[TelemetryEvent], None]


class ITelemetryService(Protocol):
    """Stamping events into the bounded buffer and fanning them out to sinks."""

    def send(self, event_type: EventType | str, data: Any) -> TelemetryEvent:
        """Create a TelemetryEvent, store it at the head of the buffer, forward it."""
        ...

    def emit(self, payload: ExtractionPayload) -> TelemetryEvent:
        """Send a typed payload under its own event type."""
        ...

    def clear(self) -> None:
        """Empty the buffer."""
        ...

    def snapshot(self) -> tuple[TelemetryEvent, ...]:
        """Immutable copy of buffered events, newest first."""
        ...

    def subscribe(self, listener: EventListener) -> None:
        """Register a callback invoked after every send."""
        ...

    def unsubscribe(self, listener: EventListener) -> None:
        """Remove a previously registered callback."""
        ...


class TelemetryService:
    """Owns the EventBuffer; every event goes through send()."""

    def __init__(
        self,
        capacity: int = DEFAULT_BUFFER_CAPACITY,
        sinks: list[ITelemetrySink] | None = None,
    ):
        self._buffer = EventBuffer(capacity)
        self._sinks: list[ITelemetrySink] = [LogSink()] if sinks is None else list(sinks)
        self._listeners: list[EventListener] = []
        self._last_timestamp: datetime | None = None
        self._closed = False

    @property
    def capacity(self) -> int:
        return self._buffer.capacity

    @property
    def evicted_count(self) -> int:
        """Events dropped off the tail of the buffer so far."""
        return self._buffer.evicted_count

    def add_sink(self, sink: ITelemetrySink) -> None:
        """Attach an additional sink (e.g. an external collector)."""
        self._sinks.append(sink)

    def subscribe(self, listener: EventListener) -> None:
        """Register a callback invoked after every send."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: EventListener) -> None:
        """Remove a previously registered callback."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def send(self, event_type: EventType | str, data: Any) -> TelemetryEvent:
        """Create a TelemetryEvent, store it at the head of the buffer, forward it."""
        event = TelemetryEvent(
            id=str(uuid.uuid4()),
            event_type=event_type.value
            if isinstance(event_type, EventType)
            else str(event_type),
            timestamp=self._next_timestamp(),
            data=data,
        )
        self._buffer.add(event)

        for sink in self._sinks:
            try:
                sink.handle(event)
            except Exception as e:
                logger.error(
                    "Error in sink %s: %s", type(sink).__name__, e, exc_info=True
                )

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.error("Error in telemetry listener: %s", e, exc_info=True)

        return event

    def emit(self, payload: ExtractionPayload) -> TelemetryEvent:
        """Send a typed payload under its own event type."""
        return self.send(payload.event_type, payload)

    def clear(self) -> None:
        """Empty the buffer."""
        self._buffer.clear()
        logger.debug("Telemetry buffer cleared")

    def snapshot(self) -> tuple[TelemetryEvent, ...]:
        """Immutable copy of buffered events, newest first."""
        return self._buffer.snapshot()

    def __len__(self) -> int:
        return len(self._buffer)

    async def aclose(self) -> None:
        """Close all sinks. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        for sink in self._sinks:
            try:
                await sink.aclose()
            except Exception as e:
                logger.error("Error closing sink %s: %s", type(sink).__name__, e)
        self._listeners.clear()

    def _next_timestamp(self) -> datetime:
        # Wall clock may step backwards; insertion order must not
        now = datetime.now(timezone.utc)
        if self._last_timestamp is not None and now < self._last_timestamp:
            now = self._last_timestamp
        self._last_timestamp = now
        return now
