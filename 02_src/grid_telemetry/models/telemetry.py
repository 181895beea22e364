"""Telemetry event data models."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any


class EventType(str, Enum):
    """Event types emitted by the grid telemetry pipeline."""

    GRID_INITIALIZED = "grid_initialized"
    VISIBLE_ROWS_EXTRACTED = "visible_rows_extracted"
    SELECTED_ROWS_EXTRACTED = "selected_rows_extracted"
    FULL_GRID_STATE_EXTRACTED = "full_grid_state_extracted"
    GRID_SCROLLED = "grid_scrolled"
    ROW_SELECTED = "row_selected"


def freeze(value: Any) -> Any:
    """Deep read-only copy: mappings become MappingProxyType, lists become tuples.

    Other values are returned as is.
    """
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of freeze(): plain dicts and lists, safe to hand to a JSON encoder."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


@dataclass(frozen=True)
class TelemetryEvent:
    """A single stamped telemetry event held in the EventBuffer.

    Untyped ``data`` is deep-frozen on construction so buffered events
    cannot be changed through a snapshot. Typed payloads freeze themselves.
    """

    id: str
    event_type: str
    timestamp: datetime
    data: Any  # payload variant or any structured value

    def __post_init__(self):
        if not hasattr(self.data, "to_dict"):
            object.__setattr__(self, "data", freeze(self.data))

    def to_wire(self) -> dict:
        """Convert to the JSON object forwarded to external collectors."""
        data = self.data
        if hasattr(data, "to_dict"):
            data = data.to_dict()
        else:
            data = thaw(data)
        return {
            "id": self.id,
            "eventType": self.event_type,
            "timestamp": self.timestamp.isoformat(),
            "data": data,
        }
