"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_BUFFER_CAPACITY = 50
DEFAULT_SCROLL_DEBOUNCE_SECONDS = 0.3
DEFAULT_ROW_HEIGHT = 48
DEFAULT_VIEWPORT_HEIGHT = 452  # 500px grid minus one 48px header row
GRID_VERSION = "grid-telemetry-memory"


@dataclass(frozen=True)
class TelemetrySettings:
    """Runtime settings for the telemetry pipeline."""

    buffer_capacity: int = DEFAULT_BUFFER_CAPACITY
    scroll_debounce_seconds: float = DEFAULT_SCROLL_DEBOUNCE_SECONDS
    endpoint: str | None = None


def load_settings(env: dict[str, str] | None = None) -> TelemetrySettings:
    """Build TelemetrySettings from environment variables."""
    source = os.environ if env is None else env

    capacity = int(source.get("TELEMETRY_BUFFER_CAPACITY", DEFAULT_BUFFER_CAPACITY))
    if capacity < 1:
        raise ValueError(f"TELEMETRY_BUFFER_CAPACITY must be >= 1, got {capacity}")

    debounce_ms = source.get("TELEMETRY_SCROLL_DEBOUNCE_MS")
    debounce = (
        int(debounce_ms) / 1000
        if debounce_ms is not None
        else DEFAULT_SCROLL_DEBOUNCE_SECONDS
    )
    if debounce < 0:
        raise ValueError(f"TELEMETRY_SCROLL_DEBOUNCE_MS must be >= 0, got {debounce_ms}")

    return TelemetrySettings(
        buffer_capacity=capacity,
        scroll_debounce_seconds=debounce,
        endpoint=source.get("TELEMETRY_ENDPOINT") or None,
    )
