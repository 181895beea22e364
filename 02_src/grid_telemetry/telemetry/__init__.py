"""Telemetry pipeline: bounded buffer, emitter, sinks."""

from .buffer import EventBuffer
from .service import EventListener, ITelemetryService, TelemetryService
from .sinks import HttpSink, ITelemetrySink, LogSink

__all__ = [
    "EventBuffer",
    "EventListener",
    "ITelemetryService",
    "TelemetryService",
    "ITelemetrySink",
    "LogSink",
    "HttpSink",
]
