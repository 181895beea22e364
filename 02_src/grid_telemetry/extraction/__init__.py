"""Extraction adapters from grid state to telemetry events."""

from .aggregates import EMPTY_AVERAGE, RowAggregator
from .extractors import GridExtractor
from .scroll import ScrollState, ScrollTracker

__all__ = [
    "EMPTY_AVERAGE",
    "RowAggregator",
    "GridExtractor",
    "ScrollState",
    "ScrollTracker",
]
