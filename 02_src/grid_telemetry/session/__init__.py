"""Grid session module."""

from .session import SELECTION_SOURCE, GridSession, GridStats, IGridSession

__all__ = ["GridSession", "GridStats", "IGridSession", "SELECTION_SOURCE"]
