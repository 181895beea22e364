"""Grid capability surface and the in-memory reference grid."""

from .memory_grid import BodyScrollCallback, ColumnDef, InMemoryGrid, RowSelectedCallback
from .sample_data import SAMPLE_COLUMNS, create_sample_grid, generate_sample_data
from .surface import IGridSurface, IInteractiveGrid

__all__ = [
    "IGridSurface",
    "IInteractiveGrid",
    "InMemoryGrid",
    "ColumnDef",
    "RowSelectedCallback",
    "BodyScrollCallback",
    "SAMPLE_COLUMNS",
    "create_sample_grid",
    "generate_sample_data",
]
