"""Grid state data models read through the capability surface."""

from dataclasses import dataclass
from typing import Any, Literal, Mapping

Row = Mapping[str, Any]
SortDirection = Literal["asc", "desc"]
PinnedSide = Literal["left", "right"]
ScrollDirection = Literal["vertical", "horizontal"]


@dataclass(frozen=True)
class ColumnState:
    """Render state of one grid column."""

    col_id: str
    width: int | None = None
    hide: bool = False
    sort: SortDirection | None = None
    sort_index: int | None = None
    pinned: PinnedSide | None = None

    def to_dict(self) -> dict:
        return {
            "colId": self.col_id,
            "width": self.width,
            "hide": self.hide,
            "sort": self.sort,
            "sortIndex": self.sort_index,
            "pinned": self.pinned,
        }


@dataclass(frozen=True)
class ScrollEvent:
    """A body-scroll notification delivered by the grid."""

    direction: ScrollDirection
    top: float
    left: float


@dataclass(frozen=True)
class RowSelectionChange:
    """A row-selection transition delivered by the grid."""

    row_id: Any
    data: Row | None
    selected: bool
