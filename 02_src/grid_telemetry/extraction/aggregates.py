"""Aggregates computed over row collections at extraction time."""

from dataclasses import dataclass
from typing import Iterable

from ..models import GridAggregations, Row

# Average over an empty row set
EMPTY_AVERAGE = 0.0


@dataclass(frozen=True)
class RowAggregator:
    """Field configuration for the derived values carried in payloads.

    ``value_fields`` are multiplied per row and summed (price x quantity for
    inventory rows); ``price_field`` is averaged; ``stock_field`` is counted
    by truthiness.
    """

    value_fields: tuple[str, ...] = ("price", "quantity")
    price_field: str = "price"
    stock_field: str = "inStock"

    def row_value(self, row: Row) -> float:
        value = 1
        for name in self.value_fields:
            value *= row.get(name) or 0
        return value

    def total_value(self, rows: Iterable[Row]) -> float:
        return sum((self.row_value(row) for row in rows), 0)

    def average_price(self, rows: list[Row]) -> float:
        if not rows:
            return EMPTY_AVERAGE
        return sum((row.get(self.price_field) or 0) for row in rows) / len(rows)

    def summarize(self, rows: list[Row]) -> GridAggregations:
        in_stock = sum(1 for row in rows if row.get(self.stock_field))
        return GridAggregations(
            total_inventory_value=self.total_value(rows),
            avg_price=self.average_price(rows),
            in_stock_count=in_stock,
            out_of_stock_count=len(rows) - in_stock,
        )
