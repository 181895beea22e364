"""Static product inventory used to populate the demo grid."""

from .memory_grid import ColumnDef, InMemoryGrid

SAMPLE_COLUMNS = [
    ColumnDef(field="id", width=80),
    ColumnDef(field="product", filter="text"),
    ColumnDef(field="category", filter="text"),
    ColumnDef(field="price", filter="number"),
    ColumnDef(field="quantity", width=100, filter="number"),
    ColumnDef(field="inStock", width=120),
    ColumnDef(field="lastUpdated", width=120),
]


def generate_sample_data() -> list[dict]:
    """Fifteen products, twelve of them in stock."""
    return [
        {"id": 1, "product": 'MacBook Pro 16"', "category": "Electronics", "price": 2499, "quantity": 12, "inStock": True, "lastUpdated": "2024-01-15"},
        {"id": 2, "product": "Logitech MX Master 3", "category": "Electronics", "price": 99, "quantity": 45, "inStock": True, "lastUpdated": "2024-01-14"},
        {"id": 3, "product": "Mechanical Keyboard", "category": "Electronics", "price": 149, "quantity": 28, "inStock": True, "lastUpdated": "2024-01-13"},
        {"id": 4, "product": 'Dell UltraSharp 27"', "category": "Electronics", "price": 549, "quantity": 8, "inStock": True, "lastUpdated": "2024-01-12"},
        {"id": 5, "product": "Herman Miller Aeron", "category": "Furniture", "price": 1395, "quantity": 5, "inStock": False, "lastUpdated": "2024-01-11"},
        {"id": 6, "product": "Standing Desk Pro", "category": "Furniture", "price": 799, "quantity": 15, "inStock": True, "lastUpdated": "2024-01-10"},
        {"id": 7, "product": "Moleskine Notebook", "category": "Stationery", "price": 25, "quantity": 120, "inStock": True, "lastUpdated": "2024-01-09"},
        {"id": 8, "product": "Premium Pen Set", "category": "Stationery", "price": 45, "quantity": 67, "inStock": True, "lastUpdated": "2024-01-08"},
        {"id": 9, "product": "USB-C Hub 7-in-1", "category": "Electronics", "price": 79, "quantity": 89, "inStock": True, "lastUpdated": "2024-01-07"},
        {"id": 10, "product": "Logitech C920 Webcam", "category": "Electronics", "price": 69, "quantity": 34, "inStock": False, "lastUpdated": "2024-01-06"},
        {"id": 11, "product": "AirPods Pro 2", "category": "Electronics", "price": 249, "quantity": 56, "inStock": True, "lastUpdated": "2024-01-05"},
        {"id": 12, "product": 'iPad Pro 12.9"', "category": "Electronics", "price": 1099, "quantity": 19, "inStock": True, "lastUpdated": "2024-01-04"},
        {"id": 13, "product": "Desk Lamp LED", "category": "Furniture", "price": 89, "quantity": 42, "inStock": True, "lastUpdated": "2024-01-03"},
        {"id": 14, "product": "Filing Cabinet", "category": "Furniture", "price": 199, "quantity": 11, "inStock": False, "lastUpdated": "2024-01-02"},
        {"id": 15, "product": "Whiteboard 48x36", "category": "Office", "price": 129, "quantity": 7, "inStock": True, "lastUpdated": "2024-01-01"},
    ]


def create_sample_grid(**kwargs) -> InMemoryGrid:
    """Create an InMemoryGrid over the sample inventory."""
    return InMemoryGrid(generate_sample_data(), SAMPLE_COLUMNS, **kwargs)
