"""File exports."""

from stockroom.infrastructure.export.csv_exporter import (
    movements_csv,
    orders_csv,
    products_csv,
)

__all__ = ["products_csv", "movements_csv", "orders_csv"]
