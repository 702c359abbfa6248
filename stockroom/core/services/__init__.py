"""
Core business logic services.

Layer-pure services that depend only on:
- stockroom/core/entities/*
- stockroom/core/interfaces/*
- stockroom/core/exceptions.py

NO infrastructure imports.
"""

from stockroom.core.services.stock_reports import (
    CategoryStockStats,
    MonthlyMovementStats,
    MovementStats,
    StockAlerts,
    SupplierOrderStats,
    category_stats,
    classify_alerts,
    month_window_start,
    monthly_stats,
    movement_stats,
    supplier_order_stats,
)

__all__ = [
    "CategoryStockStats",
    "MovementStats",
    "SupplierOrderStats",
    "MonthlyMovementStats",
    "StockAlerts",
    "category_stats",
    "movement_stats",
    "supplier_order_stats",
    "monthly_stats",
    "month_window_start",
    "classify_alerts",
]
