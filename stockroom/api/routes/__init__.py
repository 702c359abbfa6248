"""API route modules."""

from stockroom.api.routes.categories import router as categories_router
from stockroom.api.routes.dashboard import router as dashboard_router
from stockroom.api.routes.health import router as health_router
from stockroom.api.routes.products import router as products_router
from stockroom.api.routes.purchase_orders import router as purchase_orders_router
from stockroom.api.routes.reports import router as reports_router
from stockroom.api.routes.stock import router as stock_router
from stockroom.api.routes.stock_transactions import router as stock_transactions_router
from stockroom.api.routes.suppliers import router as suppliers_router
from stockroom.api.routes.users import router as users_router

__all__ = [
    "health_router",
    "categories_router",
    "suppliers_router",
    "products_router",
    "stock_router",
    "stock_transactions_router",
    "purchase_orders_router",
    "dashboard_router",
    "reports_router",
    "users_router",
]
