"""Application use cases."""

from stockroom.application.use_cases.apply_movement import ApplyMovementUseCase
from stockroom.application.use_cases.cancel_purchase_order import CancelPurchaseOrderUseCase
from stockroom.application.use_cases.create_product import CreateProductUseCase
from stockroom.application.use_cases.create_purchase_order import CreatePurchaseOrderUseCase
from stockroom.application.use_cases.create_user import CreateUserUseCase
from stockroom.application.use_cases.delete_user import DeleteUserUseCase
from stockroom.application.use_cases.get_dashboard_stats import (
    DashboardStats,
    GetDashboardStatsUseCase,
)
from stockroom.application.use_cases.get_report_statistics import (
    GetReportStatisticsUseCase,
    ReportStatistics,
)
from stockroom.application.use_cases.receive_purchase_order import (
    ReceivePurchaseOrderUseCase,
)
from stockroom.application.use_cases.reconcile_stock import (
    ReconcileStockUseCase,
    ReconciliationResult,
)
from stockroom.application.use_cases.transition_purchase_order import (
    TransitionPurchaseOrderUseCase,
)
from stockroom.application.use_cases.update_user_profile import UpdateUserProfileUseCase

__all__ = [
    "ApplyMovementUseCase",
    "CreateProductUseCase",
    "CreatePurchaseOrderUseCase",
    "ReceivePurchaseOrderUseCase",
    "CancelPurchaseOrderUseCase",
    "TransitionPurchaseOrderUseCase",
    "GetDashboardStatsUseCase",
    "DashboardStats",
    "GetReportStatisticsUseCase",
    "ReportStatistics",
    "ReconcileStockUseCase",
    "ReconciliationResult",
    "CreateUserUseCase",
    "UpdateUserProfileUseCase",
    "DeleteUserUseCase",
]
