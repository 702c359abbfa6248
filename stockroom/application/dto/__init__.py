"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.
"""

from stockroom.application.dto.requests import (
    CategoryRequest,
    ProductCreateRequest,
    ProductUpdateRequest,
    PurchaseOrderCreateRequest,
    PurchaseOrderItemRequest,
    PurchaseOrderStatusRequest,
    StockMovementRequest,
    SupplierCreateRequest,
    UserCreateRequest,
    UserProfileRequest,
)
from stockroom.application.dto.responses import (
    ApplyMovementResponse,
    CategoryResponse,
    DashboardStatsResponse,
    DatabaseHealthResponse,
    ErrorResponse,
    HealthResponse,
    PaginatedResponse,
    ProductListResponse,
    ProductResponse,
    PurchaseOrderListResponse,
    PurchaseOrderResponse,
    ReportStatisticsResponse,
    StockAlertsResponse,
    StockMovementListResponse,
    StockMovementResponse,
    SupplierResponse,
    UserResponse,
)

__all__ = [
    # Requests
    "CategoryRequest",
    "SupplierCreateRequest",
    "ProductCreateRequest",
    "ProductUpdateRequest",
    "StockMovementRequest",
    "PurchaseOrderItemRequest",
    "PurchaseOrderCreateRequest",
    "PurchaseOrderStatusRequest",
    "UserCreateRequest",
    "UserProfileRequest",
    # Responses
    "CategoryResponse",
    "SupplierResponse",
    "UserResponse",
    "ProductResponse",
    "ProductListResponse",
    "StockMovementResponse",
    "StockMovementListResponse",
    "ApplyMovementResponse",
    "StockAlertsResponse",
    "PurchaseOrderResponse",
    "PurchaseOrderListResponse",
    "DashboardStatsResponse",
    "ReportStatisticsResponse",
    "HealthResponse",
    "DatabaseHealthResponse",
    "ErrorResponse",
    "PaginatedResponse",
]
