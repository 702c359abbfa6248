"""
Application layer - Use cases and DTOs.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate the stores behind core interfaces
"""

from stockroom.application.dto import ErrorResponse, PaginatedResponse
from stockroom.application.use_cases import (
    ApplyMovementUseCase,
    CancelPurchaseOrderUseCase,
    ReceivePurchaseOrderUseCase,
    TransitionPurchaseOrderUseCase,
)

__all__ = [
    "ErrorResponse",
    "PaginatedResponse",
    "ApplyMovementUseCase",
    "ReceivePurchaseOrderUseCase",
    "CancelPurchaseOrderUseCase",
    "TransitionPurchaseOrderUseCase",
]
