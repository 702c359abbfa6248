"""
Error handling middleware.

Standardizes all API error responses to include:
- error_code: machine-readable identifier
- message: human-readable description
- hint: suggested recovery action
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from stockroom.application.dto.responses import ErrorResponse
from stockroom.config import get_logger
from stockroom.core.exceptions import (
    ConflictError,
    DatabaseError,
    InsufficientStockError,
    NotFoundError,
    StockroomError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# First match wins, so subclasses come before their bases
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InsufficientStockError: status.HTTP_409_CONFLICT,
    ConflictError: status.HTTP_409_CONFLICT,
    DatabaseError: status.HTTP_503_SERVICE_UNAVAILABLE,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Hint messages per error code
HINT_MAP: dict[str, str] = {
    "VALIDATION_ERROR": "Fix the highlighted field and resend the request.",
    "PRODUCT_NOT_FOUND": "Refresh the product list; the product may have been deleted.",
    "CATEGORY_NOT_FOUND": "Refresh the category list with GET /api/categories.",
    "SUPPLIER_NOT_FOUND": "Refresh the supplier list with GET /api/suppliers.",
    "PURCHASE_ORDER_NOT_FOUND": "Refresh the order list with GET /api/purchase-orders.",
    "MOVEMENT_NOT_FOUND": "Refresh the transaction list with GET /api/stock-transactions.",
    "USER_NOT_FOUND": "Register the user first with POST /api/users.",
    "INSUFFICIENT_STOCK": "Choose a quantity no larger than the available stock.",
    "ORDER_ALREADY_RECEIVED": "The order was already received; reload it to see its current state.",
    "ORDER_CANCELLED": "The order is cancelled and can no longer change.",
    "ORDER_STATUS_CONFLICT": "Reload the order and check its status.",
    "DUPLICATE_SKU": "Pick a SKU that is not used by another product.",
    "CATEGORY_IN_USE": "Move or delete the category's products first.",
    "PRODUCT_IN_USE": "Products with stock history cannot be deleted.",
    "IDEMPOTENCY_KEY_REUSED": "Use a fresh Idempotency-Key for a different movement.",
    "DUPLICATE_EMAIL": "Use an email address no other user has.",
    "USER_EXISTS": "This actor id is already registered; update it instead.",
    "DATABASE_ERROR": "Nothing was saved. Retry the request shortly.",
    "UNAUTHORIZED": "Send the actor identity header with every request.",
}

# Default hints by HTTP status code
STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Authenticate and resend the request.",
    404: "The requested resource was not found. Verify the ID.",
    409: "Refresh and re-check the current state before retrying.",
    422: "The request could not be processed. Check the input format.",
    500: "An internal error occurred. Check server logs.",
    503: "The service is temporarily unavailable. Retry later.",
}


def _get_hint(error_code: str, status_code: int) -> str:
    """Resolve hint from error code, falling back to status-based hint."""
    return HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code, "")


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log the exception once and convert it to a standardized JSON response."""
    status_code = _status_for(exc)
    error_code = exc.code if isinstance(exc, StockroomError) else exc.__class__.__name__
    request_id = getattr(request.state, "request_id", None)

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        request_id=request_id,
        path=request.url.path,
        status=status_code,
        error_code=error_code,
        error=str(exc),
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    error_response = ErrorResponse(
        error_code=error_code,
        message=exc.message if isinstance(exc, StockroomError) else "Internal server error",
        hint=_get_hint(error_code, status_code),
        details=exc.details if isinstance(exc, StockroomError) else None,
        path=request.url.path,
    )

    headers = {"Retry-After": "1"} if status_code == status.HTTP_503_SERVICE_UNAVAILABLE else None
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
        headers=headers,
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Catches anything the registered exception handlers did not, so clients
    always receive the standard error body.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Handle request with error catching."""
        try:
            return await call_next(request)
        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    """Set up FastAPI exception handlers."""
    from fastapi.exceptions import RequestValidationError
    from starlette.exceptions import HTTPException

    @app.exception_handler(StockroomError)
    async def domain_exception_handler(
        request: Request,
        exc: StockroomError,
    ) -> JSONResponse:
        """Handle domain errors raised by use cases and stores."""
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle Pydantic validation errors."""
        errors = []
        for error in exc.errors():
            loc = " -> ".join(str(part) for part in error["loc"])
            errors.append({"field": loc, "message": error["msg"]})

        logger.warning(
            "request_validation_failed",
            request_id=getattr(request.state, "request_id", None),
            path=request.url.path,
            errors=len(errors),
        )
        return JSONResponse(
            status_code=422,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
                hint="Check the request body fields and types.",
                details={"errors": errors},
                path=request.url.path,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(
        request: Request,
        exc: HTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with standardized format."""
        error_code = _infer_error_code(exc.status_code)
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(
                error_code=error_code,
                message=str(exc.detail or "An error occurred"),
                hint=_get_hint(error_code, exc.status_code),
                path=request.url.path,
            ).model_dump(mode="json"),
            headers=getattr(exc, "headers", None),
        )


def _infer_error_code(status_code: int) -> str:
    """Infer a machine-readable error code from an HTTP status."""
    return {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        422: "UNPROCESSABLE_ENTITY",
    }.get(status_code, "HTTP_ERROR")
