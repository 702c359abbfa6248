"""
FastAPI application factory.

Creates and configures the main application instance.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockroom.api.dependencies import get_actor_id
from stockroom.api.middleware import ErrorHandlerMiddleware, LoggingMiddleware
from stockroom.api.middleware.error_handler import setup_exception_handlers
from stockroom.api.routes import (
    categories_router,
    dashboard_router,
    health_router,
    products_router,
    purchase_orders_router,
    reports_router,
    stock_router,
    stock_transactions_router,
    suppliers_router,
    users_router,
)
from stockroom.config import configure_logging, get_logger, get_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.

    Migrates the database and opens the connection pool on startup,
    closes the pool on shutdown.
    """
    settings = get_settings()

    logger.info(
        "application_starting",
        host=settings.api.host,
        port=settings.api.port,
        environment=settings.environment,
    )

    try:
        from stockroom.infrastructure.storage.sqlite import get_pool
        from stockroom.infrastructure.storage.sqlite.migrations import run_migrations

        results = await run_migrations()
        failed = [r for r in results if not r.success]
        if failed:
            raise RuntimeError(f"Migration v{failed[0].version} failed: {failed[0].error}")
        logger.info("database_initialized", applied=len(results))

        await get_pool()
        logger.info("connection_pool_ready")

    except Exception as e:
        logger.error("database_init_failed", error=str(e))
        raise

    logger.info("application_started")

    yield

    logger.info("application_stopping")

    try:
        from stockroom.infrastructure.storage.sqlite import close_pool, reset_stores

        await close_pool()
        reset_stores()

    except Exception as e:
        logger.warning("connection_pool_close_failed", error=str(e))

    logger.info("application_stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        description="Inventory stock ledger, purchase order receiving and reporting",
        version=settings.app_version,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(LoggingMiddleware)

    # CORS
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    setup_exception_handlers(app)

    # Every business route requires the actor header
    actor_required = [Depends(get_actor_id)]

    app.include_router(health_router)
    app.include_router(categories_router, dependencies=actor_required)
    app.include_router(suppliers_router, dependencies=actor_required)
    app.include_router(products_router, dependencies=actor_required)
    app.include_router(stock_router, dependencies=actor_required)
    app.include_router(stock_transactions_router, dependencies=actor_required)
    app.include_router(purchase_orders_router, dependencies=actor_required)
    app.include_router(dashboard_router, dependencies=actor_required)
    app.include_router(reports_router, dependencies=actor_required)
    app.include_router(users_router, dependencies=actor_required)

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "stockroom.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
    )
