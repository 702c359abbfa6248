"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from stockroom.application.dto.responses import DatabaseHealthResponse, HealthResponse
from stockroom.config import get_logger, get_settings

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=DatabaseHealthResponse)
async def db_health() -> DatabaseHealthResponse:
    """
    Database health check.

    Tests SQLite connectivity, response time and schema version.
    """
    from stockroom.infrastructure.storage.sqlite import get_pool
    from stockroom.infrastructure.storage.sqlite.migrations import get_current_version

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
            version = await get_current_version(conn)
        latency = (time.time() - start) * 1000
    except Exception as e:
        logger.warning("database_health_check_failed", error=str(e))
        return DatabaseHealthResponse(status="unhealthy", error=str(e))

    return DatabaseHealthResponse(
        status="healthy",
        schema_version=version,
        latency_ms=round(latency, 2),
    )
