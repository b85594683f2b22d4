# gateway/routers/health.py
# Health check endpoints for monitoring and load balancers
# Provides liveness and readiness probes

import time
import asyncio
import logging
from typing import Dict, Any
from fastapi import APIRouter, Request, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Upper bound for the probe query
DB_CHECK_TIMEOUT_SECONDS = 5.0


class HealthStatus(BaseModel):
    """Health check response model."""
    status: str  # "healthy", "unhealthy"
    timestamp: float
    version: str
    checks: Dict[str, Dict[str, Any]] = {}


class ComponentHealth(BaseModel):
    """Individual component health."""
    status: str
    latency_ms: float = 0.0
    message: str = ""


async def check_database_health(request: Request) -> ComponentHealth:
    """Run SELECT 1 through the application's engine."""
    start = time.time()
    engine = getattr(request.app.state, "engine", None)
    if engine is None:
        return ComponentHealth(status="unhealthy", message="Database engine not initialized")

    async def _probe():
        async with engine.connect() as conn:
            return await conn.scalar(text("SELECT 1"))

    try:
        result = await asyncio.wait_for(_probe(), timeout=DB_CHECK_TIMEOUT_SECONDS)
    except asyncio.TimeoutError:
        return ComponentHealth(
            status="unhealthy",
            latency_ms=(time.time() - start) * 1000,
            message="Database connection timeout"
        )
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database health check failed: {e}")
        return ComponentHealth(
            status="unhealthy",
            latency_ms=(time.time() - start) * 1000,
            message=f"Database error: {type(e).__name__}"
        )

    latency_ms = (time.time() - start) * 1000
    if result != 1:
        return ComponentHealth(
            status="unhealthy",
            latency_ms=latency_ms,
            message="Database query returned unexpected result"
        )
    return ComponentHealth(status="healthy", latency_ms=latency_ms, message=engine.dialect.name)


@router.get("/health", response_model=HealthStatus)
async def health_check(request: Request, response: Response):
    """
    Full health check endpoint.
    Returns status of all components.
    """
    db_health = await check_database_health(request)
    checks = {
        "database": {
            "status": db_health.status,
            "latency_ms": round(db_health.latency_ms, 2),
            "message": db_health.message
        }
    }

    overall_status = "healthy"
    if db_health.status == "unhealthy":
        overall_status = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthStatus(
        status=overall_status,
        timestamp=time.time(),
        version=request.app.state.settings.VERSION,
        checks=checks
    )


@router.get("/health/live")
async def liveness_probe():
    """
    Liveness probe.
    Returns 200 if the application is running.
    Does NOT check external dependencies.
    """
    return {"status": "alive"}


@router.get("/health/ready")
async def readiness_probe(request: Request, response: Response):
    """
    Readiness probe.
    Returns 200 only if the view store is reachable.
    """
    db_health = await check_database_health(request)

    if db_health.status == "unhealthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {
            "status": "not_ready",
            "reason": db_health.message
        }

    return {"status": "ready"}
