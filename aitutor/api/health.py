"""
Health and readiness endpoints.

Lightweight probes for operational monitoring; no secrets are exposed.
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import inspect

from aitutor.core.database import get_engine, is_configured
from aitutor.core.logging import get_request_id, latency_bucket_ms

logger = logging.getLogger("aitutor")

root_router = APIRouter(tags=["health"])

REQUIRED_TABLES = (
    "user_profiles",
    "user_progress",
    "user_streaks",
    "chat_messages",
    "notifications",
)


@root_router.get("/healthz")
def healthz():
    """Lightweight liveness check (no deps)."""
    return {"status": "ok"}


@root_router.get("/readyz")
def readyz():
    """Readiness check: DB connectivity + required tables. Unconfigured store means demo mode."""
    if not is_configured():
        return {"status": "ok", "mode": "demo"}

    start = time.perf_counter()
    try:
        engine = get_engine()
        with engine.connect() as conn:
            conn.exec_driver_sql("SELECT 1")

        inspector = inspect(engine)
        missing = [t for t in REQUIRED_TABLES if not inspector.has_table(t)]
        if missing:
            detail = f"missing tables: {', '.join(missing)}"
            logger.warning(f"[readyz] {detail}")
            return JSONResponse(status_code=503, content={"status": "error", "detail": detail})
    except Exception as e:
        logger.error(f"[readyz] readiness check failed: {e}")
        return JSONResponse(status_code=503, content={"status": "error", "detail": "database unreachable"})

    logger.info(
        "readyz",
        extra={
            "request_id": get_request_id(),
            "latency_bucket": latency_bucket_ms((time.perf_counter() - start) * 1000),
        },
    )
    return {"status": "ok"}
