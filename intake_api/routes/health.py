# intake_api/routes/health.py
from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from intake_api.core.config import settings
from intake_api.core.logging import get_structlog_logger
from intake_api.db.session import health_check

logger = get_structlog_logger(__name__)

router = APIRouter(tags=["health"])

_STARTED_AT = time.time()


class HealthCheckResponse(BaseModel):
    status: str
    service: str
    environment: str
    timestamp: str
    uptime: float
    checks: Dict[str, Dict[str, str]]


@router.get("/health/live")
async def liveness():
    return {"status": "alive"}


@router.get("/health", response_model=HealthCheckResponse)
async def health():
    database = await health_check()
    healthy = database["status"] == "healthy"
    if not healthy:
        logger.warning("health.degraded", database=database)

    body = HealthCheckResponse(
        status="healthy" if healthy else "unhealthy",
        service="lead-intake-api",
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=round(time.time() - _STARTED_AT, 3),
        checks={"database": {k: str(v) for k, v in database.items()}},
    )
    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body.model_dump(),
    )
