"""Health Probe — liveness endpoint for container orchestration.

Invariants:
    - GET /health always returns 200 if the process is up
    - uptime is measured from app creation, in milliseconds

Design Decisions:
    - No readiness probe: storage is in-process, there is nothing external to check
"""

import time
from typing import Literal

from fastapi import APIRouter, Request, status
from pydantic import BaseModel

router = APIRouter(prefix="/health", tags=["health"])


class HealthStatus(BaseModel):
    status: Literal["ok"]
    timestamp: int
    version: str
    uptime: int


@router.get("", response_model=HealthStatus, status_code=status.HTTP_200_OK)
async def health_check(request: Request):
    """Basic liveness probe. Returns 200 if the process is up."""
    now_ms = int(time.time() * 1000)
    return HealthStatus(
        status="ok",
        timestamp=now_ms,
        version=request.app.version,
        uptime=now_ms - request.app.state.started_at_ms,
    )
