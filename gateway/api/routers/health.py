"""Liveness endpoint.

Routes
------
GET /health    Service status; never calls the backend.
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel

from gateway import __version__
from gateway.log import SERVICE_NAME

router = APIRouter()


class HealthOut(BaseModel):
    status: str
    service: str
    version: str
    timestamp: str
    backend: str


@router.get("", response_model=HealthOut)
def health_endpoint(request: Request) -> HealthOut:
    """Report that the gateway is up and which backend it forwards to."""
    return HealthOut(
        status="healthy",
        service=SERVICE_NAME,
        version=__version__,
        timestamp=datetime.now(timezone.utc).isoformat(),
        backend=request.app.state.settings.api_base_url,
    )
