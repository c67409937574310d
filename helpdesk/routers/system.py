"""System routes: unauthenticated health check."""
from __future__ import annotations

from fastapi import APIRouter

from helpdesk import schemas

router = APIRouter(tags=["System"])


@router.get("/health", response_model=schemas.HealthResponse)
async def health() -> schemas.HealthResponse:
    return schemas.HealthResponse(status="healthy")
