"""Liveness message and health check with database connectivity."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from gatehouse.core.config import Settings, get_settings
from gatehouse.core.database import check_db_connected, get_db
from gatehouse.schemas.health import HealthResponse, MessageResponse

router = APIRouter()


@router.get("/", response_model=MessageResponse)
def check() -> MessageResponse:
    """Confirm the auth server answers requests."""
    return MessageResponse(message="Auth server is up and running")


@router.get("/health", response_model=HealthResponse)
def get_health(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
    )
