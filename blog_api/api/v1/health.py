"""Liveness/readiness probe for load balancers."""

from datetime import UTC, datetime

from fastapi import APIRouter

from blog_api.api.deps import DbSession
from blog_api.core.config import API_VERSION, settings
from blog_api.core.database import check_db_connected
from blog_api.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: DbSession) -> HealthResponse:
    """Report database connectivity; status is degraded when the database is unreachable."""
    connected = check_db_connected(db)
    return HealthResponse(
        status="ok" if connected else "degraded",
        environment=settings.APP_ENV,
        database="connected" if connected else "disconnected",
        version=API_VERSION,
        checked_at=datetime.now(UTC),
    )
