"""Health check response body."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from blog_api.schemas.base import CamelModel


class HealthResponse(CamelModel):
    status: Literal["ok", "degraded"] = Field(description="ok when the database answers")
    environment: Literal["dev", "prod"]
    database: Literal["connected", "disconnected"]
    version: str
    checked_at: datetime
