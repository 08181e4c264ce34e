"""DTOs shared by every feature router."""
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseDTO(BaseModel):
    """Base DTO; fields may be populated by name or by their wire alias."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class HealthCheckResponse(BaseDTO):
    status: str = Field(description="ok or unavailable")
    checked_at: datetime = Field(default_factory=_utcnow)
    dependencies: Dict[str, str] = Field(
        default_factory=dict, description="Per-dependency status, e.g. database"
    )


class ErrorResponse(BaseDTO):
    """Body returned for every ``ChatException``."""

    error_code: str = Field(description="VALIDATION_ERROR, NOT_FOUND, CONFLICT or INTERNAL_ERROR")
    message: str = Field(description="Human readable message, names the offending value")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Structured context")
    timestamp: datetime = Field(default_factory=_utcnow)
