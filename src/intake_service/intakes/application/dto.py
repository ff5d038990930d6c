"""
Intake Application DTOs
=======================

Data Transfer Objects for the intake API layer.

Pydantic models for request/response validation. These are the schema
validator in front of the service: bounds, formats and the update
whitelist are enforced here.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from typing import List, Optional, Dict
from datetime import datetime

from intake_service.intakes.domain import Intake, IntakeCategory, IntakeStatus


# ========== Request DTOs ==========

class IntakeCreateRequest(BaseModel):
    """Public submission payload. Unknown fields are dropped."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(..., min_length=1, max_length=100, description="Submitter name")
    email: EmailStr = Field(..., description="Submitter email address")
    description: str = Field(..., min_length=10, max_length=5000, description="Free-text request")
    urgency: int = Field(..., ge=1, le=5, description="Urgency from 1 (low) to 5 (high)")


class IntakeUpdateRequest(BaseModel):
    """Staff update payload. Only status and internal notes may change."""
    model_config = ConfigDict(extra="forbid")

    status: Optional[IntakeStatus] = Field(None, description="New workflow status")
    internal_notes: Optional[str] = Field(None, max_length=5000, description="Staff-only notes")

    @field_validator("status")
    @classmethod
    def status_not_null(cls, v: Optional[IntakeStatus]) -> IntakeStatus:
        """An explicit null status is not a valid state."""
        if v is None:
            raise ValueError("status cannot be null")
        return v

    @model_validator(mode="after")
    def require_one_field(self) -> "IntakeUpdateRequest":
        """Reject empty updates."""
        if not self.model_fields_set:
            raise ValueError("At least one of 'status' or 'internal_notes' is required")
        return self

    def changes(self) -> Dict[str, object]:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True)


# ========== Response DTOs ==========

class IntakeResponse(BaseModel):
    """Stored intake record."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    description: str
    urgency: int
    category: IntakeCategory
    status: IntakeStatus
    internal_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, intake: Intake) -> "IntakeResponse":
        """Create from domain entity."""
        return cls.model_validate(intake)


class IntakeListResponse(BaseModel):
    """List of intakes with total count."""
    data: List[IntakeResponse]
    total: int


class IntakeStatsResponse(BaseModel):
    """Counts grouped by status and category."""
    model_config = ConfigDict(populate_by_name=True)

    by_status: Dict[str, int] = Field(..., serialization_alias="byStatus")
    by_category: Dict[str, int] = Field(..., serialization_alias="byCategory")
    total: int
