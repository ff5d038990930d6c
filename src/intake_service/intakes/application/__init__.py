"""
Intake Application Layer
========================

Application layer for the intake module.

Contains:
- Services: Business logic orchestration
- DTOs: Data transfer objects for API serialization
"""

from intake_service.intakes.application.dto import (
    IntakeCreateRequest,
    IntakeUpdateRequest,
    IntakeResponse,
    IntakeListResponse,
    IntakeStatsResponse,
)
from intake_service.intakes.application.services import (
    IntakeService,
    IIntakeRepository,
    parse_sort,
)

__all__ = [
    # DTOs
    "IntakeCreateRequest",
    "IntakeUpdateRequest",
    "IntakeResponse",
    "IntakeListResponse",
    "IntakeStatsResponse",
    # Services
    "IntakeService",
    "parse_sort",
    # Repository Interfaces
    "IIntakeRepository",
]
