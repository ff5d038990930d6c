"""
Intake Controllers (API Routes)
===============================

FastAPI routes for intake endpoints.

Submission is open to anyone; listing, reading, updating and statistics
require staff credentials. Controllers delegate to IntakeService.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from intake_service.infrastructure.database import get_session
from intake_service.intakes.application import (
    IntakeService,
    IntakeCreateRequest,
    IntakeUpdateRequest,
    IntakeResponse,
    IntakeListResponse,
    IntakeStatsResponse,
)
from intake_service.intakes.domain import IntakeCategory, IntakeStatus, DEFAULT_SORT
from intake_service.intakes.infrastructure import SQLAlchemyIntakeRepository
from intake_service.shared.api.auth import require_staff
from intake_service.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(prefix="/api/intakes", tags=["Intakes"])


# ========== Example payloads for Swagger ==========

INTAKE_EXAMPLE = {
    "id": 1,
    "name": "John Doe",
    "email": "john@example.com",
    "description": "I need help with an invoice that was overcharged",
    "urgency": 3,
    "category": "billing",
    "status": "new",
    "internal_notes": None,
    "created_at": "2025-01-15T10:30:00Z",
    "updated_at": "2025-01-15T10:30:00Z"
}

STATS_RESPONSE_EXAMPLE = {
    "byStatus": {"new": 12, "in_review": 4, "resolved": 9},
    "byCategory": {"billing": 8, "technical_support": 10, "new_matter_project": 5, "other": 2},
    "total": 25
}

ERROR_RESPONSES = {
    400: {"description": "Validation error with field-level details"},
    401: {"description": "Missing or invalid staff credentials"},
}


# ========== Dependencies ==========

def get_intake_service(
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> IntakeService:
    """Build the service over a request-scoped repository."""
    return IntakeService(
        SQLAlchemyIntakeRepository(session),
        classifier=request.app.state.classifier,
    )


# ========== Route Handlers ==========

@router.post(
    "",
    response_model=IntakeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Submit a new intake",
    description="""
    Public endpoint. Markup is stripped from every text field, the
    description is categorized by keyword scoring and the intake starts
    in status `new`.
    """,
    responses={
        201: {"content": {"application/json": {"example": INTAKE_EXAMPLE}}},
        400: ERROR_RESPONSES[400],
    }
)
async def create_intake(
    request: Request,
    payload: IntakeCreateRequest,
    session: AsyncSession = Depends(get_session),
    service: IntakeService = Depends(get_intake_service),
):
    intake = await service.create(
        name=payload.name,
        email=payload.email,
        description=payload.description,
        urgency=payload.urgency,
    )
    await session.commit()

    logger.info(
        "Intake submitted",
        extra={
            "correlation_id": getattr(request.state, "correlation_id", "unknown"),
            "intake_id": intake.id,
            "category": intake.category.value
        }
    )
    return IntakeResponse.from_domain(intake)


@router.get(
    "",
    response_model=IntakeListResponse,
    summary="List intakes",
    description="""
    Staff only. Optional exact filters on `status` and `category`.
    `sort` takes a field name, prefixed with `-` for descending
    (default `-created_at`).
    """,
    responses=ERROR_RESPONSES
)
async def list_intakes(
    status_filter: Optional[IntakeStatus] = Query(None, alias="status"),
    category: Optional[IntakeCategory] = Query(None),
    sort: str = Query(DEFAULT_SORT),
    _user: str = Depends(require_staff),
    service: IntakeService = Depends(get_intake_service),
):
    intakes, total = await service.list(status=status_filter, category=category, sort=sort)
    return IntakeListResponse(
        data=[IntakeResponse.from_domain(i) for i in intakes],
        total=total
    )


@router.get(
    "/stats",
    response_model=IntakeStatsResponse,
    summary="Get intake statistics",
    responses={
        200: {"content": {"application/json": {"example": STATS_RESPONSE_EXAMPLE}}},
        401: ERROR_RESPONSES[401],
    }
)
async def get_stats(
    _user: str = Depends(require_staff),
    service: IntakeService = Depends(get_intake_service),
):
    stats = await service.stats()
    return IntakeStatsResponse(
        by_status={s.value: count for s, count in stats.by_status.items()},
        by_category={c.value: count for c, count in stats.by_category.items()},
        total=stats.total
    )


@router.get(
    "/{intake_id}",
    response_model=IntakeResponse,
    summary="Get a single intake",
    responses={**ERROR_RESPONSES, 404: {"description": "Intake not found"}}
)
async def get_intake(
    intake_id: int,
    _user: str = Depends(require_staff),
    service: IntakeService = Depends(get_intake_service),
):
    intake = await service.get(intake_id)
    return IntakeResponse.from_domain(intake)


@router.patch(
    "/{intake_id}",
    response_model=IntakeResponse,
    summary="Update status or internal notes",
    description="""
    Staff only. Accepts `status` and/or `internal_notes`; any other field
    is rejected. Any status can be set from any status.
    """,
    responses={**ERROR_RESPONSES, 404: {"description": "Intake not found"}}
)
async def update_intake(
    request: Request,
    intake_id: int,
    payload: IntakeUpdateRequest,
    _user: str = Depends(require_staff),
    session: AsyncSession = Depends(get_session),
    service: IntakeService = Depends(get_intake_service),
):
    intake = await service.update(intake_id, payload.changes())
    await session.commit()

    logger.info(
        "Intake reviewed",
        extra={
            "correlation_id": getattr(request.state, "correlation_id", "unknown"),
            "intake_id": intake_id,
            "staff_user": _user
        }
    )
    return IntakeResponse.from_domain(intake)


# Export router for inclusion in main app
intake_router = router
