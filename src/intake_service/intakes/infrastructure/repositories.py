"""
Intake Infrastructure Repositories
==================================

SQLAlchemy implementation of the intake repository.

Works on IntakeModel rows internally and hands domain entities back to
the application layer.
"""

from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from intake_service.core import RepositoryException
from intake_service.intakes.application import IIntakeRepository
from intake_service.intakes.domain import Intake, IntakeCategory, IntakeStatus, SORTABLE_FIELDS
from intake_service.intakes.infrastructure.models import IntakeModel
from intake_service.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)

GROUPABLE_FIELDS = ("status", "category")


class SQLAlchemyIntakeRepository(IIntakeRepository):
    """
    SQLAlchemy implementation of intake repository.

    Handles persistence of Intake entities using async SQLAlchemy.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def _get_model(self, intake_id: int) -> Optional[IntakeModel]:
        stmt = select(IntakeModel).where(IntakeModel.id == intake_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def add(self, intake: Intake) -> Intake:
        """Insert a new intake."""
        model = IntakeModel.from_entity(intake)
        self._session.add(model)
        try:
            await self._session.flush()
        except SQLAlchemyError as e:
            raise RepositoryException(f"Failed to insert intake: {e}")

        intake.id = model.id
        return intake

    async def get_by_id(self, intake_id: int) -> Optional[Intake]:
        """Get intake by id."""
        model = await self._get_model(intake_id)
        return model.to_entity() if model else None

    async def list(
        self,
        status: Optional[IntakeStatus] = None,
        category: Optional[IntakeCategory] = None,
        sort_field: str = "created_at",
        descending: bool = True,
    ) -> List[Intake]:
        """List intakes with exact-match filters, ordered by one column."""
        if sort_field not in SORTABLE_FIELDS:
            raise RepositoryException(f"Unsortable field: {sort_field}")

        stmt = select(IntakeModel)
        if status is not None:
            stmt = stmt.where(IntakeModel.status == IntakeStatus(status).value)
        if category is not None:
            stmt = stmt.where(IntakeModel.category == IntakeCategory(category).value)

        column = getattr(IntakeModel, sort_field)
        # id as secondary key keeps equal timestamps in a stable order
        if descending:
            stmt = stmt.order_by(column.desc(), IntakeModel.id.desc())
        else:
            stmt = stmt.order_by(column.asc(), IntakeModel.id.asc())

        with log_latency(logger, "intake_list", sort=sort_field, descending=descending):
            result = await self._session.execute(stmt)
            models = result.scalars().all()

        return [model.to_entity() for model in models]

    async def save(self, intake: Intake) -> Intake:
        """Persist status, notes and updated_at of an existing intake."""
        model = await self._get_model(intake.id)
        if model is None:
            raise RepositoryException(f"Intake {intake.id} not found")

        model.status = intake.status.value
        model.internal_notes = intake.internal_notes
        model.updated_at = intake.updated_at

        try:
            await self._session.flush()
        except SQLAlchemyError as e:
            raise RepositoryException(f"Failed to update intake {intake.id}: {e}")

        return model.to_entity()

    async def count_by(self, field: str) -> Dict[str, int]:
        """Count intakes grouped by status or category."""
        if field not in GROUPABLE_FIELDS:
            raise RepositoryException(f"Cannot group by field: {field}")

        column = getattr(IntakeModel, field)
        stmt = select(column, func.count(IntakeModel.id)).group_by(column)
        result = await self._session.execute(stmt)
        return {row[0]: row[1] for row in result.all()}

    async def count(self) -> int:
        """Count all intakes."""
        result = await self._session.execute(select(func.count(IntakeModel.id)))
        return result.scalar_one()
