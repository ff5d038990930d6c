"""
Intake Infrastructure Layer
===========================

Infrastructure implementations for the intake module.

Contains:
- Models: SQLAlchemy ORM models
- Repositories: Data access implementations
"""

from intake_service.intakes.infrastructure.models import IntakeModel
from intake_service.intakes.infrastructure.repositories import SQLAlchemyIntakeRepository

__all__ = [
    "IntakeModel",
    "SQLAlchemyIntakeRepository",
]
