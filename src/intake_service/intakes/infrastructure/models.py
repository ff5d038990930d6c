"""
Intake Infrastructure Models
============================

SQLAlchemy ORM model for the intake module.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from intake_service.infrastructure.database import Base, UTCDateTime
from intake_service.intakes.domain import Intake, IntakeCategory, IntakeStatus


def _in_clause(column: str, enum_cls) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return f"{column} IN ({values})"


class IntakeModel(Base):
    """
    Database model for the Intake entity.

    Category and status are stored as their string values and guarded by
    CHECK constraints, as is the urgency range.
    """
    __tablename__ = "intakes"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Submitter
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)

    # Request
    description: Mapped[str] = mapped_column(Text, nullable=False)
    urgency: Mapped[int] = mapped_column(Integer, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)

    # Staff review
    status: Mapped[str] = mapped_column(String(32), nullable=False, default=IntakeStatus.NEW.value)
    internal_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    __table_args__ = (
        CheckConstraint("urgency BETWEEN 1 AND 5", name="ck_intakes_urgency"),
        CheckConstraint(_in_clause("category", IntakeCategory), name="ck_intakes_category"),
        CheckConstraint(_in_clause("status", IntakeStatus), name="ck_intakes_status"),
        Index("idx_intakes_status", "status"),
        Index("idx_intakes_category", "category"),
        Index("idx_intakes_status_category", "status", "category"),
        Index("idx_intakes_created_at", "created_at"),
    )

    def to_entity(self) -> Intake:
        """Convert to domain entity."""
        return Intake(
            id=self.id,
            name=self.name,
            email=self.email,
            description=self.description,
            urgency=self.urgency,
            category=IntakeCategory(self.category),
            status=IntakeStatus(self.status),
            internal_notes=self.internal_notes,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, intake: Intake) -> "IntakeModel":
        """Build a new row from a domain entity (id left to the database)."""
        return cls(
            name=intake.name,
            email=intake.email,
            description=intake.description,
            urgency=intake.urgency,
            category=intake.category.value,
            status=intake.status.value,
            internal_notes=intake.internal_notes,
            created_at=intake.created_at,
            updated_at=intake.updated_at,
        )
