"""
Intake Domain Entities
======================

Pure Python domain entities for intake tracking.

Following Domain-Driven Design principles, these entities contain
business logic and are free of infrastructure concerns.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, Dict

from intake_service.core import DomainException
from intake_service.intakes.domain.value_objects import (
    IntakeCategory, IntakeStatus, MIN_URGENCY, MAX_URGENCY
)


# Fields staff may change after creation
UPDATABLE_FIELDS = frozenset({"status", "internal_notes"})


@dataclass
class Intake:
    """
    A submitted support request.

    Category is fixed at creation; only status and internal notes change
    afterwards, and every change refreshes ``updated_at``.
    """

    id: Optional[int]  # None until persisted
    name: str
    email: str
    description: str
    urgency: int
    category: IntakeCategory
    status: IntakeStatus
    created_at: datetime
    updated_at: datetime
    internal_notes: Optional[str] = None

    def __post_init__(self):
        """Validate intake on initialization."""
        if not MIN_URGENCY <= self.urgency <= MAX_URGENCY:
            raise DomainException(f"urgency must be between {MIN_URGENCY} and {MAX_URGENCY}")
        if self.updated_at < self.created_at:
            raise DomainException("updated_at cannot be before created_at")

    @classmethod
    def submit(
        cls,
        name: str,
        email: str,
        description: str,
        urgency: int,
        category: IntakeCategory,
        now: datetime,
    ) -> "Intake":
        """Build a new, unsaved intake in the ``new`` state."""
        return cls(
            id=None,
            name=name,
            email=email,
            description=description,
            urgency=urgency,
            category=category,
            status=IntakeStatus.NEW,
            created_at=now,
            updated_at=now,
        )

    def apply_update(self, changes: Dict[str, object], now: datetime) -> None:
        """
        Apply a staff update.

        Args:
            changes: Subset of ``status`` / ``internal_notes``
            now: Current time; ``updated_at`` always moves forward
        """
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise DomainException(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        if "status" in changes:
            self.status = IntakeStatus(changes["status"])
        if "internal_notes" in changes:
            self.internal_notes = changes["internal_notes"]

        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now


@dataclass
class IntakeStats:
    """Counts by status and by category over all intakes."""
    by_status: Dict[IntakeStatus, int] = field(default_factory=dict)
    by_category: Dict[IntakeCategory, int] = field(default_factory=dict)
    total: int = 0

    @classmethod
    def from_counts(
        cls,
        status_counts: Dict[str, int],
        category_counts: Dict[str, int],
        total: int,
    ) -> "IntakeStats":
        """Fill in zero for every enum member missing from the raw counts."""
        return cls(
            by_status={s: status_counts.get(s.value, 0) for s in IntakeStatus},
            by_category={c: category_counts.get(c.value, 0) for c in IntakeCategory},
            total=total,
        )
