"""
Intake Application Services
===========================

Application service for intake submission and staff review.

Orchestrates sanitizing, classification and persistence. Bounds and
formats are already enforced by the DTOs before anything reaches here.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Tuple

from intake_service.core import ResourceNotFoundException, ValidationException
from intake_service.intakes.domain import (
    Intake, IntakeStats, IntakeCategory, IntakeStatus,
    KeywordClassifier, SORTABLE_FIELDS, DEFAULT_SORT, UPDATABLE_FIELDS,
)
from intake_service.intakes.domain.classifier import default_classifier
from intake_service.shared.infrastructure.logging import get_logger
from intake_service.shared.sanitize import clean_text, sanitize_fields

logger = get_logger(__name__)


# ========== Repository Interfaces ==========

class IIntakeRepository(ABC):
    """Interface for intake data access."""

    @abstractmethod
    async def add(self, intake: Intake) -> Intake:
        """Insert a new intake and return it with its id."""

    @abstractmethod
    async def get_by_id(self, intake_id: int) -> Optional[Intake]:
        """Get intake by id."""

    @abstractmethod
    async def list(
        self,
        status: Optional[IntakeStatus] = None,
        category: Optional[IntakeCategory] = None,
        sort_field: str = "created_at",
        descending: bool = True,
    ) -> List[Intake]:
        """List intakes matching exact filters."""

    @abstractmethod
    async def save(self, intake: Intake) -> Intake:
        """Persist the mutable fields of an existing intake."""

    @abstractmethod
    async def count_by(self, field: str) -> Dict[str, int]:
        """Count intakes grouped by a column."""

    @abstractmethod
    async def count(self) -> int:
        """Count all intakes."""


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_sort(sort: Optional[str]) -> Tuple[str, bool]:
    """
    Parse a ``[-]field`` sort expression.

    Returns:
        (field, descending)

    Raises:
        ValidationException: If the field is not sortable
    """
    sort = (sort or DEFAULT_SORT).strip()
    descending = sort.startswith("-")
    field = sort[1:] if descending else sort
    if field not in SORTABLE_FIELDS:
        raise ValidationException.for_field(
            "sort",
            f"sort must be one of {', '.join(SORTABLE_FIELDS)} (prefix with '-' for descending)",
        )
    return field, descending


# ========== Application Services ==========

class IntakeService:
    """
    Service for the intake lifecycle.

    Coordinates between the classifier and the repository.
    """

    def __init__(
        self,
        repository: IIntakeRepository,
        classifier: KeywordClassifier = default_classifier,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._repository = repository
        self._classifier = classifier
        self._clock = clock

    async def create(self, name: str, email: str, description: str, urgency: int) -> Intake:
        """
        Create a new intake.

        Strings are sanitized first and the cleaned description is what
        gets classified.

        Returns:
            The stored intake, status ``new``
        """
        fields = sanitize_fields({"name": name, "email": email, "description": description})
        category = self._classifier.classify(fields["description"])

        intake = Intake.submit(
            name=fields["name"],
            email=fields["email"],
            description=fields["description"],
            urgency=urgency,
            category=category,
            now=self._clock(),
        )
        stored = await self._repository.add(intake)

        logger.info(
            "Intake created",
            extra={"intake_id": stored.id, "category": category.value, "urgency": urgency}
        )
        return stored

    async def get(self, intake_id: int) -> Intake:
        """
        Get an intake by id.

        Raises:
            ResourceNotFoundException: If no intake has this id
        """
        intake = await self._repository.get_by_id(intake_id)
        if intake is None:
            raise ResourceNotFoundException("Intake", str(intake_id))
        return intake

    async def list(
        self,
        status: Optional[IntakeStatus] = None,
        category: Optional[IntakeCategory] = None,
        sort: Optional[str] = DEFAULT_SORT,
    ) -> Tuple[List[Intake], int]:
        """
        List intakes with optional exact-match filters.

        Returns:
            (intakes, total); the result is not paginated
        """
        sort_field, descending = parse_sort(sort)
        intakes = await self._repository.list(
            status=status,
            category=category,
            sort_field=sort_field,
            descending=descending,
        )
        return intakes, len(intakes)

    async def update(self, intake_id: int, changes: Dict[str, object]) -> Intake:
        """
        Apply a staff update to status and/or internal notes.

        Raises:
            ValidationException: If the update is empty or names other fields
            ResourceNotFoundException: If no intake has this id
        """
        if not changes:
            raise ValidationException.for_field(
                "body", "At least one of 'status' or 'internal_notes' is required"
            )
        unknown = sorted(set(changes) - UPDATABLE_FIELDS)
        if unknown:
            raise ValidationException(errors=[
                {"field": name, "message": "field cannot be updated", "type": "extra_forbidden"}
                for name in unknown
            ])

        intake = await self.get(intake_id)

        cleaned = {key: clean_text(value) for key, value in changes.items()}
        intake.apply_update(cleaned, now=self._clock())
        stored = await self._repository.save(intake)

        logger.info(
            "Intake updated",
            extra={"intake_id": intake_id, "fields": sorted(changes), "status": stored.status.value}
        )
        return stored

    async def stats(self) -> IntakeStats:
        """Counts by status and category plus the grand total."""
        return IntakeStats.from_counts(
            status_counts=await self._repository.count_by("status"),
            category_counts=await self._repository.count_by("category"),
            total=await self._repository.count(),
        )
