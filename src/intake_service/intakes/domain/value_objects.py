"""
Intake Value Objects
====================

Closed enumerations for the intake domain.

Both enums subclass ``str`` so they serialize as their plain values in JSON
and compare equal to them in filters.
"""

from enum import Enum


class IntakeCategory(str, Enum):
    """Category assigned by the classifier at creation."""
    BILLING = "billing"
    TECHNICAL_SUPPORT = "technical_support"
    NEW_MATTER_PROJECT = "new_matter_project"
    OTHER = "other"


class IntakeStatus(str, Enum):
    """
    Staff-managed workflow label.

    Any status may be set from any other; the label is not a guarded
    workflow.
    """
    NEW = "new"
    IN_REVIEW = "in_review"
    RESOLVED = "resolved"


# Fields a list query may be ordered by
SORTABLE_FIELDS = (
    "id", "name", "email", "urgency", "category",
    "status", "created_at", "updated_at",
)

DEFAULT_SORT = "-created_at"

MIN_URGENCY = 1
MAX_URGENCY = 5
