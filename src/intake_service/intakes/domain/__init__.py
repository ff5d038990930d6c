"""
Intake Domain Layer
===================

Domain layer for the intake module.

Contains:
- Entities: Intake, IntakeStats
- Value Objects: IntakeCategory, IntakeStatus
- Classifier: weighted keyword scoring

This layer is framework-agnostic and contains pure business logic.
"""

from intake_service.intakes.domain.value_objects import (
    IntakeCategory,
    IntakeStatus,
    SORTABLE_FIELDS,
    DEFAULT_SORT,
)
from intake_service.intakes.domain.entities import Intake, IntakeStats, UPDATABLE_FIELDS
from intake_service.intakes.domain.classifier import (
    KeywordClassifier,
    KeywordSet,
    DEFAULT_KEYWORDS,
    classify_intake,
)

__all__ = [
    "IntakeCategory",
    "IntakeStatus",
    "SORTABLE_FIELDS",
    "DEFAULT_SORT",
    "Intake",
    "IntakeStats",
    "UPDATABLE_FIELDS",
    "KeywordClassifier",
    "KeywordSet",
    "DEFAULT_KEYWORDS",
    "classify_intake",
]
