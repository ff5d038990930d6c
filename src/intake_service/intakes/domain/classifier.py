"""
Keyword Classifier
==================

Weighted keyword scoring that maps an intake description to a category.

Algorithm:
1. Normalize input (casefold, collapse whitespace)
2. For each named category, add STRONG_WEIGHT for every strong keyword and
   WEAK_WEIGHT for every weak keyword found as a substring
3. Highest score wins; ties go to the category evaluated first
4. Below the threshold the result is ``other``

The keyword table is plain data so weights and lists can be tuned without
touching the scoring code.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from intake_service.intakes.domain.value_objects import IntakeCategory


STRONG_WEIGHT = 2
WEAK_WEIGHT = 1
MIN_SCORE = 1


@dataclass(frozen=True)
class KeywordSet:
    """Strong and weak keywords owned by one category."""
    strong: Tuple[str, ...]
    weak: Tuple[str, ...] = ()


# Iteration order is the tie-break order.
DEFAULT_KEYWORDS: Mapping[IntakeCategory, KeywordSet] = MappingProxyType({
    IntakeCategory.BILLING: KeywordSet(
        strong=("invoice", "overcharge", "refund", "receipt", "credit card", "subscription"),
        weak=("payment", "bill", "charge", "pricing", "cost", "fee", "cancel"),
    ),
    IntakeCategory.TECHNICAL_SUPPORT: KeywordSet(
        strong=("error", "broken", "crash", "500", "404", "timeout", "down", "offline"),
        weak=("login", "bug", "slow", "password", "not working", "access"),
    ),
    IntakeCategory.NEW_MATTER_PROJECT: KeywordSet(
        strong=("quote", "proposal", "new project", "engagement", "consultation"),
        weak=("hire", "estimate", "contract", "scope", "start", "begin"),
    ),
})


class KeywordClassifier:
    """
    Pure, stateless classifier over a fixed keyword table.

    Safe to share between concurrent requests.
    """

    def __init__(
        self,
        keywords: Mapping[IntakeCategory, KeywordSet] = DEFAULT_KEYWORDS,
        strong_weight: int = STRONG_WEIGHT,
        weak_weight: int = WEAK_WEIGHT,
        min_score: int = MIN_SCORE,
    ):
        if IntakeCategory.OTHER in keywords:
            raise ValueError("'other' is the fallback category and cannot own keywords")
        self._keywords = tuple(keywords.items())
        self._strong_weight = strong_weight
        self._weak_weight = weak_weight
        self._min_score = min_score

    @staticmethod
    def normalize(text: str) -> str:
        # "credit\ncard" and "credit  card" both match "credit card"
        return " ".join(text.casefold().split())

    def score(self, text: str) -> dict[IntakeCategory, int]:
        """
        Score text against every category.

        Args:
            text: Raw description

        Returns:
            Points per named category, in evaluation order
        """
        normalized = self.normalize(text or "")
        scores = {}
        for category, keyword_set in self._keywords:
            points = sum(self._strong_weight for kw in keyword_set.strong if kw in normalized)
            points += sum(self._weak_weight for kw in keyword_set.weak if kw in normalized)
            scores[category] = points
        return scores

    def classify(self, text: str) -> IntakeCategory:
        """
        Classify a description.

        Never raises for string input; empty or unmatched text is ``other``.
        """
        best_category = IntakeCategory.OTHER
        best_score = 0
        for category, points in self.score(text).items():
            # strict comparison keeps the earliest category on ties
            if points > best_score:
                best_category, best_score = category, points

        if best_score < self._min_score:
            return IntakeCategory.OTHER
        return best_category


default_classifier = KeywordClassifier()


def classify_intake(description: str) -> IntakeCategory:
    """Classify with the default keyword table."""
    return default_classifier.classify(description)
