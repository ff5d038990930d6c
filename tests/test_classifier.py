"""Tests for the weighted keyword classifier."""

import pytest

from intake_service.intakes.domain import (
    DEFAULT_KEYWORDS,
    IntakeCategory,
    KeywordClassifier,
    KeywordSet,
    classify_intake,
)


STRONG_KEYWORDS = [
    (keyword, category)
    for category, keyword_set in DEFAULT_KEYWORDS.items()
    for keyword in keyword_set.strong
]

WEAK_KEYWORDS = [
    (keyword, category)
    for category, keyword_set in DEFAULT_KEYWORDS.items()
    for keyword in keyword_set.weak
]


class TestSingleCategory:

    @pytest.mark.parametrize("keyword,category", STRONG_KEYWORDS)
    def test_strong_keyword_alone_selects_its_category(self, keyword, category):
        assert classify_intake(keyword) == category

    @pytest.mark.parametrize("keyword,category", WEAK_KEYWORDS)
    def test_single_weak_keyword_meets_threshold(self, keyword, category):
        assert classify_intake(keyword) == category

    def test_payment_issue_is_billing(self):
        classifier = KeywordClassifier()
        assert classifier.score("payment issue")[IntakeCategory.BILLING] == 1
        assert classifier.classify("payment issue") == IntakeCategory.BILLING

    @pytest.mark.parametrize("text", [
        "I need help with my invoice",
        "Refund request for overcharge",
        "Cancel my subscription",
        "Payment problem with credit card",
    ])
    def test_billing_requests(self, text):
        assert classify_intake(text) == IntakeCategory.BILLING

    @pytest.mark.parametrize("text", [
        "Login error 500",
        "Cannot login to my account",
        "Can't access the system",
        "Website is down",
        "Found a bug in the application",
    ])
    def test_technical_support_requests(self, text):
        assert classify_intake(text) == IntakeCategory.TECHNICAL_SUPPORT

    @pytest.mark.parametrize("text", [
        "Request a quote for new project",
        "Need pricing quote",
        "Schedule consultation for engagement",
        "Start new project contract",
    ])
    def test_new_matter_requests(self, text):
        assert classify_intake(text) == IntakeCategory.NEW_MATTER_PROJECT


class TestFallback:

    @pytest.mark.parametrize("text", [
        "Hello",
        "General question",
        "Just saying hi",
        "test",
        "a b c",
        "",
        "    ",
    ])
    def test_no_keywords_is_other(self, text):
        assert classify_intake(text) == IntakeCategory.OTHER

    def test_none_is_other(self):
        assert classify_intake(None) == IntakeCategory.OTHER


class TestScoring:

    def test_case_insensitive(self):
        assert classify_intake("INVOICE PROBLEM") == classify_intake("invoice problem")
        assert classify_intake("LoGiN ErRoR") == IntakeCategory.TECHNICAL_SUPPORT

    def test_surrounding_whitespace_ignored(self):
        assert classify_intake("  invoice   help  ") == IntakeCategory.BILLING

    @pytest.mark.parametrize("text", [
        "My credit\ncard was used twice",
        "My credit  card was used twice",
        "My credit\t card was used twice",
    ])
    def test_internal_whitespace_collapsed(self, text):
        assert KeywordClassifier.normalize(text) == "my credit card was used twice"
        assert classify_intake(text) == IntakeCategory.BILLING

    def test_pure_and_idempotent(self):
        text = "The dashboard is broken and I was charged twice"
        assert classify_intake(text) == classify_intake(text)
        classifier = KeywordClassifier()
        assert classifier.score(text) == classifier.score(text)

    def test_every_keyword_contributes(self):
        scores = KeywordClassifier().score("refund for an overcharge on my invoice")
        # refund, overcharge, invoice (strong) + charge (weak, inside overcharge)
        assert scores[IntakeCategory.BILLING] == 7
        assert scores[IntakeCategory.TECHNICAL_SUPPORT] == 0
        assert scores[IntakeCategory.NEW_MATTER_PROJECT] == 0

    def test_strong_beats_weak(self):
        assert classify_intake("payment crash") == IntakeCategory.TECHNICAL_SUPPORT

    def test_score_covers_named_categories_in_order(self):
        scores = KeywordClassifier().score("anything")
        assert list(scores) == [
            IntakeCategory.BILLING,
            IntakeCategory.TECHNICAL_SUPPORT,
            IntakeCategory.NEW_MATTER_PROJECT,
        ]


class TestTieBreak:

    @pytest.mark.parametrize("text,expected", [
        ("invoice error", IntakeCategory.BILLING),
        ("refund proposal", IntakeCategory.BILLING),
        ("crash quote", IntakeCategory.TECHNICAL_SUPPORT),
        ("payment login hire", IntakeCategory.BILLING),
    ])
    def test_equal_scores_resolve_in_evaluation_order(self, text, expected):
        scores = KeywordClassifier().score(text)
        assert scores[expected] == max(scores.values())
        assert classify_intake(text) == expected


class TestConfiguration:

    def test_custom_keyword_table(self):
        classifier = KeywordClassifier(keywords={
            IntakeCategory.BILLING: KeywordSet(strong=("money",)),
        })
        assert classifier.classify("where is my money") == IntakeCategory.BILLING
        assert classifier.classify("invoice") == IntakeCategory.OTHER

    def test_raised_threshold_rejects_single_weak_hit(self):
        classifier = KeywordClassifier(min_score=2)
        assert classifier.classify("payment issue") == IntakeCategory.OTHER
        assert classifier.classify("invoice issue") == IntakeCategory.BILLING

    def test_other_cannot_own_keywords(self):
        with pytest.raises(ValueError):
            KeywordClassifier(keywords={IntakeCategory.OTHER: KeywordSet(strong=("hello",))})

    def test_keyword_lists_are_disjoint(self):
        seen = set()
        for keyword_set in DEFAULT_KEYWORDS.values():
            words = set(keyword_set.strong) | set(keyword_set.weak)
            assert not words & seen
            assert not set(keyword_set.strong) & set(keyword_set.weak)
            seen |= words

