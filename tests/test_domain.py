"""Tests for the intake entity, statistics and input sanitizing."""

from datetime import datetime, timedelta, timezone

import pytest

from intake_service.core import DomainException
from intake_service.intakes.domain import Intake, IntakeCategory, IntakeStats, IntakeStatus
from intake_service.shared.sanitize import clean_text, sanitize_fields


NOW = datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)


def make_intake(**overrides):
    fields = dict(
        name="John Doe",
        email="john@example.com",
        description="Invoice was overcharged",
        urgency=3,
        category=IntakeCategory.BILLING,
        now=NOW,
    )
    fields.update(overrides)
    return Intake.submit(**fields)


class TestIntake:

    def test_submit_starts_new_with_equal_timestamps(self):
        intake = make_intake()
        assert intake.id is None
        assert intake.status == IntakeStatus.NEW
        assert intake.created_at == intake.updated_at == NOW
        assert intake.internal_notes is None

    @pytest.mark.parametrize("urgency", [0, 6, -1])
    def test_urgency_out_of_range_rejected(self, urgency):
        with pytest.raises(DomainException):
            make_intake(urgency=urgency)

    def test_updated_before_created_rejected(self):
        with pytest.raises(DomainException):
            Intake(
                id=1, name="a", email="a@example.com", description="x" * 10, urgency=1,
                category=IntakeCategory.OTHER, status=IntakeStatus.NEW,
                created_at=NOW, updated_at=NOW - timedelta(seconds=1),
            )

    def test_apply_update_changes_only_status(self):
        intake = make_intake()
        later = NOW + timedelta(minutes=5)

        intake.apply_update({"status": "in_review"}, now=later)

        assert intake.status == IntakeStatus.IN_REVIEW
        assert intake.updated_at == later
        assert intake.created_at == NOW
        assert intake.category == IntakeCategory.BILLING
        assert intake.urgency == 3
        assert intake.internal_notes is None

    @pytest.mark.parametrize("start,target", [
        (IntakeStatus.RESOLVED, IntakeStatus.NEW),
        (IntakeStatus.NEW, IntakeStatus.RESOLVED),
        (IntakeStatus.IN_REVIEW, IntakeStatus.IN_REVIEW),
    ])
    def test_any_status_reachable_from_any_status(self, start, target):
        intake = make_intake()
        intake.status = start
        intake.apply_update({"status": target}, now=NOW + timedelta(seconds=1))
        assert intake.status == target

    def test_apply_update_sets_and_clears_notes(self):
        intake = make_intake()
        intake.apply_update({"internal_notes": "Called back"}, now=NOW + timedelta(seconds=1))
        assert intake.internal_notes == "Called back"
        intake.apply_update({"internal_notes": None}, now=NOW + timedelta(seconds=2))
        assert intake.internal_notes is None

    def test_updated_at_always_advances(self):
        intake = make_intake()
        intake.apply_update({"status": "resolved"}, now=NOW)
        assert intake.updated_at > intake.created_at

    @pytest.mark.parametrize("field", ["category", "urgency", "name", "created_at"])
    def test_non_whitelisted_fields_rejected(self, field):
        intake = make_intake()
        with pytest.raises(DomainException):
            intake.apply_update({field: "x"}, now=NOW + timedelta(seconds=1))
        assert intake.updated_at == NOW


class TestIntakeStats:

    def test_missing_groups_are_zero(self):
        stats = IntakeStats.from_counts({"new": 2}, {"billing": 1, "other": 1}, total=2)
        assert stats.by_status == {
            IntakeStatus.NEW: 2, IntakeStatus.IN_REVIEW: 0, IntakeStatus.RESOLVED: 0,
        }
        assert sum(stats.by_category.values()) == stats.total == 2
        assert stats.by_category[IntakeCategory.TECHNICAL_SUPPORT] == 0


class TestSanitize:

    def test_tags_stripped(self):
        assert clean_text("<b>Hello</b> world") == "Hello world"

    def test_script_content_dropped(self):
        assert clean_text("<script>alert(1)</script>Invoice") == "Invoice"

    def test_plain_text_unchanged(self):
        assert clean_text("My login is broken") == "My login is broken"

    def test_non_strings_pass_through(self):
        assert clean_text(3) == 3
        assert clean_text(None) is None

    def test_sanitize_fields(self):
        cleaned = sanitize_fields({"name": "<i>Jane</i>", "urgency": 4})
        assert cleaned == {"name": "Jane", "urgency": 4}

    @pytest.mark.parametrize("text", [
        "Smith & Sons",
        "a&b@example.com",
        "Invoice for R&D is wrong, total < 500",
        "Quote \"urgent\" & it's > 3 days",
    ])
    def test_plain_text_special_characters_kept(self, text):
        assert clean_text(text) == text

    def test_entities_decoded_after_tags_stripped(self):
        assert clean_text("<b>Tom &amp; Jerry</b>") == "Tom & Jerry"
