# tests/test_performance_scorer.py

"""
Performance Scorer Tests - volunteer hours, honors, social work and the
5-point cap
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from admission import score_performance
from admission.models.application import Honor, Performance, SocialWork
from admission.models.enumerations import AwardLevel, ScoreCategory
from admission.scoring.performance_scorer import PerformanceScorer


@pytest.fixture
def scorer():
    return PerformanceScorer()


class TestVolunteerHours:
    """Tests for the volunteer component."""

    def test_295_hours(self, scorer):
        assert scorer.calculate(Performance(volunteer_hours=295)).total == Decimal("1.0")

    def test_below_threshold(self, scorer):
        result = scorer.calculate(Performance(volunteer_hours=199))
        assert result.total == Decimal("0")
        assert result.items == ()

    def test_negative_hours_rejected_by_model(self):
        with pytest.raises(ValidationError):
            Performance(volunteer_hours=-5)


class TestHonorsAndSocialWork:
    """Tests for honors and social work entries."""

    def test_honor_levels(self, scorer):
        performance = Performance(honors=[
            Honor(title="National Scholarship", level=AwardLevel.NATIONAL),
            Honor(title="Provincial Merit Student", level=AwardLevel.PROVINCIAL),
            Honor(title="Outstanding Student", level=AwardLevel.SCHOOL),
        ])
        assert scorer.calculate(performance).total == Decimal("3.2")

    def test_untitled_honor_ignored(self, scorer):
        performance = Performance(honors=[Honor(title=" ", level=AwardLevel.NATIONAL)])
        assert scorer.calculate(performance).total == Decimal("0")

    def test_social_work_flat_credit(self, scorer):
        performance = Performance(social_work=[
            SocialWork(position="Class monitor", duration="2 years"),
            SocialWork(position="Student union chair", duration="1 year"),
        ])
        result = scorer.calculate(performance)
        assert result.total == Decimal("1.0")
        assert all(i.category == ScoreCategory.SOCIAL_WORK for i in result.items)

    def test_social_work_needs_position_and_duration(self, scorer):
        performance = Performance(social_work=[
            SocialWork(position="Class monitor", duration=""),
            SocialWork(position="", duration="1 year"),
        ])
        assert scorer.calculate(performance).total == Decimal("0")


class TestPerformanceCap:
    """Tests for the 5-point cap."""

    def test_capped_at_five(self, scorer):
        performance = Performance(
            volunteer_hours=400,
            honors=[Honor(title=f"H{i}", level=AwardLevel.NATIONAL) for i in range(3)],
            social_work=[SocialWork(position="Monitor", duration="1 year")],
        )
        result = scorer.calculate(performance)
        assert result.raw_total == Decimal("7.5")
        assert result.total == Decimal("5")
        assert result.is_capped is True

    def test_combined_below_cap(self, scorer):
        performance = Performance(
            volunteer_hours=295,
            honors=[Honor(title="Scholarship", level=AwardLevel.SCHOOL)],
            social_work=[SocialWork(position="Monitor", duration="1 year")],
        )
        assert scorer.calculate(performance).total == Decimal("1.7")

    def test_public_api(self):
        assert score_performance(Performance()).total == Decimal("0.00")
