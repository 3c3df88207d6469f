# tests/test_achievement_scorer.py

"""
Achievement Scorer Tests - publications, competitions, patents, innovation
projects, the 15-point cap and the specialized-talent override
"""

from decimal import Decimal

import pytest

from admission import score_achievement
from admission.models.application import (
    Achievements,
    Competition,
    InnovationProject,
    Patent,
    Publication,
)
from admission.models.enumerations import (
    AwardLevel,
    CompetitionAward,
    CompetitionLevel,
    ProjectRole,
    ProjectStatus,
    PublicationType,
    ScoreCategory,
)
from admission.scoring.achievement_scorer import AchievementScorer


@pytest.fixture
def scorer():
    return AchievementScorer()


def national_first(members: int, is_team: bool = True, level=CompetitionLevel.A_PLUS) -> Competition:
    return Competition(
        name="Challenge Cup",
        level=level,
        award=CompetitionAward.NATIONAL_FIRST_OR_ABOVE,
        is_team=is_team,
        total_team_members=members,
    )


class TestPublications:
    """Tests for publication author-rank ratios."""

    def test_first_of_six_authors(self, scorer):
        pub = Publication(title="Paper", type=PublicationType.A, author_rank=1, total_authors=6)
        result = scorer.calculate(Achievements(publications=[pub]))
        assert result.total == Decimal("8.0")
        assert result.items[0].factor == Decimal("0.8")

    @pytest.mark.parametrize("total_authors", [1, 2])
    def test_first_author_small_team_gets_full_credit(self, scorer, total_authors):
        pub = Publication(title="Paper", type=PublicationType.B, author_rank=1,
                          total_authors=total_authors)
        assert scorer.calculate(Achievements(publications=[pub])).total == Decimal("6")

    def test_second_author(self, scorer):
        pub = Publication(title="Paper", type=PublicationType.A, author_rank=2, total_authors=4)
        assert scorer.calculate(Achievements(publications=[pub])).total == Decimal("2")

    def test_third_author_scores_zero(self, scorer):
        pub = Publication(title="Paper", type=PublicationType.A, author_rank=3, total_authors=4)
        result = scorer.calculate(Achievements(publications=[pub]))
        assert result.total == Decimal("0")
        assert result.items[0].contribution == Decimal("0")

    def test_untitled_publication_ignored(self, scorer):
        pub = Publication(title="", type=PublicationType.A)
        result = scorer.calculate(Achievements(publications=[pub]))
        assert result.total == Decimal("0")
        assert result.items == ()


class TestCompetitions:
    """Tests for competition apportionment."""

    def test_team_of_three_national_first(self, scorer):
        result = scorer.calculate(Achievements(competitions=[national_first(3)]))
        assert result.total == Decimal("10.0")

    def test_individual_divides_by_three(self, scorer):
        result = scorer.calculate(Achievements(competitions=[national_first(1, is_team=False)]))
        assert result.total == Decimal("10")

    def test_team_of_two_divides_by_three(self, scorer):
        result = scorer.calculate(Achievements(competitions=[national_first(2)]))
        assert result.total == Decimal("10")

    def test_team_of_one_is_individual(self, scorer):
        result = scorer.calculate(Achievements(competitions=[national_first(1)]))
        assert result.total == Decimal("10")

    @pytest.mark.parametrize("members", [5, 6, 12])
    def test_divisor_saturates_at_five(self, scorer, members):
        result = scorer.calculate(Achievements(competitions=[national_first(members)]))
        assert result.total == Decimal("6")

    def test_team_rank_is_never_read(self, scorer):
        first = national_first(4).model_copy(update={"team_rank": 1})
        last = national_first(4).model_copy(update={"team_rank": 4})
        assert (
            scorer.calculate(Achievements(competitions=[first])).total
            == scorer.calculate(Achievements(competitions=[last])).total
        )

    def test_non_terminating_division_quantized(self, scorer):
        comp = Competition(
            name="Math Modeling",
            level=CompetitionLevel.A,
            award=CompetitionAward.PROVINCIAL_FIRST_OR_ABOVE,
        )
        result = scorer.calculate(Achievements(competitions=[comp]))
        assert result.items[0].contribution == Decimal("0.6667")
        assert result.total == Decimal("0.67")

    @pytest.mark.parametrize("members,divisor", [(1, 3), (2, 3), (3, 3), (4, 4), (5, 5), (9, 5)])
    def test_team_divisor(self, members, divisor):
        assert AchievementScorer.team_divisor(True, members) == divisor


class TestPatents:
    """Tests for the patent author-rank rule."""

    def test_first_author(self, scorer):
        result = scorer.calculate(Achievements(patents=[Patent(title="Method", author_rank=1)]))
        assert result.total == Decimal("1.6")

    def test_other_author_scores_full_base(self, scorer):
        result = scorer.calculate(Achievements(patents=[Patent(title="Method", author_rank=3)]))
        assert result.total == Decimal("2")


class TestInnovationProjects:
    """Tests for innovation project scoring."""

    def test_completed_project_counts(self, scorer):
        project = InnovationProject(
            name="Campus IoT", level=AwardLevel.PROVINCIAL, role=ProjectRole.LEAD,
            status=ProjectStatus.COMPLETED,
        )
        assert scorer.calculate(Achievements(innovation_projects=[project])).total == Decimal("0.5")

    def test_in_progress_project_ignored(self, scorer):
        project = InnovationProject(
            name="Campus IoT", level=AwardLevel.NATIONAL, role=ProjectRole.LEAD,
            status=ProjectStatus.IN_PROGRESS,
        )
        result = scorer.calculate(Achievements(innovation_projects=[project]))
        assert result.total == Decimal("0")
        assert result.items == ()

    def test_school_member(self, scorer):
        project = InnovationProject(name="Club App", level=AwardLevel.SCHOOL, role=ProjectRole.MEMBER)
        assert scorer.calculate(Achievements(innovation_projects=[project])).total == Decimal("0.05")


class TestCapAndAggregation:
    """Tests for summing contributions and the cap."""

    def test_mixed_records_sum(self, scorer):
        achievements = Achievements(
            publications=[Publication(title="P", type=PublicationType.C, author_rank=1, total_authors=2)],
            patents=[Patent(title="Pt", author_rank=2)],
            innovation_projects=[InnovationProject(name="I", level=AwardLevel.NATIONAL,
                                                   role=ProjectRole.MEMBER)],
        )
        result = scorer.calculate(achievements)
        assert result.total == Decimal("3.3")
        assert [i.category for i in result.items] == [
            ScoreCategory.PUBLICATION, ScoreCategory.PATENT, ScoreCategory.INNOVATION,
        ]

    def test_total_capped_at_fifteen(self, scorer):
        pubs = [
            Publication(title=f"P{i}", type=PublicationType.A, author_rank=1, total_authors=2)
            for i in range(2)
        ]
        result = scorer.calculate(Achievements(publications=pubs))
        assert result.raw_total == Decimal("20")
        assert result.total == Decimal("15")
        assert result.is_capped is True

    def test_empty_achievements(self, scorer):
        result = scorer.calculate(Achievements())
        assert result.total == Decimal("0")
        assert result.is_capped is False

    def test_public_api(self):
        pub = Publication(title="Paper", type="A类", author_rank=1, total_authors=6)
        assert score_achievement(Achievements(publications=[pub])).total == Decimal("8.00")


class TestSpecialTalentDefense:
    """A passed defense awards the full achievement sub-score."""

    def test_defense_passed_sets_full_marks(self, scorer):
        result = scorer.calculate(Achievements(), defense_passed=True)
        assert result.total == Decimal("15")
        assert result.items[-1].category == ScoreCategory.SPECIAL_TALENT

    def test_defense_keeps_record_items(self, scorer):
        pub = Publication(title="Paper", type=PublicationType.A, author_rank=1, total_authors=6)
        result = scorer.calculate(Achievements(publications=[pub]), defense_passed=True)
        assert result.raw_total == Decimal("8.0")
        assert result.total == Decimal("15")
        assert len(result.items) == 2
