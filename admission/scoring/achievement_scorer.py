"""
scoring/achievement_scorer.py

Computes the academic-achievement sub-score (学术专长成绩) from publications,
competitions, patents and innovation projects.

Per-record contributions:
    Publication  = base(type) × ratio
                   ratio: rank 1 → 1.0 if total_authors ≤ 2 else 0.8
                          rank 2 → 0.2, other ranks → 0
    Competition  = base(level, award) / divisor
                   divisor: individual → 3, team of 2 → 3,
                            team of 3–5 → team size, team > 5 → 5
    Patent       = 2 × (0.8 if author_rank == 1 else 1.0)
    Innovation   = score(level, role), completed projects only

Total = min(Σ contributions, 15). A passed specialized-talent defense sets
the total to 15.
"""

import logging
from decimal import Decimal
from typing import Iterator

from admission.models.application import (
    Achievements,
    Competition,
    InnovationProject,
    Patent,
    Publication,
)
from admission.models.enumerations import ProjectStatus, ScoreCategory
from admission.models.scoring import ScoreBreakdown, ScoreItem
from admission.scoring import rule_tables as rt
from admission.scoring.utils import CONTRIBUTION_PLACES, clamp, decimal_sum, quantize

logger = logging.getLogger(__name__)


def _item(category, label, base, factor, note="") -> ScoreItem:
    return ScoreItem(
        category=category,
        label=label,
        base=base,
        factor=factor,
        contribution=quantize(base * factor, CONTRIBUTION_PLACES),
        note=note,
    )


class AchievementScorer:
    """Calculate the capped academic-achievement sub-score."""

    CAP = rt.ACHIEVEMENT_CAP

    def calculate(
        self,
        achievements: Achievements,
        defense_passed: bool = False,
    ) -> ScoreBreakdown:
        """
        Args:
            achievements: Publication / competition / patent / project records.
            defense_passed: Specialized-talent defense outcome.

        Returns:
            ScoreBreakdown with total in [0, 15] and one item per counted record.

        Examples:
            >>> pub = Publication(title="X", type="A类", author_rank=1, total_authors=6)
            >>> AchievementScorer().calculate(Achievements(publications=[pub])).total
            Decimal('8.00')
        """
        items = tuple(self.score_items(achievements))
        raw_total = decimal_sum(i.contribution for i in items)

        if defense_passed:
            items = items + (
                ScoreItem(
                    category=ScoreCategory.SPECIAL_TALENT,
                    label="specialized-talent defense passed",
                    base=self.CAP,
                    factor=Decimal("1"),
                    contribution=self.CAP,
                    note="sub-score set to full marks",
                ),
            )
            total = self.CAP
        else:
            total = clamp(raw_total, Decimal("0"), self.CAP)

        logger.debug(
            "Achievement score: items=%d raw=%s total=%s defense_passed=%s",
            len(items), raw_total, total, defense_passed,
        )

        return ScoreBreakdown(
            total=quantize(total),
            raw_total=raw_total,
            cap=self.CAP,
            items=items,
        )

    def score_items(self, achievements: Achievements) -> Iterator[ScoreItem]:
        """Yield the contribution of every counted record, in input order."""
        for pub in achievements.publications:
            if pub.title.strip():
                yield self.score_publication(pub)
        for comp in achievements.competitions:
            if comp.name.strip():
                yield self.score_competition(comp)
        for patent in achievements.patents:
            if patent.title.strip():
                yield self.score_patent(patent)
        for project in achievements.innovation_projects:
            if project.name.strip() and project.status == ProjectStatus.COMPLETED:
                yield self.score_innovation(project)

    # ------------------------------------------------------------------
    # Per-category rules
    # ------------------------------------------------------------------

    def score_publication(self, pub: Publication) -> ScoreItem:
        base = rt.publication_base_score(pub.type)
        ratio = self.author_ratio(pub.author_rank, pub.total_authors)
        return _item(
            ScoreCategory.PUBLICATION,
            pub.title,
            base,
            ratio,
            note=f"{pub.type.value}, author {pub.author_rank}/{pub.total_authors}",
        )

    @staticmethod
    def author_ratio(author_rank: int, total_authors: int) -> Decimal:
        if author_rank == 1:
            if total_authors <= rt.SMALL_AUTHOR_TEAM_MAX:
                return rt.FIRST_AUTHOR_SMALL_TEAM_RATIO
            return rt.FIRST_AUTHOR_RATIO
        if author_rank == 2:
            return rt.SECOND_AUTHOR_RATIO
        return rt.OTHER_AUTHOR_RATIO

    def score_competition(self, comp: Competition) -> ScoreItem:
        base = rt.competition_base_score(comp.level, comp.award)
        divisor = self.team_divisor(comp.is_team, comp.total_team_members)
        factor = Decimal("1") / Decimal(divisor)
        kind = f"team of {comp.total_team_members}" if comp.is_team else "individual"
        return ScoreItem(
            category=ScoreCategory.COMPETITION,
            label=comp.name,
            base=base,
            factor=quantize(factor, CONTRIBUTION_PLACES),
            contribution=quantize(base / Decimal(divisor), CONTRIBUTION_PLACES),
            note=f"{comp.level.value} {comp.award.value}, {kind}, ÷{divisor}",
        )

    @staticmethod
    def team_divisor(is_team: bool, total_members: int) -> int:
        """Apportionment divisor; the entrant's own rank is never read."""
        if not is_team or total_members <= 1:
            return rt.INDIVIDUAL_DIVISOR
        if total_members == 2:
            return rt.TWO_MEMBER_TEAM_DIVISOR
        return min(total_members, rt.MAX_TEAM_DIVISOR)

    def score_patent(self, patent: Patent) -> ScoreItem:
        ratio = (
            rt.PATENT_FIRST_AUTHOR_RATIO
            if patent.author_rank == 1
            else rt.PATENT_OTHER_AUTHOR_RATIO
        )
        return _item(
            ScoreCategory.PATENT,
            patent.title,
            rt.patent_base_score(),
            ratio,
            note=f"author rank {patent.author_rank}",
        )

    def score_innovation(self, project: InnovationProject) -> ScoreItem:
        return _item(
            ScoreCategory.INNOVATION,
            project.name,
            rt.innovation_score(project.level, project.role),
            Decimal("1"),
            note=f"{project.level.value} {project.role.value}",
        )
