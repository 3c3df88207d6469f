"""
scoring/performance_scorer.py

Computes the comprehensive-performance sub-score (综合表现成绩).

Formula:
    volunteer   = 0 if hours < 200 else min(1 + (hours − 200) × 0.025, 1)
    honors      = Σ honor_score(level)   over honors with a title
    social work = 0.5 × count            of entries with position and duration
    total       = min(volunteer + honors + social work, 5)
"""

import logging
from decimal import Decimal
from typing import Iterator

from admission.models.application import Performance
from admission.models.enumerations import ScoreCategory
from admission.models.scoring import ScoreBreakdown, ScoreItem
from admission.scoring import rule_tables as rt
from admission.scoring.utils import clamp, decimal_sum, quantize

logger = logging.getLogger(__name__)


class PerformanceScorer:
    """Calculate the capped comprehensive-performance sub-score."""

    CAP = rt.PERFORMANCE_CAP

    def calculate(self, performance: Performance) -> ScoreBreakdown:
        items = tuple(self.score_items(performance))
        raw_total = decimal_sum(i.contribution for i in items)
        total = clamp(raw_total, Decimal("0"), self.CAP)

        logger.debug(
            "Performance score: items=%d raw=%s total=%s",
            len(items), raw_total, total,
        )

        return ScoreBreakdown(
            total=quantize(total),
            raw_total=raw_total,
            cap=self.CAP,
            items=items,
        )

    def score_items(self, performance: Performance) -> Iterator[ScoreItem]:
        credit = rt.volunteer_credit(performance.volunteer_hours)
        if credit > 0:
            yield ScoreItem(
                category=ScoreCategory.VOLUNTEER,
                label=f"{performance.volunteer_hours:g} volunteer hours",
                base=credit,
                factor=Decimal("1"),
                contribution=credit,
            )

        for honor in performance.honors:
            if not honor.title.strip():
                continue
            score = rt.honor_score(honor.level)
            yield ScoreItem(
                category=ScoreCategory.HONOR,
                label=honor.title,
                base=score,
                factor=Decimal("1"),
                contribution=score,
                note=honor.level.value,
            )

        for work in performance.social_work:
            # Uniform credit regardless of seniority or length of service
            if work.position.strip() and work.duration.strip():
                yield ScoreItem(
                    category=ScoreCategory.SOCIAL_WORK,
                    label=work.position,
                    base=rt.SOCIAL_WORK_CREDIT,
                    factor=Decimal("1"),
                    contribution=rt.SOCIAL_WORK_CREDIT,
                    note=work.duration,
                )
