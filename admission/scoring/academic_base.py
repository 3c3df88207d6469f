"""
scoring/academic_base.py

Default academic-base provider: turns the externally computed academic
record (BasicInfo) into a 0-100 figure for the composite score.

Order of preference:
    1. converted_score, clamped to [0, 100]
    2. mean of the available rank and GPA scores
         rank score = (total − rank + 1) / total × 100
         GPA score  = min(gpa / 4, 1) × 100
    3. 0 when nothing is available
"""

import logging
from decimal import Decimal
from typing import Optional

from admission.models.application import Application, BasicInfo
from admission.scoring.utils import clamp, quantize

logger = logging.getLogger(__name__)

GPA_SCALE = Decimal("4")
HUNDRED = Decimal("100")


class AcademicBaseCalculator:
    """Academic base score from converted score, GPA and class ranking."""

    def __call__(self, application: Application) -> Decimal:
        return self.calculate(application.basic_info)

    def calculate(self, info: BasicInfo) -> Decimal:
        if info.converted_score is not None:
            return quantize(clamp(Decimal(str(info.converted_score)), Decimal("0"), HUNDRED))

        parts = [p for p in (self.rank_score(info), self.gpa_score(info)) if p is not None]
        if not parts:
            logger.warning("No converted score, GPA or ranking available; academic base = 0")
            return Decimal("0.00")

        base = sum(parts, Decimal("0")) / Decimal(len(parts))
        return quantize(clamp(base, Decimal("0"), HUNDRED))

    @staticmethod
    def rank_score(info: BasicInfo) -> Optional[Decimal]:
        if info.academic_ranking is None or not info.total_students:
            return None
        total = Decimal(info.total_students)
        return (total - Decimal(info.academic_ranking) + 1) / total * HUNDRED

    @staticmethod
    def gpa_score(info: BasicInfo) -> Optional[Decimal]:
        if info.gpa is None:
            return None
        factor = min(Decimal(str(info.gpa)) / GPA_SCALE, Decimal("1"))
        return factor * HUNDRED
