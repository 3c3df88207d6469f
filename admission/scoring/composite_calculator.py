"""
scoring/composite_calculator.py

Computes the composite recommendation score (推免综合成绩).

Formula:
    Total = AcademicBase × 0.80 + Achievement + Performance

Parameters:
    AcademicBase ∈ [0, 100]  (computed outside the scorers, see academic_base.py)
    Achievement  ∈ [0, 15]   added on its native scale
    Performance  ∈ [0, 5]    added on its native scale

Result quantized half-up to 0.01.
"""

import logging
from decimal import Decimal, InvalidOperation

from admission.core.exceptions import InputValidationError
from admission.models.scoring import CompositeResult
from admission.scoring import rule_tables as rt
from admission.scoring.utils import CONTRIBUTION_PLACES, Number, quantize

logger = logging.getLogger(__name__)


def _bounded(name: str, value: Number, upper: Decimal) -> Decimal:
    try:
        d = Decimal(str(value))
    except InvalidOperation:
        raise InputValidationError(name, value, f"{name} is not a number: {value!r}") from None
    if not d.is_finite() or d < 0 or d > upper:
        raise InputValidationError(name, value, f"{name} must be in [0, {upper}], got {value}")
    return d


class CompositeCalculator:
    """Combine the academic base with the two capped sub-scores."""

    ACADEMIC_WEIGHT = rt.ACADEMIC_BASE_WEIGHT

    def calculate(
        self,
        academic_base: Number,
        achievement_score: Number,
        performance_score: Number,
    ) -> CompositeResult:
        """
        Args:
            academic_base: Academic record score in [0, 100].
            achievement_score: Capped achievement sub-score in [0, 15].
            performance_score: Capped performance sub-score in [0, 5].

        Returns:
            CompositeResult with total and breakdown.

        Examples:
            >>> CompositeCalculator().calculate(87.86, 12.4, 0.4).total
            Decimal('83.09')
        """
        base_d = _bounded("academic_base", academic_base, rt.ACADEMIC_BASE_MAX)
        ach_d = _bounded("achievement_score", achievement_score, rt.ACHIEVEMENT_CAP)
        perf_d = _bounded("performance_score", performance_score, rt.PERFORMANCE_CAP)

        academic_weighted = base_d * self.ACADEMIC_WEIGHT
        total = quantize(academic_weighted + ach_d + perf_d)

        logger.info(
            "composite_calculated",
            extra={
                "academic_base": float(base_d),
                "academic_weighted": float(academic_weighted),
                "achievement_score": float(ach_d),
                "performance_score": float(perf_d),
                "total": float(total),
            },
        )

        return CompositeResult(
            total=total,
            academic_weighted=quantize(academic_weighted, CONTRIBUTION_PLACES),
            academic_base=base_d,
            achievement_score=ach_d,
            performance_score=perf_d,
            academic_weight=self.ACADEMIC_WEIGHT,
        )
