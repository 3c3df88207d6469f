"""
Graduate-recommendation admission engine.

Scoring rules, the submission eligibility gate and the two-stage
(system, then administrator) review workflow.
"""

from decimal import Decimal
from typing import Optional

from admission.models.application import Achievements, Application, Performance
from admission.models.scoring import EligibilityResult, ScoreBreakdown
from admission.scoring.achievement_scorer import AchievementScorer
from admission.scoring.composite_calculator import CompositeCalculator
from admission.scoring.eligibility import EligibilityValidator
from admission.scoring.performance_scorer import PerformanceScorer
from admission.scoring.utils import Number
from admission.services.collaborators import ProofOracle
from admission.services.review_workflow import transition

__version__ = "1.0.0"


def validate_eligibility(
    application: Application,
    proof_oracle: Optional[ProofOracle] = None,
) -> EligibilityResult:
    return EligibilityValidator(proof_oracle).validate(application)


def score_achievement(achievements: Achievements, defense_passed: bool = False) -> ScoreBreakdown:
    return AchievementScorer().calculate(achievements, defense_passed=defense_passed)


def score_performance(performance: Performance) -> ScoreBreakdown:
    return PerformanceScorer().calculate(performance)


def compute_composite(
    academic_base: Number,
    achievement_total: Number,
    performance_total: Number,
) -> Decimal:
    """academic_base x 0.80 + achievement + performance, rounded half-up to 0.01."""
    return CompositeCalculator().calculate(academic_base, achievement_total, performance_total).total


__all__ = [
    "validate_eligibility",
    "score_achievement",
    "score_performance",
    "compute_composite",
    "transition",
]
