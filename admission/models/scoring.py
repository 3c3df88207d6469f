"""
Scoring result types.

EligibilityFailure / EligibilityResult are pydantic models because they are
attached to the Application record. The scorer outputs are plain dataclasses,
like the calculator results elsewhere in the engine.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from admission.models.enumerations import EligibilityFailureCode, ScoreCategory


class EligibilityFailure(BaseModel):
    """A single unmet eligibility condition, surfaced to the applicant."""

    code: EligibilityFailureCode
    message: str
    details: Optional[Dict[str, Any]] = Field(default=None)


class EligibilityResult(BaseModel):
    """Outcome of EligibilityValidator.validate()."""

    eligible: bool
    failures: List[EligibilityFailure] = Field(default_factory=list)
    satisfied: List[str] = Field(
        default_factory=list,
        description="Gate conditions that passed, in check order",
    )


@dataclass(frozen=True)
class ScoreItem:
    """Contribution of one record, kept for audit display."""
    category: ScoreCategory
    label: str
    base: Decimal           # table value before apportionment
    factor: Decimal         # multiplier applied to base (ratio or 1/divisor)
    contribution: Decimal   # base × factor, quantized to 0.0001
    note: str = ""


@dataclass(frozen=True)
class ScoreBreakdown:
    """Output of AchievementScorer / PerformanceScorer .calculate()."""
    total: Decimal          # capped, quantized to 0.01
    raw_total: Decimal      # uncapped sum of contributions
    cap: Decimal
    items: Tuple[ScoreItem, ...] = field(default_factory=tuple)

    @property
    def is_capped(self) -> bool:
        return self.raw_total > self.cap


@dataclass(frozen=True)
class CompositeResult:
    """Output of CompositeCalculator.calculate()."""
    total: Decimal                # quantized to 0.01
    academic_weighted: Decimal    # academic_base × 0.80
    academic_base: Decimal
    achievement_score: Decimal
    performance_score: Decimal
    academic_weight: Decimal
