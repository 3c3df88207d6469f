"""
Rule Tables
admission/scoring/rule_tables.py

Static lookup data for achievement / performance scoring and the language
gate. Every table is an explicit mapping over a closed enum; lookups never
fall back to a default. A value outside the enum raises InputValidationError.

Tables:
    PUBLICATION_BASE_SCORES   publication type → base score
    COMPETITION_BASE_SCORES   level × award    → base score (3 × 5)
    PATENT_BASE_SCORE         flat 2
    INNOVATION_SCORES         level × role     → score (completed projects only)
    HONOR_SCORES              level            → score
    LANGUAGE_THRESHOLDS       test             → minimum passing score

Volunteer formula:
    hours < 200 → 0
    otherwise   → min(1 + (hours − 200) × 0.025, 1)
"""

from decimal import Decimal
from enum import Enum
from typing import Dict, Tuple, Type, TypeVar

from admission.core.exceptions import InputValidationError
from admission.models.enumerations import (
    AwardLevel,
    CompetitionAward,
    CompetitionLevel,
    LanguageTest,
    ProjectRole,
    ProofKind,
    PublicationType,
)
from admission.scoring.utils import Number

RULE_TABLE_VERSION = "2024.1"

E = TypeVar("E", bound=Enum)

# =============================================================================
# ACADEMIC ACHIEVEMENT TABLES
# =============================================================================

PUBLICATION_BASE_SCORES: Dict[PublicationType, Decimal] = {
    PublicationType.A:                     Decimal("10"),
    PublicationType.B:                     Decimal("6"),
    PublicationType.C:                     Decimal("1"),
    PublicationType.HIGH_LEVEL_CHINESE:    Decimal("6"),
    PublicationType.INFO_COMM_ENGINEERING: Decimal("10"),
}

# Author-rank ratios for publications (rank 1 depends on author count)
FIRST_AUTHOR_SMALL_TEAM_RATIO = Decimal("1.0")   # total authors <= 2
FIRST_AUTHOR_RATIO = Decimal("0.8")
SECOND_AUTHOR_RATIO = Decimal("0.2")
OTHER_AUTHOR_RATIO = Decimal("0")
SMALL_AUTHOR_TEAM_MAX = 2

_CL = CompetitionLevel
_CA = CompetitionAward
COMPETITION_BASE_SCORES: Dict[Tuple[CompetitionLevel, CompetitionAward], Decimal] = {
    (_CL.A_PLUS, _CA.NATIONAL_FIRST_OR_ABOVE):    Decimal("30"),
    (_CL.A_PLUS, _CA.NATIONAL_SECOND):            Decimal("15"),
    (_CL.A_PLUS, _CA.NATIONAL_THIRD):             Decimal("10"),
    (_CL.A_PLUS, _CA.PROVINCIAL_FIRST_OR_ABOVE):  Decimal("5"),
    (_CL.A_PLUS, _CA.PROVINCIAL_SECOND):          Decimal("2"),
    (_CL.A, _CA.NATIONAL_FIRST_OR_ABOVE):         Decimal("15"),
    (_CL.A, _CA.NATIONAL_SECOND):                 Decimal("10"),
    (_CL.A, _CA.NATIONAL_THIRD):                  Decimal("5"),
    (_CL.A, _CA.PROVINCIAL_FIRST_OR_ABOVE):       Decimal("2"),
    (_CL.A, _CA.PROVINCIAL_SECOND):               Decimal("1"),
    (_CL.A_MINUS, _CA.NATIONAL_FIRST_OR_ABOVE):   Decimal("10"),
    (_CL.A_MINUS, _CA.NATIONAL_SECOND):           Decimal("5"),
    (_CL.A_MINUS, _CA.NATIONAL_THIRD):            Decimal("2"),
    (_CL.A_MINUS, _CA.PROVINCIAL_FIRST_OR_ABOVE): Decimal("1"),
    (_CL.A_MINUS, _CA.PROVINCIAL_SECOND):         Decimal("0.5"),
}

# Team apportionment divisors
INDIVIDUAL_DIVISOR = 3
TWO_MEMBER_TEAM_DIVISOR = 3
MAX_TEAM_DIVISOR = 5

PATENT_BASE_SCORE = Decimal("2")
PATENT_FIRST_AUTHOR_RATIO = Decimal("0.8")
PATENT_OTHER_AUTHOR_RATIO = Decimal("1.0")

INNOVATION_SCORES: Dict[Tuple[AwardLevel, ProjectRole], Decimal] = {
    (AwardLevel.NATIONAL, ProjectRole.LEAD):     Decimal("1.0"),
    (AwardLevel.NATIONAL, ProjectRole.MEMBER):   Decimal("0.3"),
    (AwardLevel.PROVINCIAL, ProjectRole.LEAD):   Decimal("0.5"),
    (AwardLevel.PROVINCIAL, ProjectRole.MEMBER): Decimal("0.2"),
    (AwardLevel.SCHOOL, ProjectRole.LEAD):       Decimal("0.1"),
    (AwardLevel.SCHOOL, ProjectRole.MEMBER):     Decimal("0.05"),
}

ACHIEVEMENT_CAP = Decimal("15")

# =============================================================================
# COMPREHENSIVE PERFORMANCE TABLES
# =============================================================================

HONOR_SCORES: Dict[AwardLevel, Decimal] = {
    AwardLevel.NATIONAL:   Decimal("2"),
    AwardLevel.PROVINCIAL: Decimal("1"),
    AwardLevel.SCHOOL:     Decimal("0.2"),
}

VOLUNTEER_MIN_HOURS = Decimal("200")
VOLUNTEER_BASE_CREDIT = Decimal("1")
VOLUNTEER_CREDIT_PER_HOUR = Decimal("0.025")
VOLUNTEER_CREDIT_CAP = Decimal("1")

SOCIAL_WORK_CREDIT = Decimal("0.5")

PERFORMANCE_CAP = Decimal("5")

# =============================================================================
# ELIGIBILITY TABLES
# =============================================================================

LANGUAGE_THRESHOLDS: Dict[LanguageTest, Decimal] = {
    LanguageTest.CET4:  Decimal("500"),
    LanguageTest.CET6:  Decimal("425"),
    LanguageTest.TOEFL: Decimal("90"),
    LanguageTest.IELTS: Decimal("6.0"),
}

LANGUAGE_PROOF_KINDS: Dict[LanguageTest, ProofKind] = {
    LanguageTest.CET4:  ProofKind.CET4_CERTIFICATE,
    LanguageTest.CET6:  ProofKind.CET6_CERTIFICATE,
    LanguageTest.TOEFL: ProofKind.TOEFL_CERTIFICATE,
    LanguageTest.IELTS: ProofKind.IELTS_CERTIFICATE,
}

ACHIEVEMENT_PROOF_KINDS: Tuple[ProofKind, ...] = (
    ProofKind.PUBLICATION_PROOF,
    ProofKind.COMPETITION_PROOF,
    ProofKind.PATENT_PROOF,
    ProofKind.INNOVATION_PROOF,
)

MIN_PROFESSOR_RECOMMENDATIONS = 3

# =============================================================================
# COMPOSITE
# =============================================================================

ACADEMIC_BASE_WEIGHT = Decimal("0.80")
ACADEMIC_BASE_MAX = Decimal("100")


# =============================================================================
# LOOKUPS
# =============================================================================

def _coerce(enum_cls: Type[E], value, field: str) -> E:
    """Convert a raw value to a member of enum_cls or fail loudly."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        raise InputValidationError(
            field, value, f"Unknown {field} {value!r}; expected one of "
            f"{[m.value for m in enum_cls]}"
        ) from None


def publication_base_score(publication_type) -> Decimal:
    """Base score for a publication type."""
    return PUBLICATION_BASE_SCORES[_coerce(PublicationType, publication_type, "publication type")]


def competition_base_score(level, award) -> Decimal:
    """Base score from the level × award matrix."""
    key = (
        _coerce(CompetitionLevel, level, "competition level"),
        _coerce(CompetitionAward, award, "competition award"),
    )
    return COMPETITION_BASE_SCORES[key]


def patent_base_score() -> Decimal:
    return PATENT_BASE_SCORE


def innovation_score(level, role) -> Decimal:
    """Score for a completed innovation project."""
    key = (
        _coerce(AwardLevel, level, "project level"),
        _coerce(ProjectRole, role, "project role"),
    )
    return INNOVATION_SCORES[key]


def honor_score(level) -> Decimal:
    return HONOR_SCORES[_coerce(AwardLevel, level, "honor level")]


def language_threshold(test) -> Decimal:
    return LANGUAGE_THRESHOLDS[_coerce(LanguageTest, test, "language test")]


def meets_language_threshold(test, score: Number) -> bool:
    """True when score reaches the threshold for test."""
    return Decimal(str(score)) >= language_threshold(test)


def volunteer_credit(hours: Number) -> Decimal:
    """
    Volunteer-hours credit.

    The cap applies to the whole expression, so every qualifying hour count
    yields exactly 1.
    """
    h = Decimal(str(hours))
    if h < 0:
        raise InputValidationError("volunteer hours", hours, "volunteer hours must be >= 0")
    if h < VOLUNTEER_MIN_HOURS:
        return Decimal("0")
    credit = VOLUNTEER_BASE_CREDIT + (h - VOLUNTEER_MIN_HOURS) * VOLUNTEER_CREDIT_PER_HOUR
    return min(credit, VOLUNTEER_CREDIT_CAP)
