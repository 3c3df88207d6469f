from pydantic import BaseModel, ConfigDict, Field, model_validator
from uuid import UUID, uuid4
from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, List, Optional

from admission.models.enumerations import (
    ApplicationStatus,
    AwardLevel,
    CompetitionAward,
    CompetitionLevel,
    ProjectRole,
    ProjectStatus,
    ProofKind,
    PublicationType,
    ReviewAction,
)
from admission.models.scoring import EligibilityResult


# =============================================================================
# APPLICANT INPUTS
# =============================================================================

class BasicInfo(BaseModel):
    """
    Academic record inputs. Computed outside the engine and treated as
    read-only.
    """

    gpa: Optional[float] = Field(default=None, ge=0, le=5, description="Grade point average (4-point scale)")
    academic_ranking: Optional[int] = Field(default=None, ge=1, description="Rank within the major")
    total_students: Optional[int] = Field(default=None, ge=1, description="Number of students in the major")
    converted_score: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="Academic record already converted to a 0-100 figure",
    )
    department: str = ""
    major: str = ""

    @model_validator(mode="after")
    def validate_ranking(self):
        """Ensure the ranking falls inside the major size when both are set."""
        if self.academic_ranking is not None and self.total_students is not None:
            if self.academic_ranking > self.total_students:
                raise ValueError("academic_ranking must be <= total_students")
        return self


class LanguageScores(BaseModel):
    """Foreign-language test results; any field may be absent."""

    cet4: Optional[float] = Field(default=None, ge=0, le=710)
    cet6: Optional[float] = Field(default=None, ge=0, le=710)
    toefl: Optional[float] = Field(default=None, ge=0, le=120)
    ielts: Optional[float] = Field(default=None, ge=0, le=9)
    gre: Optional[float] = Field(default=None, ge=0, le=340)
    other: Optional[str] = None


class Publication(BaseModel):
    title: str = ""
    type: PublicationType = PublicationType.A
    journal: str = ""
    authors: str = ""
    author_rank: int = Field(default=1, ge=1)
    total_authors: int = Field(default=1, ge=1)
    publish_year: Optional[int] = None

    @model_validator(mode="after")
    def validate_author_rank(self):
        if self.author_rank > self.total_authors:
            raise ValueError("author_rank must be <= total_authors")
        return self


class Competition(BaseModel):
    name: str = ""
    level: CompetitionLevel = CompetitionLevel.A_PLUS
    award: CompetitionAward = CompetitionAward.NATIONAL_FIRST_OR_ABOVE
    year: Optional[int] = None
    is_team: bool = False
    team_rank: Optional[int] = Field(
        default=None,
        ge=1,
        description="Entrant's position in the team; not used for apportionment",
    )
    total_team_members: int = Field(default=1, ge=1)


class Patent(BaseModel):
    title: str = ""
    patent_number: str = ""
    author_rank: int = Field(default=1, ge=1)
    grant_year: Optional[int] = None


class InnovationProject(BaseModel):
    name: str = ""
    level: AwardLevel = AwardLevel.NATIONAL
    role: ProjectRole = ProjectRole.LEAD
    status: ProjectStatus = ProjectStatus.COMPLETED
    year: Optional[int] = None


class Achievements(BaseModel):
    """Academic-achievement records scored by AchievementScorer."""

    publications: List[Publication] = Field(default_factory=list)
    competitions: List[Competition] = Field(default_factory=list)
    patents: List[Patent] = Field(default_factory=list)
    innovation_projects: List[InnovationProject] = Field(default_factory=list)

    def has_records(self) -> bool:
        """True when any record carries a non-empty title or name."""
        return (
            any(p.title.strip() for p in self.publications)
            or any(c.name.strip() for c in self.competitions)
            or any(p.title.strip() for p in self.patents)
            or any(p.name.strip() for p in self.innovation_projects)
        )


class Honor(BaseModel):
    title: str = ""
    level: AwardLevel = AwardLevel.SCHOOL
    year: Optional[int] = None


class SocialWork(BaseModel):
    position: str = ""
    duration: str = ""
    year: Optional[int] = None


class Performance(BaseModel):
    """Comprehensive-performance records scored by PerformanceScorer."""

    volunteer_hours: float = Field(default=0, ge=0)
    honors: List[Honor] = Field(default_factory=list)
    social_work: List[SocialWork] = Field(default_factory=list)


class ProfessorRecommendation(BaseModel):
    name: str
    title: str = ""
    department: str = ""


class SpecialTalent(BaseModel):
    """Specialized-talent track claim."""

    is_applying: bool = False
    description: str = ""
    recommendations: List[ProfessorRecommendation] = Field(default_factory=list)
    defense_passed: Optional[bool] = None
    defense_score: Optional[float] = Field(default=None, ge=0, le=100)


# =============================================================================
# ENGINE OUTPUTS
# =============================================================================

class CalculatedScores(BaseModel):
    """Scores stored by the system decision."""

    academic_base: Optional[Decimal] = Field(default=None, ge=0, le=100)
    achievement_score: Optional[Decimal] = Field(default=None, ge=0, le=15)
    performance_score: Optional[Decimal] = Field(default=None, ge=0, le=5)
    total_score: Optional[Decimal] = Field(default=None, ge=0)


class ReviewEvent(BaseModel):
    """One entry of the append-only review audit trail."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    action: ReviewAction
    from_status: ApplicationStatus
    to_status: ApplicationStatus
    at: datetime
    actor: Optional[str] = None
    comment: Optional[str] = None


# =============================================================================
# APPLICATION AGGREGATE
# =============================================================================

class Application(BaseModel):
    """
    One evaluation unit moving through the two-stage review.

    Mutated only through ReviewWorkflow transitions; every applied
    transition appends to history and bumps revision.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4, description="Unique application identifier")
    student_id: str = Field(..., min_length=1)
    name: str = ""
    program_id: str = Field(..., min_length=1, description="Target program identifier")

    status: ApplicationStatus = Field(
        default=ApplicationStatus.PENDING,
        description="Current review status",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Record creation timestamp (UTC)",
    )
    submitted_at: Optional[datetime] = None
    system_reviewed_at: Optional[datetime] = None
    admin_reviewed_at: Optional[datetime] = None

    system_review_comment: Optional[str] = None
    admin_review_comment: Optional[str] = None

    basic_info: BasicInfo = Field(default_factory=BasicInfo)
    language_scores: LanguageScores = Field(default_factory=LanguageScores)
    achievements: Achievements = Field(default_factory=Achievements)
    performance: Performance = Field(default_factory=Performance)
    calculated_scores: CalculatedScores = Field(default_factory=CalculatedScores)
    special_talent: SpecialTalent = Field(default_factory=SpecialTalent)
    proofs: Dict[ProofKind, bool] = Field(default_factory=dict)

    eligibility: Optional[EligibilityResult] = None
    history: List[ReviewEvent] = Field(default_factory=list)
    revision: int = Field(default=0, ge=0)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({
    ApplicationStatus.SYSTEM_REJECTED,
    ApplicationStatus.APPROVED,
    ApplicationStatus.REJECTED,
})
