# tests/conftest.py

"""
Pytest Fixtures - Shared applications, clock and workflow for all tests

FIXTURE REFERENCE:
- eligible_application: CET-6 480 with certificate, transcript, one A类
  paper (first of 6 authors) with proof, converted score 87.86, 295
  volunteer hours. Scores: achievement 8.00, performance 1.00, total 79.29.
- ineligible_application: no language score, no transcript.
- special_talent_application: eligible, specialized-talent claim with
  3 professor recommendations.
"""

from datetime import datetime, timedelta, timezone
from itertools import count
from uuid import UUID

import pytest

from admission.config import Settings
from admission.models.application import (
    Achievements,
    Application,
    BasicInfo,
    LanguageScores,
    Performance,
    ProfessorRecommendation,
    Publication,
    SpecialTalent,
)
from admission.models.enumerations import ProofKind, PublicationType
from admission.repositories.application_repository import InMemoryApplicationRepository
from admission.services.application_service import ApplicationService
from admission.services.review_workflow import ReviewWorkflow

FIXED_NOW = datetime(2024, 9, 20, 8, 0, tzinfo=timezone.utc)


class FakeClock:
    """Deterministic clock; advance() moves time forward."""

    def __init__(self, start: datetime = FIXED_NOW):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class SequentialIds:
    """Deterministic id source for review events."""

    def __init__(self):
        self._counter = count(1)

    def __call__(self) -> UUID:
        return UUID(int=next(self._counter))


# =============================================================================
# COLLABORATOR FIXTURES
# =============================================================================

@pytest.fixture
def clock():
    """Fixed clock starting at FIXED_NOW."""
    return FakeClock()


@pytest.fixture
def workflow(clock):
    """ReviewWorkflow wired to the fixed clock and sequential ids."""
    return ReviewWorkflow(clock=clock, id_factory=SequentialIds())


@pytest.fixture
def test_settings():
    """Settings with explicit values, independent of the environment."""
    return Settings(
        APP_ENV="development",
        DEBUG=False,
        TRANSITION_MAX_RETRIES=3,
        SYSTEM_REVIEW_SETTLE_SECONDS=60,
        SYSTEM_REVIEW_BATCH_SIZE=10,
    )


@pytest.fixture
def repository():
    return InMemoryApplicationRepository()


@pytest.fixture
def service(repository, workflow, test_settings):
    return ApplicationService(repository, workflow=workflow, settings=test_settings)


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================

def make_application(**overrides) -> Application:
    """Build an eligible application; keyword arguments replace fields."""
    data = dict(
        student_id="2021210001",
        name="Li Hua",
        program_id="cs-master-2025",
        basic_info=BasicInfo(
            gpa=3.7,
            academic_ranking=5,
            total_students=120,
            converted_score=87.86,
            department="School of Computer Science",
            major="Computer Science",
        ),
        language_scores=LanguageScores(cet4=560, cet6=480),
        achievements=Achievements(
            publications=[
                Publication(
                    title="Graph Attention for Traffic Forecasting",
                    type=PublicationType.A,
                    journal="TKDE",
                    author_rank=1,
                    total_authors=6,
                    publish_year=2024,
                )
            ]
        ),
        performance=Performance(volunteer_hours=295),
        proofs={
            ProofKind.TRANSCRIPT: True,
            ProofKind.CET6_CERTIFICATE: True,
            ProofKind.PUBLICATION_PROOF: True,
        },
    )
    data.update(overrides)
    return Application(**data)


@pytest.fixture
def eligible_application():
    return make_application()


@pytest.fixture
def ineligible_application():
    return make_application(
        language_scores=LanguageScores(),
        proofs={ProofKind.PUBLICATION_PROOF: True},
    )


@pytest.fixture
def special_talent_application():
    return make_application(
        special_talent=SpecialTalent(
            is_applying=True,
            description="Compiler research",
            recommendations=[
                ProfessorRecommendation(name="Prof. Zhang", title="Professor"),
                ProfessorRecommendation(name="Prof. Wang", title="Professor"),
                ProfessorRecommendation(name="Prof. Liu", title="Associate Professor"),
            ],
        )
    )


@pytest.fixture
def system_approved_application(workflow, eligible_application):
    """Eligible application taken through submit and system_decide."""
    return workflow.system_decide(workflow.submit(eligible_application))


@pytest.fixture
def application_factory():
    """Factory fixture: application_factory(**overrides) -> Application."""
    return make_application
