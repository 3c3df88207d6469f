"""
Dependencies - Admission Engine
admission/core/dependencies.py

Cached providers for the repository, workflow and services.
"""

from functools import lru_cache

from admission.config import get_settings
from admission.repositories.application_repository import InMemoryApplicationRepository
from admission.services.application_service import ApplicationService
from admission.services.review_workflow import ReviewWorkflow
from admission.services.system_review import SystemReviewRunner


@lru_cache()
def get_application_repository() -> InMemoryApplicationRepository:
    """Get cached InMemoryApplicationRepository instance."""
    return InMemoryApplicationRepository()


@lru_cache()
def get_review_workflow() -> ReviewWorkflow:
    """Get cached ReviewWorkflow instance."""
    return ReviewWorkflow()


@lru_cache()
def get_application_service() -> ApplicationService:
    """Get cached ApplicationService instance."""
    return ApplicationService(
        repository=get_application_repository(),
        workflow=get_review_workflow(),
        settings=get_settings(),
    )


@lru_cache()
def get_system_review_runner() -> SystemReviewRunner:
    """Get cached SystemReviewRunner instance."""
    return SystemReviewRunner(get_application_service(), settings=get_settings())
