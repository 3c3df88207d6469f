"""
Application Service - Admission Engine
admission/services/application_service.py

Serializes review transitions per application. Each attempt loads the
record, applies the workflow transition, and writes back with a revision
check; a concurrent writer causes the attempt to be retried from a fresh
load.
"""

import logging
from typing import Any, List, Mapping, Optional
from uuid import UUID

from admission.config import Settings, get_settings
from admission.core.exceptions import ConcurrentModificationError
from admission.models.application import Application
from admission.models.enumerations import ApplicationStatus, ReviewAction
from admission.repositories.application_repository import InMemoryApplicationRepository
from admission.services.review_workflow import ReviewWorkflow

logger = logging.getLogger(__name__)

REVIEW_QUEUE_STATUSES = (
    ApplicationStatus.SYSTEM_REVIEWING,
    ApplicationStatus.SYSTEM_APPROVED,
    ApplicationStatus.ADMIN_REVIEWING,
    ApplicationStatus.APPROVED,
    ApplicationStatus.REJECTED,
)


class ApplicationService:
    """Service layer between callers, the review workflow and the store."""

    def __init__(
        self,
        repository: InMemoryApplicationRepository,
        workflow: Optional[ReviewWorkflow] = None,
        settings: Optional[Settings] = None,
    ):
        self.repository = repository
        self.workflow = workflow or ReviewWorkflow()
        self.settings = settings or get_settings()

    def create(self, application: Application) -> Application:
        """Register a new application; ``created_at`` is stamped by the workflow clock."""
        stamped = application.model_copy(update={"created_at": self.workflow.clock()})
        stored = self.repository.create(stamped)
        logger.info(f"Created application {stored.id} for student {stored.student_id}")
        return stored

    def get(self, application_id: UUID) -> Application:
        return self.repository.get_or_raise(application_id)

    def apply(
        self,
        application_id: UUID,
        action: ReviewAction,
        payload: Optional[Mapping[str, Any]] = None,
    ) -> Application:
        """
        Apply a review action to a stored application.

        Args:
            application_id: Application to update
            action: Review action to apply
            payload: Action payload passed to the workflow

        Returns:
            The stored application after the transition

        Raises:
            EntityNotFoundException: unknown application
            WorkflowError: the transition is not allowed
            ConcurrentModificationError: still conflicting after
                TRANSITION_MAX_RETRIES attempts
        """
        max_attempts = self.settings.TRANSITION_MAX_RETRIES
        attempt = 0
        with self.repository.locked_record(application_id):
            while True:
                attempt += 1
                current = self.repository.get_or_raise(application_id)
                updated = self.workflow.transition(current, action, payload)

                if updated is current:
                    return current

                try:
                    return self.repository.save(updated, expected_revision=current.revision)
                except ConcurrentModificationError as e:
                    if attempt >= max_attempts:
                        logger.error(
                            f"Giving up on {action} for application {application_id} "
                            f"after {attempt} attempts: {e}"
                        )
                        raise
                    logger.warning(
                        f"Revision conflict on application {application_id} "
                        f"(attempt {attempt}/{max_attempts}), retrying"
                    )

    def submit(self, application_id: UUID, actor: Optional[str] = None) -> Application:
        return self.apply(application_id, ReviewAction.SUBMIT, {"actor": actor})

    def system_decide(self, application_id: UUID) -> Application:
        return self.apply(application_id, ReviewAction.SYSTEM_DECIDE, {"actor": "system"})

    def admin_approve(
        self, application_id: UUID, comment: Optional[str] = None, actor: Optional[str] = None
    ) -> Application:
        return self.apply(
            application_id, ReviewAction.ADMIN_APPROVE, {"comment": comment, "actor": actor}
        )

    def admin_reject(
        self, application_id: UUID, comment: Optional[str], actor: Optional[str] = None
    ) -> Application:
        return self.apply(
            application_id, ReviewAction.ADMIN_REJECT, {"comment": comment, "actor": actor}
        )

    def review_queue(self) -> List[Application]:
        """Applications visible to administrators, oldest submission first."""
        return self.repository.list_by_status(REVIEW_QUEUE_STATUSES)

    def pending_system_review(self, limit: Optional[int] = None) -> List[Application]:
        return self.repository.list_by_status([ApplicationStatus.SYSTEM_REVIEWING], limit=limit)
