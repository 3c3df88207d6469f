"""
System Review Runner - Admission Engine
admission/services/system_review.py

One pass of automatic system review over submitted applications:

    1. list applications in ``system_reviewing``, oldest submission first
    2. leave alone anything submitted within SYSTEM_REVIEW_SETTLE_SECONDS
    3. apply ``system_decide`` to at most SYSTEM_REVIEW_BATCH_SIZE of the rest

A failure on one application is logged and recorded; the pass continues.
"""

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional
from uuid import UUID

import structlog

from admission.config import Settings, get_settings
from admission.core.exceptions import (
    ConcurrentModificationError,
    EntityNotFoundException,
    InputValidationError,
    WorkflowError,
)
from admission.models.enumerations import ApplicationStatus
from admission.services.application_service import ApplicationService
from admission.services.collaborators import Clock

logger = structlog.get_logger(__name__)
std_logger = logging.getLogger(__name__)


@dataclass
class SystemReviewReport:
    """Outcome of one system-review pass."""
    processed: List[UUID] = field(default_factory=list)
    skipped: List[UUID] = field(default_factory=list)
    failed: List[UUID] = field(default_factory=list)


class SystemReviewRunner:
    """Runs the automatic system decision over settled submissions."""

    def __init__(
        self,
        service: ApplicationService,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
    ):
        self.service = service
        self.settings = settings or get_settings()
        self.clock = clock or service.workflow.clock

    def run_once(self) -> SystemReviewReport:
        report = SystemReviewReport()
        cutoff = self.clock() - timedelta(seconds=self.settings.SYSTEM_REVIEW_SETTLE_SECONDS)
        batch_size = self.settings.SYSTEM_REVIEW_BATCH_SIZE

        for application in self.service.pending_system_review():
            if application.submitted_at is not None and application.submitted_at > cutoff:
                report.skipped.append(application.id)
                continue
            if len(report.processed) + len(report.failed) >= batch_size:
                report.skipped.append(application.id)
                continue

            try:
                updated = self.service.system_decide(application.id)
            except (
                WorkflowError,
                ConcurrentModificationError,
                EntityNotFoundException,
                InputValidationError,
            ) as e:
                std_logger.error(f"System review failed for application {application.id}: {e}")
                report.failed.append(application.id)
                continue

            report.processed.append(application.id)
            logger.info(
                "system_review_decided",
                application_id=str(updated.id),
                status=updated.status.value,
                total_score=str(updated.calculated_scores.total_score)
                if updated.status == ApplicationStatus.SYSTEM_APPROVED
                else None,
            )

        logger.info(
            "system_review_pass_complete",
            processed=len(report.processed),
            skipped=len(report.skipped),
            failed=len(report.failed),
        )
        return report
