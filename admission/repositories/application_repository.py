"""
Application Repository - Admission Engine
admission/repositories/application_repository.py

In-process reference store for Application records. Writes use an
optimistic revision check (compare-and-swap): ``save`` succeeds only when
the stored revision equals the revision the caller loaded.
"""

from typing import Dict, Iterable, List, Optional
from uuid import UUID

from admission.core.exceptions import (
    ConcurrentModificationError,
    DuplicateEntityException,
    EntityNotFoundException,
)
from admission.models.application import Application
from admission.models.enumerations import ApplicationStatus
from admission.repositories.base import BaseRepository

# An earlier application in one of these statuses may be followed by a new one
REAPPLY_ALLOWED_STATUSES = frozenset({
    ApplicationStatus.SYSTEM_REJECTED,
    ApplicationStatus.REJECTED,
})


class InMemoryApplicationRepository(BaseRepository):
    """Repository for Application records with revision checks."""

    def __init__(self):
        super().__init__()
        self._applications: Dict[UUID, Application] = {}

    def create(self, application: Application) -> Application:
        """
        Store a new application.

        Args:
            application: Application to store (any revision)

        Returns:
            Stored copy of the application

        Raises:
            DuplicateEntityException: an application with the same id exists,
                or the student has a live application to the same program.
                Rejected applications do not block a new one.
        """
        with self.locked_store():
            if application.id in self._applications:
                raise DuplicateEntityException(f"Application {application.id} already exists")
            for existing in self._applications.values():
                if existing.status in REAPPLY_ALLOWED_STATUSES:
                    continue
                if (existing.student_id, existing.program_id) == (
                    application.student_id,
                    application.program_id,
                ):
                    raise DuplicateEntityException(
                        f"Student {application.student_id} already applied to "
                        f"program {application.program_id}"
                    )
            self._applications[application.id] = application.model_copy(deep=True)
            return application.model_copy(deep=True)

    def get_by_id(self, application_id: UUID) -> Optional[Application]:
        """Return a copy of the stored application, or None."""
        with self.locked_store():
            stored = self._applications.get(application_id)
            return stored.model_copy(deep=True) if stored is not None else None

    def get_or_raise(self, application_id: UUID) -> Application:
        application = self.get_by_id(application_id)
        if application is None:
            raise EntityNotFoundException("Application", str(application_id))
        return application

    def exists(self, application_id: UUID) -> bool:
        with self.locked_store():
            return application_id in self._applications

    def save(self, application: Application, expected_revision: int) -> Application:
        """
        Replace the stored application if its revision is unchanged.

        Args:
            application: Updated application
            expected_revision: Revision the caller loaded before updating

        Returns:
            Stored copy of the application

        Raises:
            EntityNotFoundException: no such application
            ConcurrentModificationError: stored revision differs
        """
        with self.locked_store():
            stored = self._applications.get(application.id)
            if stored is None:
                raise EntityNotFoundException("Application", str(application.id))
            if stored.revision != expected_revision:
                raise ConcurrentModificationError(
                    str(application.id), expected_revision, stored.revision
                )
            self._applications[application.id] = application.model_copy(deep=True)
            return application.model_copy(deep=True)

    def list_by_status(
        self,
        statuses: Iterable[ApplicationStatus],
        limit: Optional[int] = None,
    ) -> List[Application]:
        """
        List applications in any of the given statuses, oldest submission first.

        Applications never submitted sort by creation time.
        """
        wanted = set(statuses)
        with self.locked_store():
            matches = [
                a.model_copy(deep=True)
                for a in self._applications.values()
                if a.status in wanted
            ]
        matches.sort(key=lambda a: a.submitted_at or a.created_at)
        return matches[:limit] if limit is not None else matches

