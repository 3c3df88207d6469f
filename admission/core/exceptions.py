"""
Custom Exceptions - Admission Engine
admission/core/exceptions.py

Exception classes for scoring input validation, review workflow transitions
and repository operations. Eligibility failures are not exceptions; they are
collected as EligibilityFailure records (see admission/models/scoring.py).
"""

from typing import Any, Optional


class AdmissionError(Exception):
    """Base exception for the admission engine."""

    pass


class InputValidationError(AdmissionError, ValueError):
    """Malformed scoring input (value outside a closed enum or numeric range)."""

    def __init__(self, field: str, value: Any, message: Optional[str] = None):
        self.field = field
        self.value = value
        super().__init__(message or f"Invalid value for {field}: {value!r}")


class WorkflowError(AdmissionError):
    """Requested review action is not allowed from the current status."""

    def __init__(self, status: Any, action: Any, message: Optional[str] = None):
        self.status = getattr(status, "value", status)
        self.action = getattr(action, "value", action)
        self.message = message or (
            f"Action '{self.action}' is not allowed from status '{self.status}'"
        )
        super().__init__(self.message)


class RepositoryException(AdmissionError):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in the store."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class DuplicateEntityException(RepositoryException):
    """Duplicate entity violation."""

    def __init__(self, message: str = "Entity already exists"):
        self.message = message
        super().__init__(message)


class ConcurrentModificationError(RepositoryException):
    """Revision check failed: the record changed since it was loaded."""

    def __init__(self, entity_id: str, expected_revision: int, actual_revision: int):
        self.entity_id = entity_id
        self.expected_revision = expected_revision
        self.actual_revision = actual_revision
        super().__init__(
            f"Application {entity_id} was modified concurrently "
            f"(expected revision {expected_revision}, found {actual_revision})"
        )
