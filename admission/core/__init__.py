"""
Core Package - Admission Engine
admission/core/__init__.py

Core infrastructure: exceptions, logging. Providers live in
admission.core.dependencies and are imported from there directly.
"""

from admission.core.exceptions import (
    AdmissionError,
    ConcurrentModificationError,
    DuplicateEntityException,
    EntityNotFoundException,
    InputValidationError,
    RepositoryException,
    WorkflowError,
)

__all__ = [
    "AdmissionError",
    "ConcurrentModificationError",
    "DuplicateEntityException",
    "EntityNotFoundException",
    "InputValidationError",
    "RepositoryException",
    "WorkflowError",
]
