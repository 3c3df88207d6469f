"""
Repositories Package - Admission Engine
admission/repositories/__init__.py

In-process data access for Application records.
"""

from admission.repositories.base import BaseRepository
from admission.repositories.application_repository import InMemoryApplicationRepository

__all__ = [
    "BaseRepository",
    "InMemoryApplicationRepository",
]
