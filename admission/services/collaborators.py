"""
External collaborators consumed by the engine: document-presence oracle,
clock and id source.
"""

from datetime import datetime, timezone
from typing import Callable, Dict, Optional, Protocol, Tuple
from uuid import UUID, uuid4

from admission.models.application import Application
from admission.models.enumerations import ProofKind

Clock = Callable[[], datetime]
IdFactory = Callable[[], UUID]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> UUID:
    return uuid4()


class ProofOracle(Protocol):
    """Answers whether a proof document of a given kind is on file."""

    def has_proof(self, application: Application, proof_kind: ProofKind) -> bool:
        ...


class ApplicationProofOracle:
    """Reads the presence flags carried on the application itself."""

    def has_proof(self, application: Application, proof_kind: ProofKind) -> bool:
        return bool(application.proofs.get(proof_kind, False))


class DocumentStoreProofOracle:
    """
    Adapts a document store lookup ``(application_id, proof_kind) -> bool``.

    Answers are memoized per (application, kind) so one validation pass
    sees a consistent view of the store.
    """

    def __init__(self, lookup: Callable[[UUID, ProofKind], bool]):
        self._lookup = lookup
        self._cache: Dict[Tuple[UUID, ProofKind], bool] = {}

    def has_proof(self, application: Application, proof_kind: ProofKind) -> bool:
        key = (application.id, proof_kind)
        if key not in self._cache:
            self._cache[key] = bool(self._lookup(application.id, proof_kind))
        return self._cache[key]

    def clear(self, application_id: Optional[UUID] = None) -> None:
        if application_id is None:
            self._cache.clear()
            return
        for key in [k for k in self._cache if k[0] == application_id]:
            del self._cache[key]
