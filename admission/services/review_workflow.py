"""
services/review_workflow.py

Two-stage review state machine.

    pending → system_reviewing → system_approved ─┬→ admin_reviewing ─┬→ approved
                               └→ system_rejected  └──────────────────┴→ rejected

Every transition works on a copy of the application and returns it; the
caller's object is never mutated, so a failed attempt leaves no trace.
Applied transitions append a ReviewEvent and bump ``revision``. Re-applying
an action whose target is the current terminal status is a no-op that
returns the application unchanged.
"""

import logging
from decimal import Decimal
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional, Tuple

import structlog

from admission.core.exceptions import WorkflowError
from admission.models.application import (
    Application,
    CalculatedScores,
    ReviewEvent,
    SpecialTalent,
)
from admission.models.enumerations import ApplicationStatus, ReviewAction
from admission.scoring.academic_base import AcademicBaseCalculator
from admission.scoring.achievement_scorer import AchievementScorer
from admission.scoring.composite_calculator import CompositeCalculator
from admission.scoring.eligibility import EligibilityValidator
from admission.scoring.performance_scorer import PerformanceScorer
from admission.services.collaborators import Clock, IdFactory, new_id, utc_now

logger = structlog.get_logger(__name__)
std_logger = logging.getLogger(__name__)

S = ApplicationStatus
A = ReviewAction

AcademicBaseProvider = Callable[[Application], Decimal]

_ACTIVE = frozenset({S.PENDING, S.SYSTEM_REVIEWING, S.SYSTEM_APPROVED, S.ADMIN_REVIEWING})

# (current status, action) → statuses the action may lead to
TRANSITIONS: Dict[Tuple[ApplicationStatus, ReviewAction], FrozenSet[ApplicationStatus]] = {
    (S.PENDING, A.SUBMIT): frozenset({S.SYSTEM_REVIEWING}),
    (S.SYSTEM_REVIEWING, A.SYSTEM_DECIDE): frozenset({S.SYSTEM_APPROVED, S.SYSTEM_REJECTED}),
    (S.SYSTEM_APPROVED, A.START_ADMIN_REVIEW): frozenset({S.ADMIN_REVIEWING}),
    (S.SYSTEM_APPROVED, A.ADMIN_APPROVE): frozenset({S.APPROVED}),
    (S.ADMIN_REVIEWING, A.ADMIN_APPROVE): frozenset({S.APPROVED}),
    (S.SYSTEM_APPROVED, A.ADMIN_REJECT): frozenset({S.REJECTED}),
    (S.ADMIN_REVIEWING, A.ADMIN_REJECT): frozenset({S.REJECTED}),
    **{(s, A.SPECIAL_TALENT_DEFENSE): frozenset({s}) for s in _ACTIVE},
    **{(s, A.ANNOTATE): frozenset({s}) for s in S},
}

# (terminal status, action) pairs that are accepted as no-ops
IDEMPOTENT: FrozenSet[Tuple[ApplicationStatus, ReviewAction]] = frozenset({
    (S.APPROVED, A.ADMIN_APPROVE),
    (S.REJECTED, A.ADMIN_REJECT),
    (S.SYSTEM_REJECTED, A.SYSTEM_DECIDE),
})


def allowed_actions(status: ApplicationStatus) -> FrozenSet[ReviewAction]:
    """Actions that change or annotate an application in the given status."""
    return frozenset(action for (s, action) in TRANSITIONS if s == status)


def _clean(comment: Optional[str]) -> Optional[str]:
    if comment is None:
        return None
    comment = comment.strip()
    return comment or None


class ReviewWorkflow:
    """Drives an Application through submission, system and admin review."""

    def __init__(
        self,
        validator: Optional[EligibilityValidator] = None,
        achievement_scorer: Optional[AchievementScorer] = None,
        performance_scorer: Optional[PerformanceScorer] = None,
        composite_calculator: Optional[CompositeCalculator] = None,
        academic_base_provider: Optional[AcademicBaseProvider] = None,
        clock: Clock = utc_now,
        id_factory: IdFactory = new_id,
    ):
        self.validator = validator or EligibilityValidator()
        self.achievement_scorer = achievement_scorer or AchievementScorer()
        self.performance_scorer = performance_scorer or PerformanceScorer()
        self.composite_calculator = composite_calculator or CompositeCalculator()
        self.academic_base_provider = academic_base_provider or AcademicBaseCalculator()
        self.clock = clock
        self.id_factory = id_factory

        self._handlers = {
            A.SUBMIT: self._submit,
            A.SYSTEM_DECIDE: self._system_decide,
            A.START_ADMIN_REVIEW: self._start_admin_review,
            A.ADMIN_APPROVE: self._admin_approve,
            A.ADMIN_REJECT: self._admin_reject,
            A.SPECIAL_TALENT_DEFENSE: self._special_talent_defense,
            A.ANNOTATE: self._annotate,
        }

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def transition(
        self,
        application: Application,
        action: ReviewAction,
        payload: Optional[Mapping[str, Any]] = None,
    ) -> Application:
        """
        Apply ``action`` to ``application``.

        Args:
            application: Current application; left untouched.
            action: ReviewAction (or its string value).
            payload: Optional ``comment``, ``actor``, ``passed``, ``score``,
                     ``academic_base``.

        Returns:
            The updated application, or the same object for an idempotent no-op.

        Raises:
            WorkflowError: the action is not allowed from the current status,
                           or a mandatory comment is missing.
        """
        try:
            action = ReviewAction(action)
        except ValueError:
            raise WorkflowError(application.status, action, f"Unknown review action {action!r}") from None
        payload = dict(payload or {})
        current = application.status

        # Checked before the status so it fails the same way in every state
        if action in (A.ADMIN_REJECT, A.ANNOTATE) and _clean(payload.get("comment")) is None:
            raise WorkflowError(
                current, action, f"A non-empty comment is required for '{action.value}'"
            )

        if (current, action) in IDEMPOTENT:
            logger.info(
                "transition_noop",
                application_id=str(application.id),
                action=action.value,
                status=current.value,
            )
            return application

        targets = TRANSITIONS.get((current, action))
        if targets is None:
            raise WorkflowError(current, action)

        draft = application.model_copy(deep=True)
        self._handlers[action](draft, payload)

        if draft.status not in targets:
            raise WorkflowError(
                current, action,
                f"Action '{action.value}' produced unexpected status '{draft.status.value}'",
            )

        draft.history.append(
            ReviewEvent(
                id=self.id_factory(),
                action=action,
                from_status=current,
                to_status=draft.status,
                at=self.clock(),
                actor=payload.get("actor"),
                comment=_clean(payload.get("comment")) or self._event_comment(action, draft),
            )
        )
        draft.revision = application.revision + 1

        logger.info(
            "transition_applied",
            application_id=str(draft.id),
            action=action.value,
            from_status=current.value,
            to_status=draft.status.value,
            revision=draft.revision,
        )
        return draft

    @staticmethod
    def _event_comment(action: ReviewAction, draft: Application) -> Optional[str]:
        if action == A.SYSTEM_DECIDE:
            return draft.system_review_comment
        return None

    # ------------------------------------------------------------------
    # Convenience wrappers
    # ------------------------------------------------------------------

    def submit(self, application: Application, actor: Optional[str] = None) -> Application:
        return self.transition(application, A.SUBMIT, {"actor": actor})

    def system_decide(
        self,
        application: Application,
        academic_base: Optional[Any] = None,
    ) -> Application:
        return self.transition(
            application, A.SYSTEM_DECIDE, {"academic_base": academic_base, "actor": "system"}
        )

    def start_admin_review(self, application: Application, actor: Optional[str] = None) -> Application:
        return self.transition(application, A.START_ADMIN_REVIEW, {"actor": actor})

    def admin_approve(
        self,
        application: Application,
        comment: Optional[str] = None,
        actor: Optional[str] = None,
    ) -> Application:
        return self.transition(application, A.ADMIN_APPROVE, {"comment": comment, "actor": actor})

    def admin_reject(
        self,
        application: Application,
        comment: Optional[str],
        actor: Optional[str] = None,
    ) -> Application:
        return self.transition(application, A.ADMIN_REJECT, {"comment": comment, "actor": actor})

    def special_talent_defense(
        self,
        application: Application,
        passed: bool,
        score: Optional[float] = None,
        actor: Optional[str] = None,
    ) -> Application:
        return self.transition(
            application,
            A.SPECIAL_TALENT_DEFENSE,
            {"passed": passed, "score": score, "actor": actor},
        )

    def annotate(self, application: Application, comment: str, actor: Optional[str] = None) -> Application:
        return self.transition(application, A.ANNOTATE, {"comment": comment, "actor": actor})

    # ------------------------------------------------------------------
    # Handlers. Each mutates the draft copy only.
    # ------------------------------------------------------------------

    def _submit(self, app: Application, payload: Dict[str, Any]) -> None:
        app.eligibility = self.validator.validate(app)
        app.status = S.SYSTEM_REVIEWING
        app.submitted_at = self.clock()

    def _system_decide(self, app: Application, payload: Dict[str, Any]) -> None:
        if app.eligibility is None:
            raise WorkflowError(app.status, A.SYSTEM_DECIDE, "Eligibility has not been evaluated")

        now = self.clock()
        app.system_reviewed_at = now

        if not app.eligibility.eligible:
            reasons = "; ".join(f.message for f in app.eligibility.failures)
            app.status = S.SYSTEM_REJECTED
            app.system_review_comment = f"System review failed: {reasons}"
            return

        scores = self._score(app, payload.get("academic_base"))
        app.calculated_scores = scores
        app.status = S.SYSTEM_APPROVED

        conditions = ", ".join(app.eligibility.satisfied)
        app.system_review_comment = (
            f"System review passed: {conditions}. "
            f"Academic base {scores.academic_base}, achievement {scores.achievement_score}, "
            f"performance {scores.performance_score}, total {scores.total_score}"
        )

    def _start_admin_review(self, app: Application, payload: Dict[str, Any]) -> None:
        app.status = S.ADMIN_REVIEWING

    def _admin_approve(self, app: Application, payload: Dict[str, Any]) -> None:
        app.status = S.APPROVED
        app.admin_reviewed_at = self.clock()
        app.admin_review_comment = _clean(payload.get("comment"))

    def _admin_reject(self, app: Application, payload: Dict[str, Any]) -> None:
        app.status = S.REJECTED
        app.admin_reviewed_at = self.clock()
        app.admin_review_comment = _clean(payload.get("comment"))

    def _special_talent_defense(self, app: Application, payload: Dict[str, Any]) -> None:
        if not app.special_talent.is_applying:
            raise WorkflowError(
                app.status,
                A.SPECIAL_TALENT_DEFENSE,
                "Application does not claim the specialized-talent track",
            )
        if "passed" not in payload or payload["passed"] is None:
            raise WorkflowError(app.status, A.SPECIAL_TALENT_DEFENSE, "Defense outcome 'passed' is required")

        update: Dict[str, Any] = {"defense_passed": bool(payload["passed"])}
        if payload.get("score") is not None:
            update["defense_score"] = payload["score"]
        app.special_talent = SpecialTalent.model_validate(
            {**app.special_talent.model_dump(), **update}
        )

        if app.calculated_scores.total_score is not None:
            app.calculated_scores = self._score(app, app.calculated_scores.academic_base)

    def _annotate(self, app: Application, payload: Dict[str, Any]) -> None:
        # Status unchanged; the comment lands in the appended ReviewEvent
        pass

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def _score(self, app: Application, academic_base: Optional[Any]) -> CalculatedScores:
        if academic_base is None:
            academic_base = self.academic_base_provider(app)

        achievement = self.achievement_scorer.calculate(
            app.achievements,
            defense_passed=bool(app.special_talent.is_applying and app.special_talent.defense_passed),
        )
        performance = self.performance_scorer.calculate(app.performance)
        composite = self.composite_calculator.calculate(
            academic_base, achievement.total, performance.total
        )

        std_logger.info(
            f"Scored application {app.id}: base={composite.academic_base}, "
            f"achievement={achievement.total}, performance={performance.total}, "
            f"total={composite.total}"
        )

        return CalculatedScores(
            academic_base=composite.academic_base,
            achievement_score=achievement.total,
            performance_score=performance.total,
            total_score=composite.total,
        )


_default_workflow: Optional[ReviewWorkflow] = None


def transition(
    application: Application,
    action: ReviewAction,
    payload: Optional[Mapping[str, Any]] = None,
) -> Application:
    """Apply an action with a default-configured ReviewWorkflow."""
    global _default_workflow
    if _default_workflow is None:
        _default_workflow = ReviewWorkflow()
    return _default_workflow.transition(application, action, payload)
