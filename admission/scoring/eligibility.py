"""
scoring/eligibility.py

Eligibility gate run on submission, before any scoring.

Checks (all evaluated, failures accumulated):
    1. a language score meets its threshold and a certificate for a passing
       test is on file
    2. a transcript is on file
    3. when achievement records are present, at least one achievement proof
       is on file
    4. a specialized-talent claim carries at least 3 professor recommendations
"""

import logging
from typing import List, Optional, Tuple

from admission.models.application import Application
from admission.models.enumerations import EligibilityFailureCode, LanguageTest, ProofKind
from admission.models.scoring import EligibilityFailure, EligibilityResult
from admission.scoring import rule_tables as rt
from admission.services.collaborators import ApplicationProofOracle, ProofOracle

logger = logging.getLogger(__name__)

CheckOutcome = Tuple[Optional[EligibilityFailure], Optional[str]]


class EligibilityValidator:
    """Pure eligibility check; never raises for an unmet condition."""

    def __init__(self, proof_oracle: Optional[ProofOracle] = None):
        self.proof_oracle = proof_oracle or ApplicationProofOracle()

    def validate(self, application: Application) -> EligibilityResult:
        outcomes = [
            self.check_language(application),
            self.check_transcript(application),
            self.check_achievement_proofs(application),
            self.check_special_talent(application),
        ]
        failures: List[EligibilityFailure] = [f for f, _ in outcomes if f is not None]
        satisfied: List[str] = [s for _, s in outcomes if s is not None]

        result = EligibilityResult(
            eligible=not failures,
            failures=failures,
            satisfied=satisfied,
        )
        logger.info(
            f"Eligibility for application {application.id}: eligible={result.eligible}, "
            f"failures={[f.code.value for f in failures]}"
        )
        return result

    def _has(self, application: Application, kind: ProofKind) -> bool:
        return self.proof_oracle.has_proof(application, kind)

    # ------------------------------------------------------------------
    # Individual checks. Each returns (failure, satisfied-description);
    # a check that does not apply returns (None, None).
    # ------------------------------------------------------------------

    def check_language(self, application: Application) -> CheckOutcome:
        scores = application.language_scores
        passing = [
            (test, getattr(scores, test.value))
            for test in LanguageTest
            if getattr(scores, test.value) is not None
            and rt.meets_language_threshold(test, getattr(scores, test.value))
        ]

        if not passing:
            return EligibilityFailure(
                code=EligibilityFailureCode.LANGUAGE_THRESHOLD_NOT_MET,
                message=(
                    "No language score meets its threshold "
                    "(CET4>=500, CET6>=425, TOEFL>=90, IELTS>=6.0)"
                ),
                details={
                    t.value: getattr(scores, t.value)
                    for t in LanguageTest
                    if getattr(scores, t.value) is not None
                },
            ), None

        proven = [
            (test, score) for test, score in passing
            if self._has(application, rt.LANGUAGE_PROOF_KINDS[test])
        ]
        if not proven:
            return EligibilityFailure(
                code=EligibilityFailureCode.LANGUAGE_PROOF_MISSING,
                message="No certificate uploaded for a passing language score",
                details={"passing_tests": [t.value for t, _ in passing]},
            ), None

        test, score = proven[0]
        return None, f"language requirement met ({test.value.upper()} {score:g})"

    def check_transcript(self, application: Application) -> CheckOutcome:
        if not self._has(application, ProofKind.TRANSCRIPT):
            return EligibilityFailure(
                code=EligibilityFailureCode.TRANSCRIPT_MISSING,
                message="Official transcript has not been uploaded",
            ), None
        return None, "transcript on file"

    def check_achievement_proofs(self, application: Application) -> CheckOutcome:
        if not application.achievements.has_records():
            return None, None
        if not any(self._has(application, kind) for kind in rt.ACHIEVEMENT_PROOF_KINDS):
            return EligibilityFailure(
                code=EligibilityFailureCode.ACHIEVEMENT_PROOF_MISSING,
                message="Academic achievements are listed but no supporting proof is on file",
            ), None
        return None, "achievement proofs on file"

    def check_special_talent(self, application: Application) -> CheckOutcome:
        talent = application.special_talent
        if not talent.is_applying:
            return None, None
        count = sum(1 for r in talent.recommendations if r.name.strip())
        if count < rt.MIN_PROFESSOR_RECOMMENDATIONS:
            return EligibilityFailure(
                code=EligibilityFailureCode.INSUFFICIENT_RECOMMENDATIONS,
                message=(
                    f"Specialized-talent track requires {rt.MIN_PROFESSOR_RECOMMENDATIONS} "
                    f"professor recommendations, found {count}"
                ),
                details={"required": rt.MIN_PROFESSOR_RECOMMENDATIONS, "found": count},
            ), None
        return None, f"specialized-talent recommendations on file ({count})"
