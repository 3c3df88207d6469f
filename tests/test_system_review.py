# tests/test_system_review.py

"""
System Review Runner Tests - settle delay, batch size, per-application errors
"""

import pytest

from admission.models.enumerations import ApplicationStatus
from admission.services.application_service import ApplicationService
from admission.services.system_review import SystemReviewRunner

S = ApplicationStatus


@pytest.fixture
def runner(service, test_settings):
    return SystemReviewRunner(service, settings=test_settings)


def submit_all(service, factory, student_ids, **overrides):
    ids = []
    for student_id in student_ids:
        app = service.create(factory(student_id=student_id, **overrides))
        service.submit(app.id)
        ids.append(app.id)
    return ids


class TestSettleDelay:
    """Recently submitted applications wait for the next pass."""

    def test_recent_submissions_skipped(self, service, runner, clock, application_factory):
        ids = submit_all(service, application_factory, ["s1", "s2"])
        clock.advance(30)
        report = runner.run_once()
        assert report.processed == []
        assert report.skipped == ids
        assert all(service.get(i).status == S.SYSTEM_REVIEWING for i in ids)

    def test_settled_submissions_decided(self, service, runner, clock, application_factory):
        ids = submit_all(service, application_factory, ["s1", "s2"])
        clock.advance(60)
        report = runner.run_once()
        assert report.processed == ids
        assert all(service.get(i).status == S.SYSTEM_APPROVED for i in ids)

    def test_ineligible_rejected(self, service, runner, clock, application_factory):
        [app_id] = submit_all(service, application_factory, ["s1"], proofs={})
        clock.advance(120)
        report = runner.run_once()
        assert report.processed == [app_id]
        assert service.get(app_id).status == S.SYSTEM_REJECTED

    def test_second_pass_has_nothing_to_do(self, service, runner, clock, application_factory):
        submit_all(service, application_factory, ["s1"])
        clock.advance(60)
        runner.run_once()
        report = runner.run_once()
        assert report.processed == report.skipped == report.failed == []


class TestBatchSize:
    def test_batch_limit(self, repository, workflow, clock, application_factory):
        from admission.config import Settings

        settings = Settings(SYSTEM_REVIEW_BATCH_SIZE=2, SYSTEM_REVIEW_SETTLE_SECONDS=0)
        service = ApplicationService(repository, workflow=workflow, settings=settings)
        ids = []
        for student_id in ["s1", "s2", "s3"]:
            app = service.create(application_factory(student_id=student_id))
            service.submit(app.id)
            ids.append(app.id)
            clock.advance(1)

        report = SystemReviewRunner(service, settings=settings).run_once()
        assert report.processed == ids[:2]
        assert report.skipped == ids[2:]


class TestFailures:
    """A failing application is recorded and the pass continues."""

    def test_failure_does_not_stop_pass(self, service, runner, clock, application_factory):
        # system_reviewing without an eligibility result cannot be decided
        broken = service.create(application_factory(student_id="broken", status=S.SYSTEM_REVIEWING))
        [good] = submit_all(service, application_factory, ["good"])
        clock.advance(60)

        report = runner.run_once()
        assert report.failed == [broken.id]
        assert report.processed == [good]
        assert service.get(broken.id).status == S.SYSTEM_REVIEWING
