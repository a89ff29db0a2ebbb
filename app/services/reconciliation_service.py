"""
Application Reconciliation Job

PURPOSE:
Repair job applications whose job_id no longer points at their job
(e.g. the job was re-created and got a new id).

HOW IT WORKS:
1. A job that already has applications under its id is left alone
2. Otherwise applications whose job_title AND company equal the job's
   (case-insensitive, both present) are taken as belonging to it
3. Each such application whose job_id does not name another existing
   job is re-pointed, and an audit record is written to
   application_reconciliations

This runs as an explicit batch job (scripts/reconcile_applications.py),
never as a side effect of serving a request. dry_run reports what
would change without writing anything.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set

from pymongo.errors import DuplicateKeyError

from app.models.documents import Application, Job, ReconciliationRecord
from app.schemas.schemas import ReconciliationReport
from app.services.mongo_service import (
    ApplicationRepository,
    JobRepository,
    ReconciliationLogRepository,
    get_application_repository,
    get_job_repository,
    get_reconciliation_log_repository,
)

logger = logging.getLogger(__name__)


def _same(a: Optional[str], b: Optional[str]) -> bool:
    return a is not None and b is not None and a.lower() == b.lower()


def find_orphaned_applications(job: Job, applications: Iterable[Application]) -> List[Application]:
    """Applications that belong to `job` by title and company."""
    return [
        app for app in applications
        if _same(job.title, app.job_title) and _same(job.company, app.company)
    ]


class ApplicationReconciler:

    def __init__(self, jobs: JobRepository, applications: ApplicationRepository,
                 audit_log: ReconciliationLogRepository):
        self.jobs = jobs
        self.applications = applications
        self.audit_log = audit_log

    def reconcile_job(
        self,
        job: Job,
        dry_run: bool = False,
        all_applications: Optional[List[Application]] = None,
        known_job_ids: Optional[Set[str]] = None,
        reassigned: Optional[Dict[str, str]] = None
    ) -> ReconciliationReport:
        """
        Re-point the applications that belong to `job` but lost its id.

        `reassigned` maps application id to the job id it was (or, on a
        dry run, would be) moved to, so a batch never moves one twice.
        The report lists the same ids whether or not dry_run is set.
        """
        report = ReconciliationReport(
            job_id=job.id, job_title=job.title, company=job.company, dry_run=dry_run
        )

        if self.applications.find_by_job_id(job.id):
            return report

        if all_applications is None:
            all_applications = self.applications.find_all()
        if known_job_ids is None:
            known_job_ids = {j.id for j in self.jobs.find_all()}
        if reassigned is None:
            reassigned = {}

        matched = find_orphaned_applications(job, all_applications)
        report.matched_application_ids = [app.id for app in matched]
        if not matched:
            return report

        logger.info(f"Job {job.id}: {len(matched)} applications matched by title/company")

        for app in matched:
            current_job_id = reassigned.get(app.id, app.job_id)
            if current_job_id == job.id:
                continue
            if current_job_id in known_job_ids:
                # still points at a live job with the same title/company
                logger.info(f"Application {app.id} left on existing job {current_job_id}")
                continue

            if dry_run:
                logger.info(f"Application {app.id}: would move job_id {current_job_id} -> {job.id}")
            else:
                try:
                    self.applications.reassign_job_id(app.id, job.id)
                except DuplicateKeyError:
                    # applicant already has an application under job.id
                    logger.warning(f"Application {app.id} not moved: duplicate for job {job.id}")
                    continue
                self._record(app.id, current_job_id, job)

            report.updated_application_ids.append(app.id)
            reassigned[app.id] = job.id

        return report

    def _record(self, application_id: str, previous_job_id: Optional[str], job: Job) -> None:
        self.audit_log.insert(ReconciliationRecord(
            application_id=application_id,
            job_id=job.id,
            previous_job_id=previous_job_id,
            job_title=job.title,
            company=job.company
        ))
        logger.info(f"Application {application_id}: job_id {previous_job_id} -> {job.id}")

    def reconcile_all(self, dry_run: bool = False) -> List[ReconciliationReport]:
        """Run reconcile_job over every job, loading jobs and applications once."""
        jobs = self.jobs.find_all()
        known_job_ids = {job.id for job in jobs}
        all_applications = self.applications.find_all()
        reassigned: Dict[str, str] = {}

        reports = [
            self.reconcile_job(job, dry_run=dry_run, all_applications=all_applications,
                               known_job_ids=known_job_ids, reassigned=reassigned)
            for job in jobs
        ]
        repaired = sum(len(r.updated_application_ids) for r in reports)
        verb = "would be re-pointed" if dry_run else "re-pointed"
        logger.info(f"Reconciliation finished: {len(reports)} jobs checked, "
                    f"{repaired} applications {verb}")
        return reports


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_application_reconciler() -> ApplicationReconciler:
    return ApplicationReconciler(get_job_repository(), get_application_repository(),
                                 get_reconciliation_log_repository())
