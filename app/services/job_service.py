"""
Job Service - job postings, applications and recommendations.

Ownership rule: an industry user may only change jobs (and the
applications to them) whose industry_id is their own user id.
"""

import logging
from typing import List, Optional

from pymongo.errors import DuplicateKeyError

from app.core.exceptions import (
    AlreadyAppliedError,
    ApplicationNotFoundError,
    JobNotFoundError,
    PermissionDeniedError,
)
from app.models.documents import Application, Job, User, UserProfile
from app.schemas.schemas import JobCreate, JobUpdate, MatchResult
from app.services.matching_service import JobMatcher, candidate_from_profile
from app.services.mongo_service import (
    ApplicationRepository,
    JobRepository,
    get_application_repository,
    get_job_repository,
)

logger = logging.getLogger(__name__)


class JobService:

    def __init__(self, jobs: JobRepository, applications: ApplicationRepository,
                 matcher: Optional[JobMatcher] = None):
        self.jobs = jobs
        self.applications = applications
        self.matcher = matcher or JobMatcher()

    # --------------------------------------------------------
    # Job postings
    # --------------------------------------------------------

    def list_jobs(self, active_only: bool = False) -> List[Job]:
        return self.jobs.find_all(active_only=active_only)

    def get_job(self, job_id: str) -> Job:
        job = self.jobs.find_by_id(job_id)
        if job is None:
            raise JobNotFoundError(f"Job not found with id: {job_id}")
        return job

    def _get_owned_job(self, job_id: str, user: User) -> Job:
        job = self.get_job(job_id)
        if job.industry_id != user.id:
            raise PermissionDeniedError("You can only manage your own jobs")
        return job

    def create_job(self, data: JobCreate, user: User) -> Job:
        job = Job(**data.model_dump(), industry_id=user.id, posted_by=user.email)
        saved = self.jobs.insert(job)
        logger.info(f"Job {saved.id} '{saved.title}' posted by {user.email}")
        return saved

    def update_job(self, job_id: str, data: JobUpdate, user: User) -> Job:
        job = self._get_owned_job(job_id, user)
        fields = data.model_dump(exclude_unset=True)
        if not fields:
            return job
        return self.jobs.update(job_id, fields)

    def delete_job(self, job_id: str, user: User) -> None:
        self._get_owned_job(job_id, user)
        self.jobs.delete(job_id)
        logger.info(f"Job {job_id} deleted by {user.email}")

    # --------------------------------------------------------
    # Recommendations
    # --------------------------------------------------------

    def get_recommended_jobs(self, profile: UserProfile) -> List[MatchResult]:
        """All jobs scored against the profile, best first, zero scores dropped."""
        candidate = candidate_from_profile(profile)
        return self.matcher.match(candidate, self.jobs.find_all())

    # --------------------------------------------------------
    # Applications
    # --------------------------------------------------------

    def apply(self, job_id: str, user: User) -> Application:
        job = self.get_job(job_id)
        if self.applications.exists_for(job_id, user.email):
            raise AlreadyAppliedError("You have already applied to this job")

        try:
            saved = self.applications.insert(Application(
                job_id=job_id,
                applicant_email=user.email,
                applicant_id=user.id,
                job_title=job.title,
                company=job.company,
                location=job.location,
                job_description=job.description
            ))
        except DuplicateKeyError:
            raise AlreadyAppliedError("You have already applied to this job")
        logger.info(f"Application {saved.id}: {user.email} -> job {job_id}")
        return saved

    def list_applications_for_applicant(self, user: User) -> List[Application]:
        return self.applications.find_by_applicant_email(user.email)

    def list_applications_for_job(self, job_id: str, user: User) -> List[Application]:
        """
        Applications recorded under this job id.

        Applications with a stale job id are not looked up here; they are
        repaired by the reconciliation job (reconciliation_service).
        """
        self._get_owned_job(job_id, user)
        return self.applications.find_by_job_id(job_id)

    def update_application_status(self, application_id: str, status: str,
                                  user: User) -> Application:
        application = self.applications.find_by_id(application_id)
        if application is None:
            raise ApplicationNotFoundError(f"Application not found: {application_id}")
        if not application.job_id:
            raise PermissionDeniedError("Application is not linked to a job")
        self._get_owned_job(application.job_id, user)

        updated = self.applications.update_status(application_id, status)
        logger.info(f"Application {application_id} -> {status} by {user.email}")
        return updated


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_job_service() -> JobService:
    """Get job service wired to MongoDB."""
    return JobService(get_job_repository(), get_application_repository())
