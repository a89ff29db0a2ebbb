"""
Tests for job postings, applications and recommendations.
"""

import pytest

from app.core.exceptions import (
    AlreadyAppliedError,
    ApplicationNotFoundError,
    JobNotFoundError,
    PermissionDeniedError,
)
from app.models.documents import Job, User, UserProfile
from app.schemas.schemas import JobCreate, JobUpdate


@pytest.fixture
def other_industry_user():
    return User(id="ind2", email="hr@globex.com", user_type="INDUSTRY")


@pytest.fixture
def posted_job(job_service, industry_user):
    return job_service.create_job(
        JobCreate(title="Data Analyst", company="Acme", location="Pune",
                  skills=["sql", "python"], years_of_experience=2),
        industry_user
    )


class TestJobPostings:

    def test_create_sets_owner(self, posted_job, industry_user):
        assert posted_job.id
        assert posted_job.industry_id == industry_user.id
        assert posted_job.posted_by == industry_user.email

    def test_get_missing_job(self, job_service):
        with pytest.raises(JobNotFoundError):
            job_service.get_job("nope")

    def test_update_only_sent_fields(self, job_service, posted_job, industry_user):
        updated = job_service.update_job(posted_job.id, JobUpdate(location="Remote"), industry_user)
        assert updated.location == "Remote"
        assert updated.title == "Data Analyst"

    def test_only_owner_can_change(self, job_service, posted_job, other_industry_user):
        with pytest.raises(PermissionDeniedError):
            job_service.update_job(posted_job.id, JobUpdate(title="x"), other_industry_user)
        with pytest.raises(PermissionDeniedError):
            job_service.delete_job(posted_job.id, other_industry_user)

    def test_delete(self, job_service, posted_job, industry_user):
        job_service.delete_job(posted_job.id, industry_user)
        with pytest.raises(JobNotFoundError):
            job_service.get_job(posted_job.id)

    def test_list_active_only(self, job_service, repos, posted_job):
        repos["jobs"].insert(Job(title="Closed", active=False))
        assert len(job_service.list_jobs()) == 2
        assert [j.id for j in job_service.list_jobs(active_only=True)] == [posted_job.id]


class TestApplications:

    def test_apply_copies_job_details(self, job_service, posted_job, applicant_user):
        application = job_service.apply(posted_job.id, applicant_user)

        assert application.job_id == posted_job.id
        assert application.job_title == "Data Analyst"
        assert application.company == "Acme"
        assert application.status == "pending"

    def test_cannot_apply_twice(self, job_service, posted_job, applicant_user):
        job_service.apply(posted_job.id, applicant_user)
        with pytest.raises(AlreadyAppliedError):
            job_service.apply(posted_job.id, applicant_user)

    def test_apply_to_missing_job(self, job_service, applicant_user):
        with pytest.raises(JobNotFoundError):
            job_service.apply("nope", applicant_user)

    def test_owner_sees_applications(self, job_service, posted_job, applicant_user,
                                     industry_user, other_industry_user):
        job_service.apply(posted_job.id, applicant_user)

        assert len(job_service.list_applications_for_job(posted_job.id, industry_user)) == 1
        with pytest.raises(PermissionDeniedError):
            job_service.list_applications_for_job(posted_job.id, other_industry_user)

    def test_update_status(self, job_service, posted_job, applicant_user,
                           industry_user, other_industry_user):
        application = job_service.apply(posted_job.id, applicant_user)

        updated = job_service.update_application_status(application.id, "interview", industry_user)
        assert updated.status == "interview"

        with pytest.raises(PermissionDeniedError):
            job_service.update_application_status(application.id, "offer", other_industry_user)

    def test_update_status_missing_application(self, job_service, industry_user):
        with pytest.raises(ApplicationNotFoundError):
            job_service.update_application_status("nope", "offer", industry_user)


class TestRecommendations:

    def test_ranked_for_profile(self, job_service, repos, posted_job):
        repos["jobs"].insert(Job(id="j-rust", title="Rust Dev", skills=["rust"],
                                 location="Chennai", years_of_experience=25))
        profile = UserProfile(skills=["Python", "SQL"], preferred_locations=["pune"],
                              experience="3 years")

        results = job_service.get_recommended_jobs(profile)

        assert [r.job.id for r in results] == [posted_job.id]
        assert results[0].match_percentage == pytest.approx(100.0)
