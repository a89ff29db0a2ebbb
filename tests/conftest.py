"""
Pytest configuration and fixtures.

Repositories are replaced by in-memory fakes with the same method
names, so services and routes run without a MongoDB server.
"""

from itertools import count
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from app.models.documents import User, UserProfile
from app.services.activity_service import ActivityLogger
from app.services.job_service import JobService
from app.services.student_database_service import StudentDatabaseService

_ids = count(1)


class FakeRepository:
    """Dict-backed stand-in for MongoRepository."""

    def __init__(self, items: Optional[List] = None):
        self.items: Dict[str, object] = {}
        for item in items or []:
            self.insert(item)

    def insert(self, item):
        saved = item.model_copy(update={"id": item.id or f"id{next(_ids)}"})
        self.items[saved.id] = saved
        return saved

    def find_by_id(self, doc_id):
        return self.items.get(doc_id)

    def find_all(self):
        return list(self.items.values())


class FakeUserRepository(FakeRepository):

    def find_by_email(self, email):
        return next((u for u in self.items.values() if u.email == email), None)

    def find_emails_by_type(self, user_type):
        return {u.email for u in self.items.values() if u.user_type == user_type}

    def update_subscription(self, email, subscription_type):
        user = self.find_by_email(email)
        if user is None:
            return False
        self.items[user.id] = user.model_copy(update={"subscription_type": subscription_type})
        return True


class FakeProfileRepository(FakeRepository):

    def find_by_applicant_email(self, email):
        return next((p for p in self.items.values() if p.applicant_email == email), None)

    def upsert_by_applicant_email(self, email, data):
        existing = self.find_by_applicant_email(email)
        if existing is None:
            return self.insert(UserProfile.model_validate({**data, "applicant_email": email}))
        merged = UserProfile.model_validate(
            {**existing.model_dump(), **data, "applicant_email": email})
        self.items[existing.id] = merged
        return merged


class FakeJobRepository(FakeRepository):

    def find_all(self, active_only=False):
        jobs = list(self.items.values())
        return [j for j in jobs if j.active] if active_only else jobs

    def update(self, job_id, fields):
        job = self.items.get(job_id)
        if job is None:
            return None
        self.items[job_id] = job.model_copy(update=fields)
        return self.items[job_id]

    def delete(self, job_id):
        return self.items.pop(job_id, None) is not None


class FakeApplicationRepository(FakeRepository):

    def find_by_job_id(self, job_id):
        return [a for a in self.items.values() if a.job_id == job_id]

    def find_by_applicant_email(self, email):
        return [a for a in self.items.values() if a.applicant_email == email]

    def count_by_applicant_email(self, email):
        return len(self.find_by_applicant_email(email))

    def exists_for(self, job_id, applicant_email):
        return any(a.job_id == job_id and a.applicant_email == applicant_email
                   for a in self.items.values())

    def update_status(self, application_id, status):
        app = self.items.get(application_id)
        if app is None:
            return None
        self.items[application_id] = app.model_copy(update={"status": status})
        return self.items[application_id]

    def reassign_job_id(self, application_id, job_id):
        app = self.items[application_id]
        self.items[application_id] = app.model_copy(update={"job_id": job_id})
        return True


class FakeHackathonApplicationRepository(FakeRepository):

    def __init__(self, counts: Optional[Dict[str, int]] = None):
        super().__init__()
        self.counts = counts or {}

    def count_by_applicant_id(self, applicant_id):
        return self.counts.get(applicant_id, 0)


class FakeShortlistRepository(FakeRepository):

    def find_by_industry_email(self, industry_email):
        return [s for s in self.items.values() if s.industry_email == industry_email]

    def exists(self, industry_email, student_email):
        return any(s.industry_email == industry_email and s.student_email == student_email
                   for s in self.items.values())

    def delete(self, industry_email, student_email):
        for key, s in list(self.items.items()):
            if s.industry_email == industry_email and s.student_email == student_email:
                del self.items[key]
                return True
        return False


class FailingRepository(FakeRepository):
    """Every write raises, as a down database would."""

    def insert(self, item):
        raise RuntimeError("database unavailable")


# ============================================================
# FIXTURES
# ============================================================

@pytest.fixture
def industry_user():
    return User(id="ind1", name="Acme", email="hr@acme.com", user_type="INDUSTRY")


@pytest.fixture
def applicant_user():
    return User(id="app1", name="Asha", email="asha@example.com", user_type="APPLICANT")


@pytest.fixture
def repos(industry_user, applicant_user):
    return {
        "users": FakeUserRepository([industry_user, applicant_user]),
        "profiles": FakeProfileRepository(),
        "jobs": FakeJobRepository(),
        "applications": FakeApplicationRepository(),
        "hackathons": FakeHackathonApplicationRepository(),
        "shortlists": FakeShortlistRepository(),
        "activity": FakeRepository(),
    }


@pytest.fixture
def job_service(repos):
    return JobService(repos["jobs"], repos["applications"])


@pytest.fixture
def student_service(repos):
    return StudentDatabaseService(
        profiles=repos["profiles"],
        users=repos["users"],
        hackathon_applications=repos["hackathons"],
        applications=repos["applications"],
        shortlists=repos["shortlists"],
        activity=ActivityLogger(repos["activity"])
    )


@pytest.fixture
def client(repos, job_service, student_service):
    """TestClient with every repository dependency swapped for a fake.

    Not entered as a context manager, so the Mongo startup hook never runs.
    """
    from app.main import app
    from app.services.job_service import get_job_service
    from app.services.mongo_service import get_profile_repository, get_user_repository
    from app.services.student_database_service import get_student_database_service

    app.dependency_overrides[get_user_repository] = lambda: repos["users"]
    app.dependency_overrides[get_profile_repository] = lambda: repos["profiles"]
    app.dependency_overrides[get_job_service] = lambda: job_service
    app.dependency_overrides[get_student_database_service] = lambda: student_service
    yield TestClient(app)
    app.dependency_overrides.clear()
