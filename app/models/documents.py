"""
Document models - one pydantic model per MongoDB collection.

Documents are stored with snake_case keys. The Mongo `_id` is exposed
as a string `id` (see mongo_service.serialize_doc).
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


def _now() -> datetime:
    return datetime.utcnow()


class Document(BaseModel):
    """Base for stored documents. Unknown keys in old records are ignored."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, use_enum_values=True)

    id: Optional[str] = None

    def to_mongo(self) -> dict:
        """Dump for insert/update; the id never goes back into the body."""
        return self.model_dump(exclude={"id"})


# ============================================================
# ENUMS
# ============================================================

class UserType(str, Enum):
    applicant = "APPLICANT"
    industry = "INDUSTRY"


class SubscriptionType(str, Enum):
    free = "FREE"
    paid = "PAID"


class ApplicationStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"
    interview = "interview"
    offer = "offer"


class ActivityType(str, Enum):
    profile_viewed = "PROFILE_VIEWED"
    resume_viewed = "RESUME_VIEWED"
    resume_downloaded = "RESUME_DOWNLOADED"
    candidate_shortlisted = "CANDIDATE_SHORTLISTED"


# ============================================================
# USERS
# ============================================================

class User(Document):
    name: Optional[str] = None
    email: str
    picture_url: Optional[str] = None
    password: Optional[str] = None  # bcrypt hash, None for OAuth users
    user_type: Optional[UserType] = None
    subscription_type: Optional[SubscriptionType] = None

    @property
    def effective_subscription(self) -> str:
        return self.subscription_type or SubscriptionType.free.value


# ============================================================
# PROFILES
# ============================================================

class EducationEntry(BaseModel):
    level: Optional[str] = None  # "Class 12th", "Graduation", "Post Graduation"
    degree: Optional[str] = None
    institution: Optional[str] = None
    board: Optional[str] = None
    passing_year: Optional[str] = None
    percentage: Optional[str] = None
    stream: Optional[str] = None


class ProfessionalExperience(BaseModel):
    job_title: Optional[str] = None
    company: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    is_current_job: Optional[bool] = None
    description: Optional[str] = None


class Project(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    github_link: Optional[str] = None
    website_link: Optional[str] = None


class UserProfile(Document):
    applicant_email: Optional[str] = None
    applicant_id: Optional[str] = None
    full_name: Optional[str] = None
    phone_number: Optional[str] = None
    email: Optional[str] = None
    gender: Optional[str] = None

    profile_picture_file_name: Optional[str] = None
    profile_picture_file_type: Optional[str] = None
    profile_picture_base64: Optional[str] = None
    profile_picture_file_size: Optional[int] = None

    resume_file_name: Optional[str] = None
    resume_file_type: Optional[str] = None
    resume_base64: Optional[str] = None
    resume_file_size: Optional[int] = None

    experience: Optional[str] = None  # free text, e.g. "5+ years"
    professional_experiences: Optional[List[ProfessionalExperience]] = None
    skills: Optional[List[str]] = None
    summary: Optional[str] = None

    current_location: Optional[str] = None
    preferred_locations: Optional[List[str]] = None
    preferred_location: Optional[str] = None  # legacy single value
    work_preference: Optional[str] = None

    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    github_url: Optional[str] = None

    availability: Optional[str] = None
    education_entries: Optional[List[EducationEntry]] = None
    hobbies: Optional[List[str]] = None
    projects: Optional[List[Project]] = None

    created_at: Optional[datetime] = Field(default_factory=_now)
    last_updated: Optional[datetime] = Field(default_factory=_now)


# ============================================================
# JOBS & APPLICATIONS
# ============================================================

class Job(Document):
    title: Optional[str] = None
    description: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    posted_by: Optional[str] = None
    industry_id: Optional[str] = None
    industry: Optional[str] = None
    skills: Optional[List[str]] = None
    employment_type: Optional[str] = None
    job_min_salary: Optional[int] = None
    job_max_salary: Optional[int] = None
    job_salary_currency: Optional[str] = None
    years_of_experience: Optional[int] = None  # None or 0 = no requirement
    created_at: Optional[datetime] = Field(default_factory=_now)
    active: bool = True


class Application(Document):
    job_id: Optional[str] = None
    applicant_email: Optional[str] = None
    applicant_id: Optional[str] = None
    job_title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    job_description: Optional[str] = None
    status: ApplicationStatus = Field(ApplicationStatus.pending, validate_default=True)
    applied_at: Optional[datetime] = Field(default_factory=_now)
    last_updated: Optional[datetime] = Field(default_factory=_now)


class HackathonApplication(Document):
    hackathon_id: Optional[str] = None
    applicant_id: Optional[str] = None
    as_team: bool = False
    team_name: Optional[str] = None
    team_size: int = 1
    applied_at: Optional[datetime] = None
    status: Optional[str] = None  # ACTIVE, REJECTED, COMPLETED


# ============================================================
# INDUSTRY-SIDE RECORDS
# ============================================================

class IndustryShortlist(Document):
    industry_email: str
    industry_id: Optional[str] = None
    student_email: str
    student_id: Optional[str] = None
    shortlisted_at: Optional[datetime] = Field(default_factory=_now)
    notes: Optional[str] = None


class ActivityLog(Document):
    industry_email: Optional[str] = None
    industry_id: Optional[str] = None
    student_email: Optional[str] = None
    student_id: Optional[str] = None
    action_type: ActivityType
    timestamp: datetime = Field(default_factory=_now)


class ReconciliationRecord(Document):
    """Audit row written each time the repair job re-points an application."""
    application_id: str
    job_id: str
    previous_job_id: Optional[str] = None
    job_title: Optional[str] = None
    company: Optional[str] = None
    reconciled_at: datetime = Field(default_factory=_now)
