"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Stored documents live in app.models; the schemas here either wrap them
or describe inputs the services compute on (CandidateProfile, FilterCriteria).
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Dict, List, Optional
from datetime import datetime

from app.models.documents import (
    ApplicationStatus,
    EducationEntry,
    Job,
    ProfessionalExperience,
    Project,
    SubscriptionType,
    UserType,
)


# ============================================================
# AUTH SCHEMAS
# ============================================================

class IndustryRegisterRequest(BaseModel):
    company_name: str = Field(..., min_length=2, max_length=200)
    email: EmailStr
    password: str = Field(..., min_length=8)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    user_type: str

class UserResponse(BaseModel):
    user_id: str
    name: Optional[str] = None
    email: str
    user_type: Optional[UserType] = None
    subscription_type: SubscriptionType = SubscriptionType.free


# ============================================================
# MATCHING SCHEMAS
# ============================================================

class CandidateProfile(BaseModel):
    """Matcher input: the parts of a profile that drive the job score."""
    skills: List[str] = []
    current_location: Optional[str] = None
    preferred_locations: List[str] = []
    years_experience: Optional[str] = None  # free text, parsed leniently

class MatchResult(BaseModel):
    job: Job
    match_percentage: float = Field(..., ge=0, le=100)


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: str = Field(..., min_length=2, max_length=200)
    description: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None
    skills: List[str] = []
    employment_type: Optional[str] = None
    job_min_salary: Optional[int] = Field(None, ge=0)
    job_max_salary: Optional[int] = Field(None, ge=0)
    job_salary_currency: Optional[str] = "INR"
    years_of_experience: Optional[int] = Field(None, ge=0)
    active: bool = True

class JobUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    industry: Optional[str] = None
    skills: Optional[List[str]] = None
    employment_type: Optional[str] = None
    job_min_salary: Optional[int] = Field(None, ge=0)
    job_max_salary: Optional[int] = Field(None, ge=0)
    job_salary_currency: Optional[str] = None
    years_of_experience: Optional[int] = Field(None, ge=0)
    active: Optional[bool] = None


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


# ============================================================
# PROFILE / RESUME SCHEMAS
# ============================================================

class ResumeUploadResponse(BaseModel):
    success: bool
    message: str
    filename: Optional[str] = None
    file_type: Optional[str] = None
    file_size: int = 0


# ============================================================
# STUDENT DATABASE SCHEMAS
# ============================================================

class FilterCriteria(BaseModel):
    """
    Student database filters. Every field is optional; blank means absent.
    Unknown keys are ignored so stale frontends keep working.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    degree: Optional[str] = None
    specialization: Optional[str] = None
    skills: Optional[str] = None
    graduation_year: Optional[str] = Field(None, alias="graduationYear")
    college: Optional[str] = None
    location: Optional[str] = None
    availability: Optional[str] = None
    keyword: Optional[str] = None

class StudentView(BaseModel):
    """What an industry user sees of an applicant profile."""
    student_id: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    gender: Optional[str] = None
    profile_picture_base64: Optional[str] = None

    # Taken from the first Graduation / Post Graduation entry
    degree: Optional[str] = None
    specialization: Optional[str] = None
    institution: Optional[str] = None
    graduation_year: Optional[str] = None
    education_entries: List[EducationEntry] = []

    skills: List[str] = []
    experience: Optional[str] = None
    summary: Optional[str] = None
    professional_experiences: List[ProfessionalExperience] = []

    current_location: Optional[str] = None
    preferred_locations: List[str] = []
    work_preference: Optional[str] = None

    linkedin_url: Optional[str] = None
    portfolio_url: Optional[str] = None
    github_url: Optional[str] = None

    availability: Optional[str] = None
    hobbies: List[str] = []
    projects: List[Project] = []

    hackathons_participated: int = 0
    jobs_applied: int = 0

    resume_file_name: Optional[str] = None
    resume_available: bool = False
    resume_base64: Optional[str] = None

    profile_completeness_score: int = Field(0, ge=0, le=100)

    created_at: Optional[datetime] = None
    last_updated: Optional[datetime] = None

    is_shortlisted: bool = False

class StudentListResponse(BaseModel):
    students: List[StudentView]
    subscription_type: str
    total_count: int

class StudentDetailResponse(BaseModel):
    student: StudentView
    subscription_type: str

class ResumeDownloadResponse(BaseModel):
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    base64_data: str

class SubscriptionInfoResponse(BaseModel):
    subscription_type: str
    is_paid_user: bool
    features: Dict[str, bool]

class SubscriptionUpdate(BaseModel):
    subscription_type: SubscriptionType


# ============================================================
# RECONCILIATION SCHEMAS
# ============================================================

class ReconciliationReport(BaseModel):
    job_id: str
    job_title: Optional[str] = None
    company: Optional[str] = None
    matched_application_ids: List[str] = []
    # re-pointed, or on a dry run the ones that would be
    updated_application_ids: List[str] = []
    dry_run: bool = False


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True

class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    type: str
