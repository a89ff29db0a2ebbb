"""
Student Database Service

PURPOSE:
Let industry users browse applicant profiles, shortlist candidates
and download resumes.

HOW IT WORKS:
1. filter_profiles()   - conjunctive filtering on FilterCriteria
2. project_profile()   - shape a profile into a StudentView, with
                         hackathon / job application counts and a
                         profile completeness score
3. StudentDatabaseService - wires the two to the repositories and
                         records every view / shortlist / download
                         in the activity log

Subscription tier (FREE / PAID) is reported to callers but does not
restrict any field: every industry user gets the full view.
"""

import logging
from typing import Callable, List, Optional, Sequence, Set

from pymongo.errors import DuplicateKeyError

from app.core.exceptions import (
    AlreadyShortlistedError,
    ResumeNotFoundError,
    StudentNotFoundError,
)
from app.models.documents import (
    ActivityType,
    EducationEntry,
    IndustryShortlist,
    UserProfile,
    UserType,
)
from app.schemas.schemas import FilterCriteria, ResumeDownloadResponse, StudentView
from app.services.activity_service import ActivityLogger
from app.services.mongo_service import (
    ApplicationRepository,
    HackathonApplicationRepository,
    ShortlistRepository,
    UserProfileRepository,
    UserRepository,
    get_application_repository,
    get_hackathon_application_repository,
    get_profile_repository,
    get_shortlist_repository,
    get_user_repository,
)

logger = logging.getLogger(__name__)

GRADUATION_LEVELS = ("graduation", "post graduation")

Counter = Callable[[str], int]


# ============================================================
# FILTERING
# ============================================================

def _contains(value: Optional[str], needle: str) -> bool:
    """Case-insensitive substring test; needle must already be lowercase."""
    return bool(value) and needle in value.lower()


def _any_education(profile: UserProfile, predicate: Callable[[EducationEntry], bool]) -> bool:
    return any(predicate(edu) for edu in profile.education_entries or [])


def _matches(profile: UserProfile, criteria: FilterCriteria) -> bool:
    degree = (criteria.degree or "").strip().lower()
    if degree and not _any_education(profile, lambda e: _contains(e.degree, degree)):
        return False

    specialization = (criteria.specialization or "").strip().lower()
    if specialization and not _any_education(
            profile,
            lambda e: _contains(e.stream, specialization) or _contains(e.degree, specialization)):
        return False

    skill = (criteria.skills or "").strip().lower()
    if skill and not any(_contains(s, skill) for s in profile.skills or []):
        return False

    year = (criteria.graduation_year or "").strip()
    if year and not _any_education(profile, lambda e: e.passing_year == year):
        return False

    college = (criteria.college or "").strip().lower()
    if college and not _any_education(profile, lambda e: _contains(e.institution, college)):
        return False

    location = (criteria.location or "").strip().lower()
    if location:
        locations = [profile.current_location] + list(profile.preferred_locations or [])
        if not any(
            loc and (location in loc.lower() or loc.lower() in location)
            for loc in locations
        ):
            return False

    availability = (criteria.availability or "").strip().lower()
    if availability and not _contains(profile.availability, availability):
        return False

    # keyword is an OR over name, skills and institutions
    keyword = (criteria.keyword or "").strip().lower()
    if keyword:
        if not (
            _contains(profile.full_name, keyword)
            or any(_contains(s, keyword) for s in profile.skills or [])
            or _any_education(profile, lambda e: _contains(e.institution, keyword))
        ):
            return False

    return True


def filter_profiles(profiles: Sequence[UserProfile],
                    criteria: Optional[FilterCriteria]) -> List[UserProfile]:
    """Profiles satisfying every supplied criterion, order preserved."""
    if criteria is None:
        return list(profiles)
    return [p for p in profiles if _matches(p, criteria)]


# ============================================================
# PROJECTION
# ============================================================

def calculate_profile_completeness(profile: UserProfile) -> int:
    """Filled items out of a fixed 12-item checklist, as a truncated percentage."""
    checklist = [
        profile.full_name,
        profile.email,
        profile.phone_number,
        profile.profile_picture_base64,
        profile.resume_base64,
        profile.skills,
        profile.education_entries,
        profile.professional_experiences,
        profile.projects,
        profile.summary,
        profile.linkedin_url,
        profile.current_location,
    ]
    score = sum(1 for item in checklist if item)
    return (score * 100) // len(checklist)


def _safe_count(counter: Optional[Counter], key: Optional[str], label: str) -> int:
    if counter is None or not key:
        return 0
    try:
        return counter(key) or 0
    except Exception as e:
        logger.warning(f"Could not count {label} for {key}: {e}")
        return 0


def project_profile(
    profile: UserProfile,
    is_shortlisted: bool = False,
    count_hackathons: Optional[Counter] = None,
    count_job_applications: Optional[Counter] = None
) -> StudentView:
    """
    Build the industry-facing view of one profile.

    count_hackathons is called with the applicant id and
    count_job_applications with the applicant email. A failing
    counter yields 0 instead of failing the projection.
    """
    education = [edu.model_copy() for edu in profile.education_entries or []]
    graduation = next(
        (e for e in education if (e.level or "").strip().lower() in GRADUATION_LEVELS),
        None
    )

    return StudentView(
        student_id=profile.id,
        full_name=profile.full_name,
        email=profile.email or profile.applicant_email,
        phone_number=profile.phone_number,
        gender=profile.gender,
        profile_picture_base64=profile.profile_picture_base64,
        degree=graduation.degree if graduation else None,
        specialization=graduation.stream if graduation else None,
        institution=graduation.institution if graduation else None,
        graduation_year=graduation.passing_year if graduation else None,
        education_entries=education,
        skills=list(profile.skills or []),
        experience=profile.experience,
        summary=profile.summary,
        professional_experiences=[e.model_copy() for e in profile.professional_experiences or []],
        current_location=profile.current_location,
        preferred_locations=list(profile.preferred_locations or []),
        work_preference=profile.work_preference,
        linkedin_url=profile.linkedin_url,
        portfolio_url=profile.portfolio_url,
        github_url=profile.github_url,
        availability=profile.availability,
        hobbies=list(profile.hobbies or []),
        projects=[p.model_copy() for p in profile.projects or []],
        hackathons_participated=_safe_count(
            count_hackathons, profile.applicant_id, "hackathon applications"),
        jobs_applied=_safe_count(
            count_job_applications, profile.applicant_email, "job applications"),
        resume_file_name=profile.resume_file_name,
        resume_available=bool(profile.resume_base64),
        resume_base64=profile.resume_base64,
        profile_completeness_score=calculate_profile_completeness(profile),
        created_at=profile.created_at,
        last_updated=profile.last_updated,
        is_shortlisted=is_shortlisted
    )


# ============================================================
# SERVICE
# ============================================================

class StudentDatabaseService:
    """Student database operations for one industry user at a time."""

    def __init__(
        self,
        profiles: UserProfileRepository,
        users: UserRepository,
        hackathon_applications: HackathonApplicationRepository,
        applications: ApplicationRepository,
        shortlists: ShortlistRepository,
        activity: ActivityLogger
    ):
        self.profiles = profiles
        self.users = users
        self.hackathon_applications = hackathon_applications
        self.applications = applications
        self.shortlists = shortlists
        self.activity = activity

    def _project(self, profile: UserProfile, is_shortlisted: bool) -> StudentView:
        return project_profile(
            profile,
            is_shortlisted=is_shortlisted,
            count_hackathons=self.hackathon_applications.count_by_applicant_id,
            count_job_applications=self.applications.count_by_applicant_email
        )

    def _get_profile(self, student_id: str) -> UserProfile:
        profile = self.profiles.find_by_id(student_id)
        if profile is None:
            raise StudentNotFoundError(f"Student not found: {student_id}")
        return profile

    def _shortlisted_emails(self, industry_email: str) -> Set[str]:
        return {s.student_email for s in self.shortlists.find_by_industry_email(industry_email)}

    def get_all_students(self, industry_email: str,
                         criteria: Optional[FilterCriteria] = None) -> List[StudentView]:
        """Applicant profiles matching criteria, flagged with shortlist status."""
        applicant_emails = self.users.find_emails_by_type(UserType.applicant.value)
        profiles = [p for p in self.profiles.find_all() if p.applicant_email in applicant_emails]

        shortlisted = self._shortlisted_emails(industry_email)
        return [
            self._project(p, p.applicant_email in shortlisted)
            for p in filter_profiles(profiles, criteria)
        ]

    def get_student_by_id(self, student_id: str, industry_email: str,
                          industry_id: Optional[str]) -> StudentView:
        profile = self._get_profile(student_id)
        is_shortlisted = self.shortlists.exists(industry_email, profile.applicant_email)

        self.activity.record(industry_email, industry_id, profile.applicant_email,
                             student_id, ActivityType.profile_viewed)
        return self._project(profile, is_shortlisted)

    def shortlist_student(self, student_id: str, industry_email: str,
                          industry_id: Optional[str]) -> IndustryShortlist:
        profile = self._get_profile(student_id)
        if self.shortlists.exists(industry_email, profile.applicant_email):
            raise AlreadyShortlistedError("Student already shortlisted")

        try:
            entry = self.shortlists.insert(IndustryShortlist(
                industry_email=industry_email,
                industry_id=industry_id,
                student_email=profile.applicant_email,
                student_id=student_id
            ))
        except DuplicateKeyError:
            # a concurrent request shortlisted first
            raise AlreadyShortlistedError("Student already shortlisted")
        self.activity.record(industry_email, industry_id, profile.applicant_email,
                             student_id, ActivityType.candidate_shortlisted)
        logger.info(f"{industry_email} shortlisted {profile.applicant_email}")
        return entry

    def remove_shortlist(self, student_id: str, industry_email: str) -> bool:
        profile = self._get_profile(student_id)
        return self.shortlists.delete(industry_email, profile.applicant_email)

    def get_shortlisted_students(self, industry_email: str) -> List[StudentView]:
        views = []
        for entry in self.shortlists.find_by_industry_email(industry_email):
            profile = self.profiles.find_by_applicant_email(entry.student_email)
            if profile is None:
                logger.info(f"Shortlisted profile {entry.student_email} no longer exists")
                continue
            views.append(self._project(profile, True))
        return views

    def download_resume(self, student_id: str, industry_email: str,
                        industry_id: Optional[str]) -> ResumeDownloadResponse:
        profile = self._get_profile(student_id)
        if not profile.resume_base64:
            raise ResumeNotFoundError(f"No resume uploaded for student {student_id}")

        self.activity.record(industry_email, industry_id, profile.applicant_email,
                             student_id, ActivityType.resume_downloaded)
        return ResumeDownloadResponse(
            file_name=profile.resume_file_name,
            file_type=profile.resume_file_type,
            base64_data=profile.resume_base64
        )


# ============================================================
# CONVENIENCE FUNCTIONS
# ============================================================

def get_student_database_service() -> StudentDatabaseService:
    """Get student database service wired to MongoDB."""
    return StudentDatabaseService(
        profiles=get_profile_repository(),
        users=get_user_repository(),
        hackathon_applications=get_hackathon_application_repository(),
        applications=get_application_repository(),
        shortlists=get_shortlist_repository(),
        activity=ActivityLogger()
    )
