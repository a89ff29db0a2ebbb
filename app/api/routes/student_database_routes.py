"""
Student Database Routes (industry users only)

GET /students - Browse applicant profiles (filters as query params)
GET /students/shortlisted - My shortlisted candidates
GET /students/subscription/info - My subscription tier and features
POST /students/subscription/update - Switch tier (until payments exist)
GET /students/{student_id} - One profile (logged as PROFILE_VIEWED)
POST /students/{student_id}/shortlist - Shortlist a candidate
DELETE /students/{student_id}/shortlist - Remove from shortlist
GET /students/{student_id}/resume/download - Download resume

Filters: degree, specialization, skills, graduationYear, college,
location, availability, keyword. Unknown parameters are ignored.
"""

from fastapi import APIRouter, Depends, Request

from app.core.auth import get_current_industry_user
from app.models.documents import SubscriptionType, User
from app.services.mongo_service import UserRepository, get_user_repository
from app.services.student_database_service import (
    StudentDatabaseService,
    get_student_database_service,
)
from app.schemas.schemas import (
    FilterCriteria, MessageResponse, ResumeDownloadResponse, StudentDetailResponse,
    StudentListResponse, SubscriptionInfoResponse, SubscriptionUpdate
)

router = APIRouter(prefix="/students", tags=["Student Database"])

# Every feature is open to every tier; the tier is reported, not enforced.
SUBSCRIPTION_FEATURES = {
    "view_full_resume": True,
    "download_resume": True,
    "view_contact_details": True,
    "shortlist_candidates": True,
    "unlimited_access": True,
}


@router.get("", response_model=StudentListResponse)
async def list_students(
    request: Request,
    user: User = Depends(get_current_industry_user),
    service: StudentDatabaseService = Depends(get_student_database_service)
):
    """Applicant profiles matching every supplied filter."""
    criteria = FilterCriteria.model_validate(dict(request.query_params))
    students = service.get_all_students(user.email, criteria)
    return StudentListResponse(
        students=students,
        subscription_type=user.effective_subscription,
        total_count=len(students)
    )


@router.get("/shortlisted", response_model=StudentListResponse)
async def shortlisted_students(
    user: User = Depends(get_current_industry_user),
    service: StudentDatabaseService = Depends(get_student_database_service)
):
    students = service.get_shortlisted_students(user.email)
    return StudentListResponse(
        students=students,
        subscription_type=user.effective_subscription,
        total_count=len(students)
    )


@router.get("/subscription/info", response_model=SubscriptionInfoResponse)
async def subscription_info(user: User = Depends(get_current_industry_user)):
    subscription = user.effective_subscription
    return SubscriptionInfoResponse(
        subscription_type=subscription,
        is_paid_user=subscription == SubscriptionType.paid.value,
        features=SUBSCRIPTION_FEATURES
    )


@router.post("/subscription/update", response_model=MessageResponse)
async def update_subscription(
    update: SubscriptionUpdate,
    user: User = Depends(get_current_industry_user),
    users: UserRepository = Depends(get_user_repository)
):
    users.update_subscription(user.email, update.subscription_type.value)
    return MessageResponse(message=f"Subscription updated to {update.subscription_type.value}")


@router.get("/{student_id}", response_model=StudentDetailResponse)
async def get_student(
    student_id: str,
    user: User = Depends(get_current_industry_user),
    service: StudentDatabaseService = Depends(get_student_database_service)
):
    student = service.get_student_by_id(student_id, user.email, user.id)
    return StudentDetailResponse(student=student, subscription_type=user.effective_subscription)


@router.post("/{student_id}/shortlist", response_model=MessageResponse, status_code=201)
async def shortlist_student(
    student_id: str,
    user: User = Depends(get_current_industry_user),
    service: StudentDatabaseService = Depends(get_student_database_service)
):
    service.shortlist_student(student_id, user.email, user.id)
    return MessageResponse(message="Student shortlisted successfully")


@router.delete("/{student_id}/shortlist", response_model=MessageResponse)
async def remove_shortlist(
    student_id: str,
    user: User = Depends(get_current_industry_user),
    service: StudentDatabaseService = Depends(get_student_database_service)
):
    service.remove_shortlist(student_id, user.email)
    return MessageResponse(message="Student removed from shortlist")


@router.get("/{student_id}/resume/download", response_model=ResumeDownloadResponse)
async def download_resume(
    student_id: str,
    user: User = Depends(get_current_industry_user),
    service: StudentDatabaseService = Depends(get_student_database_service)
):
    return service.download_resume(student_id, user.email, user.id)
