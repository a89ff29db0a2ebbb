"""
Job Routes

GET /jobs - List job postings
GET /jobs/recommended - Jobs ranked by match score (applicant only)
GET /jobs/{job_id} - Get job details
POST /jobs - Create job posting (industry only)
PUT /jobs/{job_id} - Update job (owning industry user only)
DELETE /jobs/{job_id} - Delete job (owning industry user only)
POST /jobs/{job_id}/apply - Apply to job (applicant only)
"""

from fastapi import APIRouter, Depends, Query
from typing import List

from app.core.auth import get_current_applicant, get_current_industry_user
from app.core.exceptions import ProfileNotFoundError
from app.models.documents import Application, Job, User
from app.services.job_service import JobService, get_job_service
from app.services.mongo_service import UserProfileRepository, get_profile_repository
from app.schemas.schemas import JobCreate, JobUpdate, MatchResult, MessageResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.get("", response_model=List[Job])
async def list_jobs(
    active_only: bool = Query(False, description="Only return active postings"),
    service: JobService = Depends(get_job_service)
):
    """List job postings, newest first."""
    return service.list_jobs(active_only=active_only)


@router.get("/recommended", response_model=List[MatchResult])
async def recommended_jobs(
    user: User = Depends(get_current_applicant),
    profiles: UserProfileRepository = Depends(get_profile_repository),
    service: JobService = Depends(get_job_service)
):
    """
    Jobs ranked for the current applicant.

    Score = 50% skills + 30% location + 20% experience.
    Jobs scoring 0 are left out.
    """
    profile = profiles.find_by_applicant_email(user.email)
    if profile is None:
        raise ProfileNotFoundError("Create your profile first to get recommendations")
    return service.get_recommended_jobs(profile)


@router.get("/{job_id}", response_model=Job)
async def get_job(job_id: str, service: JobService = Depends(get_job_service)):
    """Get details of a specific job."""
    return service.get_job(job_id)


@router.post("", response_model=Job, status_code=201)
async def create_job(
    job: JobCreate,
    user: User = Depends(get_current_industry_user),
    service: JobService = Depends(get_job_service)
):
    """Create a new job posting. Only industry users can create jobs."""
    return service.create_job(job, user)


@router.put("/{job_id}", response_model=Job)
async def update_job(
    job_id: str,
    update: JobUpdate,
    user: User = Depends(get_current_industry_user),
    service: JobService = Depends(get_job_service)
):
    """Update a job posting. Only provided fields are changed."""
    return service.update_job(job_id, update, user)


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: str,
    user: User = Depends(get_current_industry_user),
    service: JobService = Depends(get_job_service)
):
    """Delete a job posting."""
    service.delete_job(job_id, user)
    return MessageResponse(message="Job deleted successfully")


@router.post("/{job_id}/apply", response_model=Application, status_code=201)
async def apply_to_job(
    job_id: str,
    user: User = Depends(get_current_applicant),
    service: JobService = Depends(get_job_service)
):
    """Apply to a job. Applicants only. Cannot apply twice to same job."""
    return service.apply(job_id, user)
