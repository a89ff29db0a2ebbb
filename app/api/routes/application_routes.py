"""
Application Routes

GET /applications - Current applicant's job applications
GET /applications/job/{job_id} - Applications to one of my jobs (industry)
PUT /applications/{application_id}/status - Move an application along (industry)
"""

from fastapi import APIRouter, Depends
from typing import List

from app.core.auth import get_current_applicant, get_current_industry_user
from app.models.documents import Application, User
from app.services.job_service import JobService, get_job_service
from app.schemas.schemas import ApplicationStatusUpdate

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.get("", response_model=List[Application])
async def my_applications(
    user: User = Depends(get_current_applicant),
    service: JobService = Depends(get_job_service)
):
    """All job applications of the current applicant, newest first."""
    return service.list_applications_for_applicant(user)


@router.get("/job/{job_id}", response_model=List[Application])
async def applications_for_job(
    job_id: str,
    user: User = Depends(get_current_industry_user),
    service: JobService = Depends(get_job_service)
):
    """Applications to a job posted by the current industry user."""
    return service.list_applications_for_job(job_id, user)


@router.put("/{application_id}/status", response_model=Application)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    user: User = Depends(get_current_industry_user),
    service: JobService = Depends(get_job_service)
):
    """Update the status of an application to one of my jobs."""
    return service.update_application_status(application_id, update.status.value, user)
