"""
Profile Routes (applicants)

GET /profile - Get own profile
POST /profile - Create or update own profile (only sent fields change)
POST /profile/resume - Upload resume (PDF/DOC/DOCX), stored base64
"""

from fastapi import APIRouter, Depends, UploadFile, File

from app.core.auth import get_current_applicant
from app.core.exceptions import ProfileNotFoundError
from app.models.documents import User, UserProfile
from app.services.mongo_service import UserProfileRepository, get_profile_repository
from app.utils.file_upload import read_resume_upload
from app.schemas.schemas import ResumeUploadResponse

router = APIRouter(prefix="/profile", tags=["Profile"])

# Owned by the server, never taken from the request body
PROTECTED_FIELDS = {"id", "applicant_email", "applicant_id", "created_at", "last_updated"}


@router.get("", response_model=UserProfile)
async def get_profile(
    user: User = Depends(get_current_applicant),
    profiles: UserProfileRepository = Depends(get_profile_repository)
):
    """Get current applicant's profile."""
    profile = profiles.find_by_applicant_email(user.email)
    if profile is None:
        raise ProfileNotFoundError("Profile not found. Create profile first.")
    return profile


@router.post("", response_model=UserProfile)
async def save_profile(
    data: UserProfile,
    user: User = Depends(get_current_applicant),
    profiles: UserProfileRepository = Depends(get_profile_repository)
):
    """Create or update the current applicant's profile."""
    fields = data.model_dump(exclude_unset=True, exclude=PROTECTED_FIELDS)
    fields["applicant_id"] = user.id
    return profiles.upsert_by_applicant_email(user.email, fields)


@router.post("/resume", response_model=ResumeUploadResponse)
async def upload_resume(
    file: UploadFile = File(..., description="Resume file (PDF, DOC or DOCX)"),
    user: User = Depends(get_current_applicant),
    profiles: UserProfileRepository = Depends(get_profile_repository)
):
    """Upload a resume and attach it to the profile."""
    encoded = await read_resume_upload(file)

    profiles.upsert_by_applicant_email(user.email, {
        "applicant_id": user.id,
        "resume_file_name": encoded.filename,
        "resume_file_type": encoded.file_type,
        "resume_file_size": encoded.size,
        "resume_base64": encoded.base64_data
    })

    return ResumeUploadResponse(
        success=True,
        message="Resume uploaded",
        filename=encoded.filename,
        file_type=encoded.file_type,
        file_size=encoded.size
    )
