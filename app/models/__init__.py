"""
Models module - internal data structures.

Difference from schemas:
- Models: documents as stored in MongoDB
- Schemas: API contract (what client sends/receives)
"""

from app.models.documents import (
    ActivityLog,
    ActivityType,
    Application,
    ApplicationStatus,
    EducationEntry,
    HackathonApplication,
    IndustryShortlist,
    Job,
    ProfessionalExperience,
    Project,
    ReconciliationRecord,
    SubscriptionType,
    User,
    UserProfile,
    UserType,
)

__all__ = [
    "ActivityLog",
    "ActivityType",
    "Application",
    "ApplicationStatus",
    "EducationEntry",
    "HackathonApplication",
    "IndustryShortlist",
    "Job",
    "ProfessionalExperience",
    "Project",
    "ReconciliationRecord",
    "SubscriptionType",
    "User",
    "UserProfile",
    "UserType",
]
