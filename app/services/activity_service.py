"""
Activity Logger - audit trail of what industry users do with student data.

Recording is fire-and-forget: a failed write is logged and dropped,
it never fails the request that triggered it.
"""

import logging
from typing import Optional

from app.models.documents import ActivityLog, ActivityType
from app.services.mongo_service import ActivityLogRepository, get_activity_log_repository

logger = logging.getLogger(__name__)


class ActivityLogger:

    def __init__(self, repository: Optional[ActivityLogRepository] = None):
        self.repository = repository or get_activity_log_repository()

    def record(
        self,
        industry_email: str,
        industry_id: Optional[str],
        student_email: Optional[str],
        student_id: Optional[str],
        action_type: ActivityType
    ) -> None:
        entry = ActivityLog(
            industry_email=industry_email,
            industry_id=industry_id,
            student_email=student_email,
            student_id=student_id,
            action_type=action_type
        )
        try:
            self.repository.insert(entry)
        except Exception as e:
            logger.warning(
                f"Could not record {entry.action_type} by {industry_email} "
                f"on {student_id}: {e}"
            )
