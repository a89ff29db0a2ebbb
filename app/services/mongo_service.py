"""
MongoDB Service - repositories over the marketplace collections.

One repository class per collection:
1. users                     - login identities (APPLICANT / INDUSTRY)
2. user_profiles             - applicant profiles (skills, education, resume)
3. jobs                      - job postings
4. all_applied_jobs          - job applications
5. hackathon_applications    - hackathon applications (counted only)
6. industry_shortlists       - saved candidates per industry user
7. activity_logs             - audit trail of industry actions on students
8. application_reconciliations - audit trail of the application repair job

Every repository accepts an explicit Collection so tests can hand in a mock.
Reads return document models from app.models, never raw dicts.
"""

from datetime import datetime
from typing import Iterable, List, Optional, Set, Type, TypeVar

from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.collection import Collection

from app.db.mongodb import get_collection, COLLECTIONS
from app.models.documents import (
    ActivityLog,
    Application,
    Document,
    HackathonApplication,
    IndustryShortlist,
    Job,
    ReconciliationRecord,
    User,
    UserProfile,
)

DocT = TypeVar("DocT", bound=Document)


# ============================================================
# HELPERS: ObjectId <-> string id
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to a dict with a string `id`."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


def id_filter(doc_id: str) -> dict:
    """Match on ObjectId when the id looks like one, else on the raw string."""
    if ObjectId.is_valid(doc_id):
        return {"_id": ObjectId(doc_id)}
    return {"_id": doc_id}


class MongoRepository:
    """Shared plumbing: collection handle and doc -> model conversion."""

    collection_key: str = None
    model: Type[Document] = None

    def __init__(self, collection: Optional[Collection] = None):
        self.collection: Collection = (
            collection if collection is not None
            else get_collection(COLLECTIONS[self.collection_key])
        )

    def _to_model(self, doc: Optional[dict]):
        if doc is None:
            return None
        return self.model.model_validate(serialize_doc(doc))

    def _to_models(self, docs: Iterable[dict]) -> list:
        return [self._to_model(doc) for doc in docs]

    def find_by_id(self, doc_id: str):
        return self._to_model(self.collection.find_one(id_filter(doc_id)))

    def find_all(self) -> list:
        return self._to_models(self.collection.find())

    def insert(self, item: DocT) -> DocT:
        """Insert a model and return it with its new id."""
        result = self.collection.insert_one(item.to_mongo())
        return item.model_copy(update={"id": str(result.inserted_id)})


# ============================================================
# USERS
# ============================================================

class UserRepository(MongoRepository):
    collection_key = "users"
    model = User

    def find_by_email(self, email: str) -> Optional[User]:
        return self._to_model(self.collection.find_one({"email": email}))

    def find_emails_by_type(self, user_type: str) -> Set[str]:
        """Emails of every user with the given user_type (one query)."""
        cursor = self.collection.find({"user_type": user_type}, {"email": 1})
        return {doc["email"] for doc in cursor if doc.get("email")}

    def update_subscription(self, email: str, subscription_type: str) -> bool:
        result = self.collection.update_one(
            {"email": email},
            {"$set": {"subscription_type": subscription_type}}
        )
        return result.matched_count > 0


# ============================================================
# PROFILES
# ============================================================

class UserProfileRepository(MongoRepository):
    collection_key = "profiles"
    model = UserProfile

    def find_by_applicant_email(self, email: str) -> Optional[UserProfile]:
        return self._to_model(self.collection.find_one({"applicant_email": email}))

    def upsert_by_applicant_email(self, email: str, data: dict) -> UserProfile:
        """
        Create or partially update the profile owned by `email`.

        `data` holds only the fields the caller wants to change.
        """
        now = datetime.utcnow()
        fields = {k: v for k, v in data.items() if k not in ("id", "_id", "created_at")}
        fields["applicant_email"] = email
        fields["last_updated"] = now
        doc = self.collection.find_one_and_update(
            {"applicant_email": email},
            {"$set": fields, "$setOnInsert": {"created_at": now}},
            upsert=True,
            return_document=ReturnDocument.AFTER
        )
        return self._to_model(doc)


# ============================================================
# JOBS
# ============================================================

class JobRepository(MongoRepository):
    collection_key = "jobs"
    model = Job

    def find_all(self, active_only: bool = False) -> List[Job]:
        query = {"active": True} if active_only else {}
        return self._to_models(self.collection.find(query).sort("created_at", -1))

    def update(self, job_id: str, fields: dict) -> Optional[Job]:
        doc = self.collection.find_one_and_update(
            id_filter(job_id),
            {"$set": fields},
            return_document=ReturnDocument.AFTER
        )
        return self._to_model(doc)

    def delete(self, job_id: str) -> bool:
        result = self.collection.delete_one(id_filter(job_id))
        return result.deleted_count > 0


# ============================================================
# JOB APPLICATIONS
# ============================================================

class ApplicationRepository(MongoRepository):
    collection_key = "applications"
    model = Application

    def find_by_job_id(self, job_id: str) -> List[Application]:
        return self._to_models(self.collection.find({"job_id": job_id}))

    def find_by_applicant_email(self, email: str) -> List[Application]:
        cursor = self.collection.find({"applicant_email": email}).sort("applied_at", -1)
        return self._to_models(cursor)

    def count_by_applicant_email(self, email: str) -> int:
        return self.collection.count_documents({"applicant_email": email})

    def exists_for(self, job_id: str, applicant_email: str) -> bool:
        query = {"job_id": job_id, "applicant_email": applicant_email}
        return self.collection.count_documents(query, limit=1) > 0

    def update_status(self, application_id: str, status: str) -> Optional[Application]:
        doc = self.collection.find_one_and_update(
            id_filter(application_id),
            {"$set": {"status": status, "last_updated": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER
        )
        return self._to_model(doc)

    def reassign_job_id(self, application_id: str, job_id: str) -> bool:
        result = self.collection.update_one(
            id_filter(application_id),
            {"$set": {"job_id": job_id, "last_updated": datetime.utcnow()}}
        )
        return result.modified_count > 0


# ============================================================
# HACKATHON APPLICATIONS
# ============================================================

class HackathonApplicationRepository(MongoRepository):
    collection_key = "hackathon_applications"
    model = HackathonApplication

    def count_by_applicant_id(self, applicant_id: str) -> int:
        return self.collection.count_documents({"applicant_id": applicant_id})


# ============================================================
# SHORTLISTS
# Keyed by (industry_email, student_email)
# ============================================================

class ShortlistRepository(MongoRepository):
    collection_key = "shortlists"
    model = IndustryShortlist

    def find_by_industry_email(self, industry_email: str) -> List[IndustryShortlist]:
        cursor = self.collection.find({"industry_email": industry_email}).sort("shortlisted_at", -1)
        return self._to_models(cursor)

    def exists(self, industry_email: str, student_email: str) -> bool:
        query = {"industry_email": industry_email, "student_email": student_email}
        return self.collection.count_documents(query, limit=1) > 0

    def delete(self, industry_email: str, student_email: str) -> bool:
        result = self.collection.delete_one({
            "industry_email": industry_email,
            "student_email": student_email
        })
        return result.deleted_count > 0


# ============================================================
# AUDIT TRAILS
# ============================================================

class ActivityLogRepository(MongoRepository):
    collection_key = "activity_logs"
    model = ActivityLog


class ReconciliationLogRepository(MongoRepository):
    collection_key = "reconciliations"
    model = ReconciliationRecord


# ============================================================
# CONVENIENCE FUNCTIONS
# Used as FastAPI dependencies, overridden in tests.
# ============================================================

def get_user_repository() -> UserRepository:
    return UserRepository()


def get_profile_repository() -> UserProfileRepository:
    return UserProfileRepository()


def get_job_repository() -> JobRepository:
    return JobRepository()


def get_application_repository() -> ApplicationRepository:
    return ApplicationRepository()


def get_hackathon_application_repository() -> HackathonApplicationRepository:
    return HackathonApplicationRepository()


def get_shortlist_repository() -> ShortlistRepository:
    return ShortlistRepository()


def get_activity_log_repository() -> ActivityLogRepository:
    return ActivityLogRepository()


def get_reconciliation_log_repository() -> ReconciliationLogRepository:
    return ReconciliationLogRepository()
