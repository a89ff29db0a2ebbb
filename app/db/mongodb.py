"""
MongoDB Connection Utility

Every record of the marketplace lives in MongoDB:
- users, user_profiles
- jobs, all_applied_jobs (job applications)
- hackathon_applications
- industry_shortlists, activity_logs
- application_reconciliations (audit trail of the repair job)
"""
import logging

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from app.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the marketplace database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection by its real name (see COLLECTIONS)."""
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning(f"MongoDB connection failed: {e}")
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "profiles": "user_profiles",
    "jobs": "jobs",
    "applications": "all_applied_jobs",
    "hackathon_applications": "hackathon_applications",
    "shortlists": "industry_shortlists",
    "activity_logs": "activity_logs",
    "reconciliations": "application_reconciliations"
}


def init_mongo_indexes():
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    db[COLLECTIONS["users"]].create_index("email", unique=True)
    db[COLLECTIONS["profiles"]].create_index("applicant_email")

    # Application lookups by job and by applicant
    db[COLLECTIONS["applications"]].create_index("job_id")
    # One application per (job, applicant) pair
    db[COLLECTIONS["applications"]].create_index([
        ("job_id", ASCENDING),
        ("applicant_email", ASCENDING)
    ], unique=True)
    db[COLLECTIONS["applications"]].create_index("applicant_email")
    db[COLLECTIONS["hackathon_applications"]].create_index("applicant_id")

    # One shortlist row per (industry, student) pair
    db[COLLECTIONS["shortlists"]].create_index([
        ("industry_email", ASCENDING),
        ("student_email", ASCENDING)
    ], unique=True)

    db[COLLECTIONS["activity_logs"]].create_index([
        ("industry_email", ASCENDING),
        ("timestamp", ASCENDING)
    ])

    logger.info("MongoDB indexes created successfully")
