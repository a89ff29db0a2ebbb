"""
SaarthiX Jobs API - Main Application

FastAPI backend with:
- MongoDB for every record (users, profiles, jobs, applications)
- JWT authentication (applicants and industry users)
- Job recommendations scored on skills, location and experience
- Student database for industry users (filter, shortlist, resume download)

Run: uvicorn app.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import api_router
from app.db.mongodb import init_mongo_indexes, test_mongo_connection
from app.core.config import get_settings
from app.core.exceptions import register_exception_handlers

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="SaarthiX Jobs API",
    description="""
    Job and talent marketplace backend.

    ## Features
    - **Authentication**: JWT-based auth for applicants and industry users
    - **Profiles**: Applicant profile management and resume upload
    - **Jobs**: Post, browse and apply to jobs
    - **Recommendations**: Jobs ranked by match percentage
    - **Student Database**: Filter, shortlist and download resumes of applicants
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api")


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
        logger.info("MongoDB indexes initialized")
    except Exception as e:
        logger.warning(f"MongoDB index initialization failed: {e}")


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "SaarthiX Jobs API"}


@app.get("/health", tags=["Health"])
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
