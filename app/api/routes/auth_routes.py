"""
Authentication Routes

POST /auth/industry/register - Register an industry (employer) account
POST /auth/industry/login - Login and get JWT token
GET /auth/me - Get current user info

Applicants sign in through Google OAuth upstream; the bridge issues the
same JWT shape (sub = email), so /auth/me and every guarded route work
for both user types.
"""

import logging
from fastapi import APIRouter, HTTPException, Depends

from app.core.auth import hash_password, verify_password, create_access_token, get_current_user
from app.core.exceptions import EmailAlreadyRegisteredError
from app.models.documents import SubscriptionType, User, UserType
from app.services.mongo_service import UserRepository, get_user_repository
from app.schemas.schemas import (
    IndustryRegisterRequest, LoginRequest, TokenResponse, UserResponse, MessageResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/industry/register", response_model=MessageResponse, status_code=201)
async def register_industry(
    request: IndustryRegisterRequest,
    users: UserRepository = Depends(get_user_repository)
):
    """
    Register a new industry account.

    After registration, login to get access token.
    """
    if users.find_by_email(request.email):
        raise EmailAlreadyRegisteredError("Email already registered")

    users.insert(User(
        name=request.company_name,
        email=request.email,
        password=hash_password(request.password),
        user_type=UserType.industry,
        subscription_type=SubscriptionType.free
    ))
    logger.info(f"Industry account registered: {request.email}")

    return MessageResponse(message="Industry registered successfully. Please login.")


@router.post("/industry/login", response_model=TokenResponse)
async def industry_login(
    request: LoginRequest,
    users: UserRepository = Depends(get_user_repository)
):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = users.find_by_email(request.email)

    if not user or not verify_password(request.password, user.password):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if user.user_type != UserType.industry.value:
        raise HTTPException(status_code=401, detail="Account is not an industry account")

    token = create_access_token(data={"sub": user.email, "user_type": user.user_type})

    return TokenResponse(access_token=token, user_id=user.id, user_type=user.user_type)


@router.get("/me", response_model=UserResponse)
async def get_me(user: User = Depends(get_current_user)):
    """Get current authenticated user's info."""
    return UserResponse(
        user_id=user.id,
        name=user.name,
        email=user.email,
        user_type=user.user_type,
        subscription_type=user.effective_subscription
    )
