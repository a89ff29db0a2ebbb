"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt (industry accounts; OAuth users have no password)
- JWT token creation/verification (sub = user email)
- FastAPI dependencies resolving the bearer token to a User document
"""

from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import get_settings
from app.models.documents import User, UserType
from app.services.mongo_service import UserRepository, get_user_repository

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor
bearer_scheme = HTTPBearer()


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify password against hash. Accounts without a password never match."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    users: UserRepository = Depends(get_user_repository)
) -> User:
    """
    FastAPI dependency - Get current authenticated user.

    Tokens come from /auth/industry/login or from the OAuth sign-in
    bridge; both put the user's email in `sub`.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_token(credentials.credentials)
    if not payload:
        raise credentials_exception

    email = payload.get("sub")
    if not email:
        raise credentials_exception

    user = users.find_by_email(email)
    if user is None:
        raise credentials_exception

    return user


async def get_current_applicant(user: User = Depends(get_current_user)) -> User:
    """Dependency - Require APPLICANT user type."""
    if user.user_type != UserType.applicant.value:
        raise HTTPException(status_code=403, detail="Only APPLICANT users can do this")
    return user


async def get_current_industry_user(user: User = Depends(get_current_user)) -> User:
    """Dependency - Require INDUSTRY user type."""
    if user.user_type != UserType.industry.value:
        raise HTTPException(status_code=403, detail="Only INDUSTRY users can do this")
    return user
