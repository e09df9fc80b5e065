"""
Authentication router for Learnly LMS.

Handles user signup, login, logout and profile endpoints, and provides
the current-user dependencies used by every protected route.
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import (
    ForbiddenError,
    UnauthenticatedError,
    ValidationFailedError,
)
from app.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
    verify_token,
)
from app.models.user import User
from app.schemas.auth import (
    AuthResponse,
    ProfileResponse,
    UserLogin,
    UserSignup,
)
from app.schemas.course import MessageResponse


logger = logging.getLogger(__name__)

router = APIRouter()

# Bearer header; the session cookie is checked when the header is missing
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login",
    auto_error=False
)


# Dependencies
def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user from the JWT session token.
    """
    token = token or request.cookies.get(settings.AUTH_COOKIE_NAME)
    if not token:
        raise UnauthenticatedError("No authentication token found")

    payload = verify_token(token)
    if payload is None:
        raise UnauthenticatedError("Invalid or expired token")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise UnauthenticatedError("Invalid or expired token")

    user = db.get(User, user_id)
    if user is None:
        raise UnauthenticatedError("User no longer exists")

    return user


def get_current_instructor(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Verify that the current user is an instructor.
    """
    if not current_user.is_instructor:
        raise ForbiddenError("Access denied, Instructor only")
    return current_user


def get_current_student(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Verify that the current user is a student.
    """
    if not current_user.is_student:
        raise ForbiddenError("Access denied, Student only")
    return current_user


def issue_token(user: User, response: Response) -> str:
    """Create a session token for ``user`` and set it as a cookie."""
    token = create_access_token(
        subject=user.id,
        additional_claims={"role": user.role}
    )
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return token


# Endpoints
@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    user_data: UserSignup,
    response: Response,
    db: Session = Depends(get_db)
) -> dict:
    """
    Register a new student or instructor account.
    """
    existing_user = db.query(User).filter(User.email == user_data.email).first()
    if existing_user:
        raise ValidationFailedError("User already exists")

    new_user = User(
        name=user_data.name,
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        role=user_data.role.value
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ValidationFailedError("User already exists")
    db.refresh(new_user)

    logger.info(f"User {new_user.id} signed up as {new_user.role}")

    return {
        "message": "User created successfully",
        "user": new_user,
        "token": issue_token(new_user, response)
    }


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    response: Response,
    db: Session = Depends(get_db)
) -> dict:
    """
    Log in with email and password.
    """
    user = db.query(User).filter(User.email == credentials.email).first()

    if not user or not verify_password(credentials.password, user.hashed_password):
        raise UnauthenticatedError("Invalid email or password")

    logger.info(f"User {user.id} logged in")

    return {
        "message": "User logged in successfully",
        "user": user,
        "token": issue_token(user, response)
    }


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> dict:
    """
    Clear the session cookie.
    """
    response.delete_cookie(
        key=settings.AUTH_COOKIE_NAME,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
    )
    return {"message": "User logged out successfully"}


@router.get("/me", response_model=ProfileResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
) -> dict:
    """
    Get current user information.
    """
    return {"user": current_user}

