"""Authentication schemas."""

from datetime import datetime

from pydantic import EmailStr, Field

from app.models.user import UserRole
from .base import APIModel


class UserSignup(APIModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole


class UserLogin(APIModel):
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class UserResponse(APIModel):
    id: int
    name: str
    email: str
    role: UserRole
    created_at: datetime


class AuthResponse(APIModel):
    message: str
    user: UserResponse
    token: str


class ProfileResponse(APIModel):
    user: UserResponse
