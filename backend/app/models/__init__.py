"""
Database models for Learnly LMS.

This module contains all SQLAlchemy models for the application:
- User model for authentication and roles
- Course and Lesson models for learning content
- Enrollment and LessonProgress models for tracking user progress
"""

from app.core.database import Base

# Import all models to ensure they're registered with SQLAlchemy
from .user import User, UserRole
from .course import Course, Lesson, ContentType
from .progress import Enrollment, LessonProgress

# Export all models
__all__ = [
    "Base",
    "User",
    "UserRole",
    "Course",
    "Lesson",
    "ContentType",
    "Enrollment",
    "LessonProgress"
]
