"""
Core module for Learnly LMS backend.

- config: the ``settings`` object
- database: engine, session factory and the ``get_db`` dependency
- security: password hashing and session tokens
- exceptions: the domain error hierarchy rendered by ``app.main``
- storage: local media storage for lesson content and thumbnails
"""

from .config import settings
from .database import Base, SessionLocal, engine, get_db, init_db
from .exceptions import (
    AlreadyEnrolledError,
    ForbiddenError,
    LMSError,
    NotEnrolledError,
    NotFoundError,
    SelfEnrollmentDeniedError,
    UnauthenticatedError,
    ValidationFailedError,
)
from .storage import MediaStorage, get_media_storage

__all__ = [
    "settings",
    "Base",
    "SessionLocal",
    "engine",
    "get_db",
    "init_db",
    "LMSError",
    "NotFoundError",
    "ForbiddenError",
    "NotEnrolledError",
    "AlreadyEnrolledError",
    "SelfEnrollmentDeniedError",
    "ValidationFailedError",
    "UnauthenticatedError",
    "MediaStorage",
    "get_media_storage",
]
