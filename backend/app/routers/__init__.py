"""
API routers for Learnly LMS.

This module contains all API endpoint routers:
- auth: Authentication endpoints (signup, login, logout, profile)
- courses: Course catalogue and instructor course management
- lessons: Lesson content and instructor lesson management
- enrollments: Enrollment, completion toggle and course progress
- dashboard: Student and instructor progress rollups
"""

from fastapi import APIRouter

# Import individual routers
from .auth import router as auth_router
from .courses import router as courses_router
from .lessons import router as lessons_router
from .enrollments import router as enrollments_router
from .dashboard import router as dashboard_router

# Create main API router
api_router = APIRouter()

# Include all routers with their prefixes
api_router.include_router(
    auth_router,
    prefix="/auth",
    tags=["authentication"]
)

api_router.include_router(
    courses_router,
    prefix="/courses",
    tags=["courses"]
)

api_router.include_router(
    lessons_router,
    prefix="/lessons",
    tags=["lessons"]
)

api_router.include_router(
    enrollments_router,
    prefix="/enrollments",
    tags=["enrollments"]
)

api_router.include_router(
    dashboard_router,
    prefix="/dashboard",
    tags=["dashboard"]
)

# Export all routers
__all__ = [
    "api_router",
    "auth_router",
    "courses_router",
    "lessons_router",
    "enrollments_router",
    "dashboard_router"
]
