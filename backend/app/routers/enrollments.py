"""
Enrollments router for Learnly LMS.

Handles course enrollment, the lesson completion toggle and per-course
progress for the current user.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.user import User
from app.routers.auth import get_current_user
from app.schemas.progress import (
    CourseProgressResponse,
    EnrolledCourse,
    EnrollmentStatus,
    EnrollResponse,
    ToggleResponse,
)
from app.services import access, enrollment as enrollment_service, progress as progress_service


router = APIRouter()


@router.get("/my-courses", response_model=List[EnrolledCourse])
async def list_enrolled_courses(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[Dict[str, Any]]:
    """
    List the courses the current user is enrolled in, with progress.
    """
    enrollments = enrollment_service.list_enrollments(db, current_user)
    return progress_service.enrolled_courses(db, enrollments)


@router.post("/lesson/{lesson_id}/toggle", response_model=ToggleResponse)
async def toggle_lesson_complete(
    lesson_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Mark a lesson complete, or incomplete if it already was.
    """
    progress = progress_service.toggle_completion(db, current_user, lesson_id)

    return {
        "message": (
            "Lesson marked as complete"
            if progress.is_completed
            else "Lesson marked as incomplete"
        ),
        "is_completed": progress.is_completed,
        "completed_at": progress.completed_at
    }


@router.get("/course/{course_id}/progress", response_model=CourseProgressResponse)
async def get_course_progress(
    course_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Get the current user's progress through a course.
    """
    return progress_service.get_course_progress(db, current_user, course_id)


@router.get("/course/{course_id}/status", response_model=EnrollmentStatus)
async def get_enrollment_status(
    course_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Check whether the current user is enrolled in a course.
    """
    course = access.get_course_or_404(db, course_id)
    return {
        "course_id": course.id,
        "is_enrolled": access.is_enrolled(db, current_user.id, course.id)
    }


@router.post("/{course_id}", response_model=EnrollResponse, status_code=status.HTTP_201_CREATED)
async def enroll_in_course(
    course_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Enroll the current user in a course.
    """
    enrollment = enrollment_service.enroll(db, current_user, course_id)

    return {
        "message": "Enrolled successfully",
        "enrollment": enrollment_service.enrollment_projection(enrollment)
    }
