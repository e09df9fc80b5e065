"""
Dashboard router for Learnly LMS.

Progress rollups for students (their enrollments) and instructors
(every student in every course they own).
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.user import User
from app.routers.auth import get_current_instructor, get_current_student
from app.schemas.progress import InstructorDashboardCourse, StudentDashboard
from app.services import progress as progress_service


router = APIRouter()


@router.get("/student", response_model=StudentDashboard)
async def student_dashboard(
    current_user: User = Depends(get_current_student),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Get progress across all of the current student's enrollments.
    """
    return progress_service.student_dashboard(db, current_user)


@router.get("/instructor", response_model=List[InstructorDashboardCourse])
async def instructor_dashboard(
    current_user: User = Depends(get_current_instructor),
    db: Session = Depends(get_db)
) -> List[Dict[str, Any]]:
    """
    Get per-student progress for every course the current instructor owns.
    """
    return progress_service.instructor_dashboard(db, current_user)
