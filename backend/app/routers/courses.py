"""
Courses router for Learnly LMS.

Handles the public course catalogue, the full course view for owners and
enrolled users, and instructor course management.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.storage import THUMBNAILS, MediaStorage, get_media_storage
from app.models.user import User
from app.routers.auth import get_current_instructor, get_current_user
from app.schemas.base import validate_form
from app.schemas.course import (
    CourseCreate,
    CourseListItem,
    CourseMutationResponse,
    CoursePublicDetail,
    CourseUpdate,
    CourseWithLessons,
    InstructorCourse,
    MessageResponse,
)
from app.services import courses as course_service


router = APIRouter()


def has_file(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)


@router.get("/", response_model=List[CourseListItem])
async def list_courses(db: Session = Depends(get_db)) -> List[Any]:
    """
    List all courses, newest first.
    """
    return course_service.list_courses(db)


@router.get("/instructor/my-courses", response_model=List[InstructorCourse])
async def list_my_courses(
    current_user: User = Depends(get_current_instructor),
    db: Session = Depends(get_db)
) -> List[Dict[str, Any]]:
    """
    List the courses owned by the current instructor.
    """
    return course_service.list_instructor_courses(db, current_user)


@router.post("/", response_model=CourseMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_course(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_instructor),
    storage: MediaStorage = Depends(get_media_storage),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Create a new course with an optional thumbnail.
    """
    course_data = validate_form(CourseCreate, title=title, description=description)

    thumbnail_url = None
    if has_file(thumbnail):
        thumbnail_url = await storage.save_upload(thumbnail, THUMBNAILS)

    course = course_service.create_course(db, current_user, course_data, thumbnail_url)

    return {"message": "Course created successfully", "course": course}


@router.get("/{course_id}", response_model=CoursePublicDetail)
async def get_course(
    course_id: int,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Get the public summary of a course.
    """
    return course_service.get_public_course(db, course_id)


@router.get("/{course_id}/full", response_model=CourseWithLessons)
async def get_course_with_lessons(
    course_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Get a course with its lessons. Owner or enrolled users only.
    """
    return course_service.get_course_with_lessons(db, current_user, course_id)


@router.put("/{course_id}", response_model=CourseMutationResponse)
async def update_course(
    course_id: int,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_instructor),
    storage: MediaStorage = Depends(get_media_storage),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Update a course's title and description, optionally replacing the thumbnail.
    """
    course = course_service.get_owned_course(db, current_user, course_id)
    course_data = validate_form(CourseUpdate, title=title, description=description)

    thumbnail_url = None
    if has_file(thumbnail):
        thumbnail_url = await storage.save_upload(thumbnail, THUMBNAILS)

    course = course_service.update_course(db, course, course_data, thumbnail_url)

    return {"message": "Course updated successfully", "course": course}


@router.delete("/{course_id}", response_model=MessageResponse)
async def delete_course(
    course_id: int,
    current_user: User = Depends(get_current_instructor),
    db: Session = Depends(get_db)
) -> Dict[str, str]:
    """
    Delete a course with its lessons, enrollments and progress.
    """
    course = course_service.get_owned_course(db, current_user, course_id)
    course_service.delete_course(db, course)

    return {"message": "Course deleted successfully"}
