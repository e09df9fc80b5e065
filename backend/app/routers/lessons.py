"""
Lessons router for Learnly LMS.

Handles lesson delivery to owners and enrolled users, and lesson
management (create, update, delete) by the course owner.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.exceptions import ValidationFailedError
from app.core.storage import DOCUMENTS, THUMBNAILS, VIDEOS, MediaStorage, get_media_storage
from app.models.course import ContentType
from app.models.user import User
from app.routers.auth import get_current_instructor, get_current_user
from app.routers.courses import has_file
from app.schemas.base import validate_form
from app.schemas.course import MessageResponse
from app.schemas.lesson import (
    LessonCreate,
    LessonDetail,
    LessonMutationResponse,
    LessonResponse,
    LessonUpdate,
)
from app.services import courses as course_service
from app.services import lessons as lesson_service


router = APIRouter()


async def store_lesson_content(
    content_type: ContentType,
    video: Optional[UploadFile],
    pdf: Optional[UploadFile],
    storage: MediaStorage,
    required: bool,
) -> Optional[str]:
    """
    Store the content file matching ``content_type``.

    Returns None when no file was sent and ``required`` is false.
    """
    if content_type == ContentType.VIDEO:
        expected, other, category = video, pdf, VIDEOS
    else:
        expected, other, category = pdf, video, DOCUMENTS

    if has_file(other):
        raise ValidationFailedError(
            f"Only a {content_type.value} file is accepted for {content_type.value} lessons"
        )
    if not has_file(expected):
        if required:
            label = "Video" if content_type == ContentType.VIDEO else "PDF"
            raise ValidationFailedError(
                f"{label} file is required for {content_type.value} lessons"
            )
        return None

    return await storage.save_upload(expected, category)


@router.get("/course/{course_id}", response_model=List[LessonResponse])
async def list_course_lessons(
    course_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[Any]:
    """
    List a course's lessons in order, with the viewer's completion state.
    """
    return lesson_service.list_course_lessons(db, current_user, course_id)


@router.get("/{lesson_id}", response_model=LessonDetail)
async def get_lesson(
    lesson_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Get a single lesson. Owner or enrolled users only.
    """
    return lesson_service.get_lesson_detail(db, current_user, lesson_id)


@router.post(
    "/course/{course_id}",
    response_model=LessonMutationResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_lesson(
    course_id: int,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    content_type: Optional[str] = Form(None, alias="contentType"),
    order: Optional[str] = Form("0"),
    video: Optional[UploadFile] = File(None),
    pdf: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_instructor),
    storage: MediaStorage = Depends(get_media_storage),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Add a video or PDF lesson to a course.
    """
    course = course_service.get_owned_course(db, current_user, course_id)
    lesson_data = validate_form(
        LessonCreate,
        title=title,
        description=description or "",
        content_type=content_type,
        order_index=order,
    )

    content_url = await store_lesson_content(
        lesson_data.content_type, video, pdf, storage, required=True
    )
    thumbnail_url = None
    if has_file(thumbnail):
        thumbnail_url = await storage.save_upload(thumbnail, THUMBNAILS)

    lesson = lesson_service.create_lesson(db, course, lesson_data, content_url, thumbnail_url)

    return {"message": "Lesson created successfully", "lesson": lesson}


@router.put("/{lesson_id}", response_model=LessonMutationResponse)
async def update_lesson(
    lesson_id: int,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    content_type: Optional[str] = Form(None, alias="contentType"),
    order: Optional[str] = Form(None),
    video: Optional[UploadFile] = File(None),
    pdf: Optional[UploadFile] = File(None),
    thumbnail: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_instructor),
    storage: MediaStorage = Depends(get_media_storage),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Update a lesson. Only the fields and files sent are changed.
    """
    lesson = lesson_service.get_owned_lesson(db, current_user, lesson_id)
    lesson_data = validate_form(
        LessonUpdate,
        title=title,
        description=description,
        content_type=content_type,
        order_index=order,
    )

    new_type = lesson_data.content_type or ContentType(lesson.content_type)
    # Switching the content kind needs a file of the new kind
    content_url = await store_lesson_content(
        new_type,
        video,
        pdf,
        storage,
        required=new_type.value != lesson.content_type,
    )
    thumbnail_url = None
    if has_file(thumbnail):
        thumbnail_url = await storage.save_upload(thumbnail, THUMBNAILS)

    lesson = lesson_service.update_lesson(db, lesson, lesson_data, content_url, thumbnail_url)

    return {"message": "Lesson updated successfully", "lesson": lesson}


@router.delete("/{lesson_id}", response_model=MessageResponse)
async def delete_lesson(
    lesson_id: int,
    current_user: User = Depends(get_current_instructor),
    db: Session = Depends(get_db)
) -> Dict[str, str]:
    """
    Delete a lesson and its progress records.
    """
    lesson = lesson_service.get_owned_lesson(db, current_user, lesson_id)
    lesson_service.delete_lesson(db, lesson)

    return {"message": "Lesson deleted successfully"}
