"""
Lesson content delivery and management.

Reads go through the same owner-or-enrolled gate as courses and attach the
viewer's own completion state. Writes are restricted to the course owner.
"""

from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import ForbiddenError
from app.models.course import Course, Lesson
from app.models.progress import LessonProgress
from app.models.user import User
from app.schemas.lesson import LessonCreate, LessonResponse, LessonUpdate
from .access import (
    ensure_course_access,
    ensure_lesson_access,
    get_lesson_or_404,
)


logger = logging.getLogger(__name__)


def lesson_view(lesson: Lesson, progress: Optional[LessonProgress]) -> LessonResponse:
    """Lesson payload personalized with the viewer's completion state."""
    view = LessonResponse.model_validate(lesson)
    if progress is None:
        return view
    return view.model_copy(update={
        "is_completed": progress.is_completed,
        "completed_at": progress.completed_at,
    })


def _viewer_progress(db: Session, user: User, lesson_ids: List[int]) -> dict:
    if not lesson_ids:
        return {}
    records = db.query(LessonProgress).filter(
        LessonProgress.student_id == user.id,
        LessonProgress.lesson_id.in_(lesson_ids)
    ).all()
    return {record.lesson_id: record for record in records}


def list_course_lessons(db: Session, user: User, course_id: int) -> List[LessonResponse]:
    """Lessons of a course in ascending order, gated by owner-or-enrolled."""
    course = ensure_course_access(db, user, course_id)
    lessons = course.lessons
    completion = _viewer_progress(db, user, [lesson.id for lesson in lessons])
    return [lesson_view(lesson, completion.get(lesson.id)) for lesson in lessons]


def get_lesson_detail(db: Session, user: User, lesson_id: int) -> dict:
    """Single lesson with its parent course summary and viewer completion."""
    lesson = ensure_lesson_access(db, user, lesson_id)
    completion = _viewer_progress(db, user, [lesson.id])
    course = lesson.course

    view = lesson_view(lesson, completion.get(lesson.id))
    return {
        **view.model_dump(),
        "course": {
            "id": course.id,
            "title": course.title,
            "thumbnail_url": course.thumbnail_url,
            "instructor_id": course.instructor_id,
            "instructor_name": course.instructor.name,
        },
    }


def get_owned_lesson(db: Session, user: User, lesson_id: int) -> Lesson:
    """Lesson whose course ``user`` owns; not-found is reported before ownership."""
    lesson = get_lesson_or_404(db, lesson_id)
    if not lesson.course.is_owned_by(user.id):
        raise ForbiddenError("Not authorized to modify this lesson")
    return lesson


def create_lesson(
    db: Session,
    course: Course,
    data: LessonCreate,
    content_url: str,
    thumbnail_url: Optional[str] = None,
) -> Lesson:
    lesson = Lesson(
        course_id=course.id,
        title=data.title,
        description=data.description or "",
        content_type=data.content_type.value,
        content_url=content_url,
        thumbnail_url=thumbnail_url,
        order_index=data.order_index,
    )
    db.add(lesson)
    db.commit()
    db.refresh(lesson)

    logger.info(f"Lesson {lesson.id} created in course {course.id}")
    return lesson


def update_lesson(
    db: Session,
    lesson: Lesson,
    data: LessonUpdate,
    content_url: Optional[str] = None,
    thumbnail_url: Optional[str] = None,
) -> Lesson:
    """
    Apply a partial update. New media URLs replace the stored references;
    the previous objects are left in storage.
    """
    update_data = data.model_dump(exclude_unset=True, exclude_none=True)
    if "content_type" in update_data:
        update_data["content_type"] = data.content_type.value

    for field, value in update_data.items():
        setattr(lesson, field, value)

    if content_url:
        lesson.content_url = content_url
    if thumbnail_url:
        lesson.thumbnail_url = thumbnail_url

    db.commit()
    db.refresh(lesson)

    logger.info(f"Lesson {lesson.id} updated")
    return lesson


def delete_lesson(db: Session, lesson: Lesson) -> None:
    """Delete a lesson together with every progress row tied to it."""
    lesson_id, course_id = lesson.id, lesson.course_id
    db.delete(lesson)
    db.commit()
    logger.info(f"Lesson {lesson_id} deleted from course {course_id}")
