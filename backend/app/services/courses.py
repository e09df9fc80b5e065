"""
Course catalogue and instructor course management.
"""

from typing import List, Optional
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import ForbiddenError
from app.models.course import Course, Lesson
from app.models.progress import Enrollment
from app.models.user import User
from app.schemas.course import CourseCreate, CourseUpdate
from .access import ensure_course_access, get_course_or_404
from .lessons import list_course_lessons


logger = logging.getLogger(__name__)


def course_counts(db: Session, course_id: int) -> dict:
    lessons = db.query(func.count(Lesson.id)).filter(
        Lesson.course_id == course_id
    ).scalar() or 0
    enrollments = db.query(func.count(Enrollment.id)).filter(
        Enrollment.course_id == course_id
    ).scalar() or 0
    return {"lessons": lessons, "enrollments": enrollments}


def _with_counts(db: Session, course: Course) -> dict:
    return {
        "id": course.id,
        "title": course.title,
        "description": course.description,
        "thumbnail_url": course.thumbnail_url,
        "created_at": course.created_at,
        "instructor": course.instructor,
        "counts": course_counts(db, course.id),
    }


def list_courses(db: Session) -> List[Course]:
    """All courses, newest first. Public."""
    return db.query(Course).options(
        joinedload(Course.instructor)
    ).order_by(
        Course.created_at.desc(),
        Course.id.desc()
    ).all()


def get_public_course(db: Session, course_id: int) -> dict:
    """Partial course view with counts. Needs no authorization."""
    return _with_counts(db, get_course_or_404(db, course_id))


def get_course_with_lessons(db: Session, user: User, course_id: int) -> dict:
    """Full course view for its owner or an enrolled user."""
    course = ensure_course_access(db, user, course_id)
    return {
        **_with_counts(db, course),
        "lessons": list_course_lessons(db, user, course.id),
    }


def list_instructor_courses(db: Session, user: User) -> List[dict]:
    courses = db.query(Course).filter(
        Course.instructor_id == user.id
    ).order_by(
        Course.created_at.desc(),
        Course.id.desc()
    ).all()
    return [_with_counts(db, course) for course in courses]


def get_owned_course(db: Session, user: User, course_id: int) -> Course:
    """Course owned by ``user``; not-found is reported before ownership."""
    course = get_course_or_404(db, course_id)
    if not course.is_owned_by(user.id):
        raise ForbiddenError("You are not authorized to modify this course")
    return course


def create_course(
    db: Session,
    user: User,
    data: CourseCreate,
    thumbnail_url: Optional[str] = None,
) -> Course:
    course = Course(
        title=data.title,
        description=data.description,
        thumbnail_url=thumbnail_url,
        instructor_id=user.id,
    )
    db.add(course)
    db.commit()
    db.refresh(course)

    logger.info(f"Course {course.id} created by instructor {user.id}")
    return course


def update_course(
    db: Session,
    course: Course,
    data: CourseUpdate,
    thumbnail_url: Optional[str] = None,
) -> Course:
    course.title = data.title
    course.description = data.description
    if thumbnail_url:
        course.thumbnail_url = thumbnail_url

    db.commit()
    db.refresh(course)

    logger.info(f"Course {course.id} updated")
    return course


def delete_course(db: Session, course: Course) -> None:
    """
    Delete a course. Lessons, enrollments and lesson progress go with it
    in the same transaction.
    """
    course_id = course.id
    db.delete(course)
    db.commit()
    logger.info(f"Course {course_id} deleted")
