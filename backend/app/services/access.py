"""
Course access authorization.

A user may see a course's full content when they own it or hold an
enrollment in it. The check hits the database on every call.
"""

from sqlalchemy.orm import Session

from app.core.exceptions import NotEnrolledError, NotFoundError
from app.models.course import Course, Lesson
from app.models.progress import Enrollment
from app.models.user import User


def get_course_or_404(db: Session, course_id: int) -> Course:
    course = db.get(Course, course_id)
    if course is None:
        raise NotFoundError("Course not found")
    return course


def get_lesson_or_404(db: Session, lesson_id: int) -> Lesson:
    lesson = db.get(Lesson, lesson_id)
    if lesson is None:
        raise NotFoundError("Lesson not found")
    return lesson


def get_enrollment(db: Session, user_id: int, course_id: int) -> Enrollment | None:
    return db.query(Enrollment).filter(
        Enrollment.student_id == user_id,
        Enrollment.course_id == course_id
    ).first()


def is_enrolled(db: Session, user_id: int, course_id: int) -> bool:
    return get_enrollment(db, user_id, course_id) is not None


def can_access_course(db: Session, user: User, course: Course) -> bool:
    """Owner or enrolled user."""
    if course.is_owned_by(user.id):
        return True
    return is_enrolled(db, user.id, course.id)


def ensure_course_access(db: Session, user: User, course_id: int) -> Course:
    """
    Return the course if ``user`` may view its full content.

    Raises:
        NotFoundError: the course does not exist (checked first)
        NotEnrolledError: the user neither owns nor is enrolled in it
    """
    course = get_course_or_404(db, course_id)
    if not can_access_course(db, user, course):
        raise NotEnrolledError("You must enroll in this course to view lessons")
    return course


def ensure_lesson_access(db: Session, user: User, lesson_id: int) -> Lesson:
    """Same rule as ``ensure_course_access``, applied via the parent course."""
    lesson = get_lesson_or_404(db, lesson_id)
    if not can_access_course(db, user, lesson.course):
        raise NotEnrolledError("You must enroll in this course to view this lesson")
    return lesson
