"""
Enrollment lifecycle.

An enrollment is created once per (user, course) and never updated or
removed except by deleting the course.
"""

from typing import List
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import AlreadyEnrolledError, SelfEnrollmentDeniedError
from app.models.course import Course
from app.models.progress import Enrollment
from app.models.user import User
from .access import get_course_or_404, get_enrollment, is_enrolled


logger = logging.getLogger(__name__)


def enroll(db: Session, user: User, course_id: int) -> Enrollment:
    """
    Enroll ``user`` in a course.

    Raises:
        NotFoundError: the course does not exist
        SelfEnrollmentDeniedError: the user owns the course
        AlreadyEnrolledError: an enrollment already exists, including one
            committed concurrently and caught by the unique constraint
    """
    course = get_course_or_404(db, course_id)

    if course.is_owned_by(user.id):
        raise SelfEnrollmentDeniedError()

    if is_enrolled(db, user.id, course.id):
        raise AlreadyEnrolledError()

    enrollment = Enrollment(student_id=user.id, course_id=course.id)
    db.add(enrollment)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        # A foreign key failure means the course went away meanwhile
        course = get_course_or_404(db, course_id)
        if get_enrollment(db, user.id, course.id) is None:
            raise
        logger.info(f"Concurrent enrollment detected for user {user.id} in course {course.id}")
        raise AlreadyEnrolledError()

    db.refresh(enrollment)
    logger.info(f"User {user.id} enrolled in course {course.id}")
    return enrollment


def list_enrollments(db: Session, user: User) -> List[Enrollment]:
    """Enrollments held by ``user``, most recent first."""
    return db.query(Enrollment).filter(
        Enrollment.student_id == user.id
    ).options(
        joinedload(Enrollment.course).joinedload(Course.instructor)
    ).order_by(
        Enrollment.enrolled_at.desc(),
        Enrollment.id.desc()
    ).all()


def enrollment_projection(enrollment: Enrollment) -> dict:
    """Enrollment with the read-only view of its course."""
    course = enrollment.course
    return {
        "id": enrollment.id,
        "student_id": enrollment.student_id,
        "course_id": enrollment.course_id,
        "enrolled_at": enrollment.enrolled_at,
        "course": {
            "id": course.id,
            "title": course.title,
            "description": course.description,
            "thumbnail_url": course.thumbnail_url,
            "instructor_name": course.instructor.name,
        },
    }
