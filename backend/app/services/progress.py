"""
Lesson completion and progress aggregation.

Handles:
- Toggling a user's completion state for a lesson
- Completion percentage per (user, course)
- Course progress payloads and the student/instructor dashboards
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List
import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import NotEnrolledError
from app.models.course import Course, Lesson
from app.models.progress import Enrollment, LessonProgress
from app.models.user import User
from .access import ensure_course_access, get_lesson_or_404, is_enrolled
from .enrollment import list_enrollments
from .lessons import lesson_view


logger = logging.getLogger(__name__)


def completion_percentage(completed: int, total: int) -> int:
    """
    Rounded percentage of completed lessons.

    Rounds half up in integer arithmetic, so 1 of 8 gives 13.
    Returns 0 for a course without lessons.
    """
    if total <= 0:
        return 0
    return (200 * completed + total) // (2 * total)


@dataclass(frozen=True)
class ProgressSummary:
    total: int
    completed: int

    @property
    def percentage(self) -> int:
        return completion_percentage(self.completed, self.total)

    @property
    def is_fully_completed(self) -> bool:
        return self.total > 0 and self.percentage == 100

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "completed": self.completed,
            "percentage": self.percentage,
            "is_fully_completed": self.is_fully_completed,
        }


def count_lessons(db: Session, course_id: int) -> int:
    return db.query(func.count(Lesson.id)).filter(
        Lesson.course_id == course_id
    ).scalar() or 0


def count_completed_lessons(db: Session, student_id: int, course_id: int) -> int:
    return db.query(func.count(LessonProgress.id)).join(
        Lesson, LessonProgress.lesson_id == Lesson.id
    ).filter(
        LessonProgress.student_id == student_id,
        Lesson.course_id == course_id,
        LessonProgress.is_completed.is_(True)
    ).scalar() or 0


def summarize_course_progress(db: Session, student_id: int, course_id: int) -> ProgressSummary:
    return ProgressSummary(
        total=count_lessons(db, course_id),
        completed=count_completed_lessons(db, student_id, course_id),
    )


def progress_by_lesson(db: Session, student_id: int, course_id: int) -> Dict[int, LessonProgress]:
    """Progress rows of ``student_id`` in a course, keyed by lesson id."""
    records = db.query(LessonProgress).join(
        Lesson, LessonProgress.lesson_id == Lesson.id
    ).filter(
        LessonProgress.student_id == student_id,
        Lesson.course_id == course_id
    ).all()
    return {record.lesson_id: record for record in records}


def _get_progress(db: Session, student_id: int, lesson_id: int) -> LessonProgress | None:
    return db.query(LessonProgress).filter(
        LessonProgress.student_id == student_id,
        LessonProgress.lesson_id == lesson_id
    ).first()


def toggle_completion(db: Session, user: User, lesson_id: int) -> LessonProgress:
    """
    Flip the completion state of a lesson for ``user``.

    The first toggle creates the row marked complete. Owning the course
    does not bypass the enrollment requirement here.

    Raises:
        NotFoundError: the lesson does not exist
        NotEnrolledError: the user is not enrolled in the lesson's course
    """
    lesson = get_lesson_or_404(db, lesson_id)

    if not is_enrolled(db, user.id, lesson.course_id):
        raise NotEnrolledError("Not enrolled in this course")

    now = datetime.now(timezone.utc)
    progress = _get_progress(db, user.id, lesson.id)

    if progress is not None:
        progress.toggle(now)
        db.commit()
    else:
        progress = LessonProgress(student_id=user.id, lesson_id=lesson.id)
        progress.set_completed(True, now)
        db.add(progress)
        try:
            db.commit()
        except IntegrityError:
            # Another request created the row first; flip the winner instead
            db.rollback()
            lesson = get_lesson_or_404(db, lesson_id)
            progress = _get_progress(db, user.id, lesson.id)
            if progress is None:
                raise
            progress.toggle(now)
            db.commit()

    db.refresh(progress)
    logger.info(
        f"User {user.id} set lesson {lesson.id} "
        f"{'complete' if progress.is_completed else 'incomplete'}"
    )
    return progress


def get_course_progress(db: Session, user: User, course_id: int) -> dict:
    """Course, its lessons with the user's completion state, and the summary."""
    course = ensure_course_access(db, user, course_id)
    completion = progress_by_lesson(db, user.id, course.id)

    return {
        "course": course,
        "lessons": [lesson_view(lesson, completion.get(lesson.id)) for lesson in course.lessons],
        "progress": summarize_course_progress(db, user.id, course.id).to_dict(),
    }


def enrolled_courses(db: Session, enrollments: List[Enrollment]) -> List[dict]:
    """Enrolled courses with the enrollment holder's progress in each."""
    return [
        {
            "enrollment_id": enrollment.id,
            "enrolled_at": enrollment.enrolled_at,
            "course": enrollment.course,
            "progress": summarize_course_progress(
                db, enrollment.student_id, enrollment.course_id
            ).to_dict(),
        }
        for enrollment in enrollments
    ]


def student_dashboard(db: Session, user: User) -> dict:
    """Progress rollup across every enrollment held by ``user``."""
    enrollments = list_enrollments(db, user)

    courses = []
    for enrollment in enrollments:
        course = enrollment.course
        courses.append({
            "course_id": course.id,
            "course_title": course.title,
            "course_description": course.description,
            "course_thumbnail": course.thumbnail_url,
            "instructor_name": course.instructor.name,
            "enrolled_at": enrollment.enrolled_at,
            "progress": summarize_course_progress(db, user.id, course.id).to_dict(),
        })

    return {
        "total_enrolled_courses": len(enrollments),
        "courses": courses,
    }


def instructor_dashboard(db: Session, user: User) -> List[dict]:
    """
    Progress of every enrolled student in every course ``user`` owns.

    Each (student, course) pair is summarized on its own.
    """
    courses = db.query(Course).filter(
        Course.instructor_id == user.id
    ).options(
        joinedload(Course.enrollments).joinedload(Enrollment.student)
    ).order_by(
        Course.created_at.desc(),
        Course.id.desc()
    ).all()

    dashboard = []
    for course in courses:
        enrollments = sorted(course.enrollments, key=lambda e: (e.enrolled_at, e.id))
        students = [
            {
                "student": {
                    "id": enrollment.student.id,
                    "name": enrollment.student.name,
                    "email": enrollment.student.email,
                },
                "enrolled_at": enrollment.enrolled_at,
                "progress": summarize_course_progress(
                    db, enrollment.student_id, course.id
                ).to_dict(),
            }
            for enrollment in enrollments
        ]

        dashboard.append({
            "course_id": course.id,
            "course_title": course.title,
            "course_description": course.description,
            "course_thumbnail": course.thumbnail_url,
            "total_lessons": count_lessons(db, course.id),
            "total_students": len(enrollments),
            "students": students,
        })

    return dashboard
