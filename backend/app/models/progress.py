"""
Enrollment and progress tracking models for Learnly LMS.

Defines Enrollment (a user's access grant to a course) and LessonProgress
(per-user, per-lesson completion state).
"""

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import (
    Boolean, Integer, DateTime, ForeignKey, UniqueConstraint, Index
)
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from app.core.database import Base


class Enrollment(Base):
    """
    Grants a user full access to a course. Created once, never updated.
    """
    __tablename__ = "enrollments"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # User and course relationship
    student_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )
    course_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False
    )

    # Timestamps
    enrolled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    # Relationships
    student = relationship("User", back_populates="enrollments")
    course = relationship("Course", back_populates="enrollments")

    # Table constraints
    __table_args__ = (
        UniqueConstraint("student_id", "course_id", name="uq_enrollment_student_course"),
        Index("idx_enrollment_course", "course_id"),
    )

    def __repr__(self) -> str:
        return f"<Enrollment(student_id={self.student_id}, course_id={self.course_id})>"


class LessonProgress(Base):
    """
    Completion state of one lesson for one user.

    ``completed_at`` is set exactly when ``is_completed`` is true.
    """
    __tablename__ = "lesson_progress"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # User and lesson relationship
    student_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )
    lesson_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("lessons.id", ondelete="CASCADE"),
        nullable=False
    )

    # Completion state
    is_completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    # Relationships
    student = relationship("User", back_populates="lesson_progress")
    lesson = relationship("Lesson", back_populates="progress_records")

    # Table constraints
    __table_args__ = (
        UniqueConstraint("student_id", "lesson_id", name="uq_lesson_progress_student_lesson"),
        Index("idx_lesson_progress_student_completed", "student_id", "is_completed"),
    )

    def __repr__(self) -> str:
        return (
            f"<LessonProgress(student_id={self.student_id}, lesson_id={self.lesson_id}, "
            f"is_completed={self.is_completed})>"
        )

    def set_completed(self, completed: bool, when: Optional[datetime] = None) -> None:
        """Set the completion flag, keeping the timestamp in step with it."""
        self.is_completed = completed
        self.completed_at = (when or datetime.now(timezone.utc)) if completed else None

    def toggle(self, when: Optional[datetime] = None) -> None:
        self.set_completed(not self.is_completed, when)
