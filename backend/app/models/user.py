"""
User model for Learnly LMS.

Defines the User table with authentication fields, the account role,
and relationships to authored courses, enrollments and lesson progress.
"""

from datetime import datetime
from enum import Enum
from sqlalchemy import Integer, String, DateTime, CheckConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from app.core.database import Base


class UserRole(str, Enum):
    """Account roles. A role is fixed when the account is created."""
    STUDENT = "STUDENT"
    INSTRUCTOR = "INSTRUCTOR"


class User(Base):
    """
    User model for authentication and profile management.
    """
    __tablename__ = "users"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # Profile and authentication fields
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20),
        default=UserRole.STUDENT.value,
        nullable=False
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )

    # Relationships
    courses = relationship(
        "Course",
        back_populates="instructor",
        cascade="all, delete-orphan"
    )
    enrollments = relationship(
        "Enrollment",
        back_populates="student",
        cascade="all, delete-orphan"
    )
    lesson_progress = relationship(
        "LessonProgress",
        back_populates="student",
        cascade="all, delete-orphan"
    )

    # Table constraints
    __table_args__ = (
        CheckConstraint("role IN ('STUDENT', 'INSTRUCTOR')", name="check_user_role"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"

    @property
    def is_instructor(self) -> bool:
        return self.role == UserRole.INSTRUCTOR.value

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.STUDENT.value
