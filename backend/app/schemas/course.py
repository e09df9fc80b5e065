"""Course schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .base import APIModel
from .lesson import LessonResponse


class CourseCreate(APIModel):
    title: str = Field(..., min_length=3, max_length=255)
    description: str = Field(..., min_length=10)


class CourseUpdate(CourseCreate):
    pass


class InstructorSummary(APIModel):
    id: int
    name: str


class CourseCounts(APIModel):
    lessons: int = 0
    enrollments: int = 0


class CourseListItem(APIModel):
    id: int
    title: str
    description: str
    thumbnail_url: Optional[str] = None
    instructor: InstructorSummary


class CourseDetail(CourseListItem):
    created_at: datetime


class CoursePublicDetail(CourseDetail):
    """Partial view, visible without authentication."""
    counts: CourseCounts


class CourseWithLessons(CoursePublicDetail):
    lessons: List[LessonResponse]


class InstructorCourse(APIModel):
    id: int
    title: str
    description: str
    thumbnail_url: Optional[str] = None
    created_at: datetime
    counts: CourseCounts


class CourseMutationResponse(APIModel):
    message: str
    course: CourseDetail


class MessageResponse(APIModel):
    message: str
