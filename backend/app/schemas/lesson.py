"""Lesson schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from app.models.course import ContentType
from .base import APIModel


class LessonCreate(APIModel):
    title: str = Field(..., min_length=3, max_length=255)
    description: str = ""
    content_type: ContentType
    order_index: int = 0


class LessonUpdate(APIModel):
    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = None
    content_type: Optional[ContentType] = None
    order_index: Optional[int] = None


class LessonResponse(APIModel):
    id: int
    course_id: int
    title: str
    description: str
    content_type: ContentType
    content_url: str
    thumbnail_url: Optional[str] = None
    order_index: int
    created_at: datetime
    # Completion state of the requesting user, never stored on the lesson
    is_completed: bool = False
    completed_at: Optional[datetime] = None


class LessonCourse(APIModel):
    id: int
    title: str
    thumbnail_url: Optional[str] = None
    instructor_id: int
    instructor_name: str


class LessonDetail(LessonResponse):
    course: LessonCourse


class LessonMutationResponse(APIModel):
    message: str
    lesson: LessonResponse
