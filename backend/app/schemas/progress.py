"""Enrollment, progress and dashboard schemas."""

from datetime import datetime
from typing import List, Optional

from .base import APIModel
from .course import CourseDetail
from .lesson import LessonResponse


class ProgressOut(APIModel):
    total: int
    completed: int
    percentage: int
    is_fully_completed: bool


class EnrollmentCourse(APIModel):
    id: int
    title: str
    description: str
    thumbnail_url: Optional[str] = None
    instructor_name: str


class EnrollmentOut(APIModel):
    id: int
    student_id: int
    course_id: int
    enrolled_at: datetime
    course: EnrollmentCourse


class EnrollResponse(APIModel):
    message: str
    enrollment: EnrollmentOut


class EnrollmentStatus(APIModel):
    course_id: int
    is_enrolled: bool


class ToggleResponse(APIModel):
    message: str
    is_completed: bool
    completed_at: Optional[datetime] = None


class EnrolledCourse(APIModel):
    enrollment_id: int
    enrolled_at: datetime
    course: CourseDetail
    progress: ProgressOut


class CourseProgressResponse(APIModel):
    course: CourseDetail
    lessons: List[LessonResponse]
    progress: ProgressOut


class StudentDashboardCourse(APIModel):
    course_id: int
    course_title: str
    course_description: str
    course_thumbnail: Optional[str] = None
    instructor_name: str
    enrolled_at: datetime
    progress: ProgressOut


class StudentDashboard(APIModel):
    total_enrolled_courses: int
    courses: List[StudentDashboardCourse]


class StudentRef(APIModel):
    id: int
    name: str
    email: str


class StudentProgress(APIModel):
    student: StudentRef
    enrolled_at: datetime
    progress: ProgressOut


class InstructorDashboardCourse(APIModel):
    course_id: int
    course_title: str
    course_description: str
    course_thumbnail: Optional[str] = None
    total_lessons: int
    total_students: int
    students: List[StudentProgress]

