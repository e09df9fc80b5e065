"""Shared fixtures for the Learnly LMS test suite."""

import os
import tempfile

# Settings are read at import time
os.environ["TESTING"] = "True"
os.environ["MEDIA_ROOT"] = tempfile.mkdtemp(prefix="learnly-media-")
os.environ["SECRET_KEY"] = "test-secret-key"

from collections.abc import Callable, Generator  # noqa: E402
from itertools import count  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.core.database import Base, SessionLocal, engine, get_db  # noqa: E402
from app.core.security import create_access_token, get_password_hash  # noqa: E402
from app.core.storage import MediaStorage, get_media_storage  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Course, Enrollment, Lesson, User, UserRole  # noqa: E402


PASSWORD = "secret123"
PASSWORD_HASH = get_password_hash(PASSWORD)

_ids = count(1)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Fresh schema and session per test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def storage(tmp_path) -> MediaStorage:
    return MediaStorage(root=tmp_path, base_url="/media", max_size=1024)


@pytest.fixture
def client(db: Session, storage: MediaStorage) -> Generator[TestClient, None, None]:
    def _get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_media_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    def _make_user(role: UserRole = UserRole.STUDENT, name: str | None = None) -> User:
        n = next(_ids)
        user = User(
            name=name or f"User {n}",
            email=f"user{n}@example.com",
            hashed_password=PASSWORD_HASH,
            role=role.value,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def instructor(make_user) -> User:
    return make_user(UserRole.INSTRUCTOR, name="Ada Instructor")


@pytest.fixture
def student(make_user) -> User:
    return make_user(UserRole.STUDENT, name="Sam Student")


@pytest.fixture
def make_course(db: Session) -> Callable[..., Course]:
    def _make_course(owner: User, title: str = "Algebra I") -> Course:
        course = Course(
            title=title,
            description="Linear equations and inequalities",
            instructor_id=owner.id,
        )
        db.add(course)
        db.commit()
        db.refresh(course)
        return course

    return _make_course


@pytest.fixture
def make_lesson(db: Session) -> Callable[..., Lesson]:
    def _make_lesson(course: Course, order_index: int = 0, title: str | None = None) -> Lesson:
        lesson = Lesson(
            course_id=course.id,
            title=title or f"Lesson {order_index}",
            content_type="video",
            content_url=f"/media/videos/lesson-{next(_ids)}.mp4",
            order_index=order_index,
        )
        db.add(lesson)
        db.commit()
        db.refresh(lesson)
        return lesson

    return _make_lesson


@pytest.fixture
def make_enrollment(db: Session) -> Callable[..., Enrollment]:
    def _make_enrollment(user: User, course: Course) -> Enrollment:
        enrollment = Enrollment(student_id=user.id, course_id=course.id)
        db.add(enrollment)
        db.commit()
        db.refresh(enrollment)
        return enrollment

    return _make_enrollment


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(subject=user.id, additional_claims={"role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def headers_for() -> Callable[[User], dict[str, str]]:
    """Bearer headers for a user."""
    return auth_headers
