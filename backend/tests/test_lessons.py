"""Tests for lesson delivery and lesson management."""

from fastapi.testclient import TestClient

from app.models import LessonProgress, UserRole


VIDEO = ("intro.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")
PDF = ("notes.pdf", b"%PDF-1.4", "application/pdf")


class TestLessonReads:
    """Tests for lesson reads behind the owner-or-enrolled gate."""

    def test_lessons_sorted_by_order_with_ties(
        self, client: TestClient, instructor, make_course, make_lesson, headers_for
    ) -> None:
        """Lessons sort ascending by order, tolerating gaps and ties."""
        course = make_course(instructor)
        late = make_lesson(course, 10, title="Late")
        tie_a = make_lesson(course, 2, title="Tie A")
        tie_b = make_lesson(course, 2, title="Tie B")
        early = make_lesson(course, 0, title="Early")

        response = client.get(f"/api/lessons/course/{course.id}", headers=headers_for(instructor))
        assert response.status_code == 200
        assert [lesson["id"] for lesson in response.json()] == [early.id, tie_a.id, tie_b.id, late.id]

    def test_enrolled_user_sees_own_completion(
        self, client: TestClient, instructor, student, make_user, make_course, make_lesson,
        make_enrollment, headers_for
    ) -> None:
        """Completion flags reflect the requesting user only."""
        course = make_course(instructor)
        lesson = make_lesson(course, 0)
        other = make_user(UserRole.STUDENT)
        make_enrollment(student, course)
        make_enrollment(other, course)
        client.post(f"/api/enrollments/lesson/{lesson.id}/toggle", headers=headers_for(student))

        mine = client.get(f"/api/lessons/{lesson.id}", headers=headers_for(student)).json()
        theirs = client.get(f"/api/lessons/{lesson.id}", headers=headers_for(other)).json()
        assert mine["isCompleted"] is True
        assert mine["completedAt"] is not None
        assert theirs["isCompleted"] is False
        assert theirs["course"]["instructorName"] == "Ada Instructor"

    def test_single_lesson_requires_enrollment(
        self, client: TestClient, instructor, student, make_course, make_lesson, headers_for
    ) -> None:
        """Unenrolled users cannot read a lesson."""
        lesson = make_lesson(make_course(instructor), 0)

        response = client.get(f"/api/lessons/{lesson.id}", headers=headers_for(student))
        assert response.status_code == 403
        assert response.json()["error"] == "not_enrolled"

    def test_missing_lesson(self, client: TestClient, student, headers_for) -> None:
        """Unknown lessons are 404 before any access check."""
        response = client.get("/api/lessons/31337", headers=headers_for(student))
        assert response.status_code == 404
        assert response.json()["message"] == "Lesson not found"


class TestLessonManagement:
    """Tests for instructor lesson writes."""

    def test_create_video_lesson(
        self, client: TestClient, instructor, make_course, headers_for
    ) -> None:
        """A video lesson stores its file and reports the URL."""
        course = make_course(instructor)

        response = client.post(
            f"/api/lessons/course/{course.id}",
            data={"title": "Introduction", "contentType": "video", "order": "3"},
            files={"video": VIDEO},
            headers=headers_for(instructor),
        )
        assert response.status_code == 201
        lesson = response.json()["lesson"]
        assert lesson["contentType"] == "video"
        assert lesson["orderIndex"] == 3
        assert lesson["contentUrl"].startswith("/media/videos/")
        assert lesson["isCompleted"] is False

    def test_create_requires_matching_file(
        self, client: TestClient, instructor, make_course, headers_for
    ) -> None:
        """A pdf lesson needs a pdf file."""
        course = make_course(instructor)

        response = client.post(
            f"/api/lessons/course/{course.id}",
            data={"title": "Reading", "contentType": "pdf"},
            headers=headers_for(instructor),
        )
        assert response.status_code == 400
        assert response.json()["message"] == "PDF file is required for pdf lessons"

    def test_create_rejects_wrong_file_kind(
        self, client: TestClient, instructor, make_course, headers_for
    ) -> None:
        """Sending a video for a pdf lesson is rejected."""
        course = make_course(instructor)

        response = client.post(
            f"/api/lessons/course/{course.id}",
            data={"title": "Reading", "contentType": "pdf"},
            files={"video": VIDEO},
            headers=headers_for(instructor),
        )
        assert response.status_code == 400

    def test_create_rejects_wrong_mime_type(
        self, client: TestClient, instructor, make_course, headers_for
    ) -> None:
        """The declared type must match the content kind."""
        course = make_course(instructor)

        response = client.post(
            f"/api/lessons/course/{course.id}",
            data={"title": "Reading", "contentType": "pdf"},
            files={"pdf": ("notes.txt", b"plain text", "text/plain")},
            headers=headers_for(instructor),
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_failed"

    def test_create_in_foreign_course(
        self, client: TestClient, instructor, make_user, make_course, headers_for
    ) -> None:
        """Instructors cannot add lessons to courses they do not own."""
        course = make_course(instructor)

        response = client.post(
            f"/api/lessons/course/{course.id}",
            data={"title": "Introduction", "contentType": "video"},
            files={"video": VIDEO},
            headers=headers_for(make_user(UserRole.INSTRUCTOR)),
        )
        assert response.status_code == 403

    def test_update_switching_kind_needs_file(
        self, client: TestClient, instructor, make_course, make_lesson, headers_for
    ) -> None:
        """Changing a video lesson to pdf requires a pdf upload."""
        lesson = make_lesson(make_course(instructor), 0)

        refused = client.put(
            f"/api/lessons/{lesson.id}",
            data={"contentType": "pdf"},
            headers=headers_for(instructor),
        )
        assert refused.status_code == 400

        accepted = client.put(
            f"/api/lessons/{lesson.id}",
            data={"contentType": "pdf", "title": "Now a reading"},
            files={"pdf": PDF},
            headers=headers_for(instructor),
        )
        assert accepted.status_code == 200
        data = accepted.json()["lesson"]
        assert data["contentType"] == "pdf"
        assert data["title"] == "Now a reading"
        assert data["contentUrl"].startswith("/media/documents/")

    def test_partial_update_keeps_content(
        self, client: TestClient, instructor, make_course, make_lesson, headers_for
    ) -> None:
        """Fields that are not sent stay unchanged."""
        lesson = make_lesson(make_course(instructor), 0)
        original_url = lesson.content_url

        response = client.put(
            f"/api/lessons/{lesson.id}",
            data={"order": "5"},
            headers=headers_for(instructor),
        )
        assert response.status_code == 200
        data = response.json()["lesson"]
        assert data["orderIndex"] == 5
        assert data["contentUrl"] == original_url
        assert data["title"] == "Lesson 0"

    def test_delete_lesson_removes_progress(
        self, client: TestClient, db, instructor, student, make_course, make_lesson,
        make_enrollment, headers_for
    ) -> None:
        """Deleting a lesson drops every progress row tied to it."""
        course = make_course(instructor)
        lesson = make_lesson(course, 0)
        lesson_id = lesson.id
        make_enrollment(student, course)
        client.post(f"/api/enrollments/lesson/{lesson_id}/toggle", headers=headers_for(student))

        response = client.delete(f"/api/lessons/{lesson_id}", headers=headers_for(instructor))
        assert response.status_code == 200
        assert db.query(LessonProgress).filter(LessonProgress.lesson_id == lesson_id).count() == 0
