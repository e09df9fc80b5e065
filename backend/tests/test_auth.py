"""Tests for authentication endpoints and the identity gate."""

from datetime import timedelta

from fastapi.testclient import TestClient

from app.core.security import create_access_token, verify_token
from app.models import UserRole

from conftest import PASSWORD


class TestSignup:
    """Tests for POST /api/auth/signup."""

    def test_creates_account_and_returns_token(self, client: TestClient) -> None:
        """Signup should return the user, a token, and set the session cookie."""
        response = client.post(
            "/api/auth/signup",
            json={
                "name": "Grace",
                "email": "grace@example.com",
                "password": "hopper123",
                "role": "INSTRUCTOR",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["user"]["email"] == "grace@example.com"
        assert data["user"]["role"] == "INSTRUCTOR"
        assert "createdAt" in data["user"]
        assert "hashedPassword" not in data["user"]
        assert verify_token(data["token"])["role"] == "INSTRUCTOR"
        assert "jwt" in response.headers.get("set-cookie", "")

    def test_duplicate_email(self, client: TestClient, student) -> None:
        """A taken email should be rejected."""
        response = client.post(
            "/api/auth/signup",
            json={
                "name": "Someone",
                "email": student.email,
                "password": "password1",
                "role": "STUDENT",
            },
        )
        assert response.status_code == 400
        assert response.json()["message"] == "User already exists"

    def test_invalid_payload(self, client: TestClient) -> None:
        """Malformed signups should be reported as validation failures."""
        response = client.post(
            "/api/auth/signup",
            json={"name": "X", "email": "not-an-email", "password": "1", "role": "ADMIN"},
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "validation_failed"
        assert len(data["details"]) >= 1


class TestLogin:
    """Tests for POST /api/auth/login."""

    def test_valid_credentials(self, client: TestClient, student) -> None:
        """Correct credentials should return a token for the user."""
        response = client.post(
            "/api/auth/login",
            json={"email": student.email, "password": PASSWORD},
        )
        assert response.status_code == 200
        assert verify_token(response.json()["token"])["sub"] == str(student.id)

    def test_wrong_password(self, client: TestClient, student) -> None:
        """A wrong password should be unauthenticated."""
        response = client.post(
            "/api/auth/login",
            json={"email": student.email, "password": "wrong-password"},
        )
        assert response.status_code == 401
        assert response.json()["error"] == "unauthenticated"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_unknown_email(self, client: TestClient) -> None:
        """An unknown email should get the same error as a wrong password."""
        response = client.post(
            "/api/auth/login",
            json={"email": "nobody@example.com", "password": "whatever1"},
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"


class TestCurrentUser:
    """Tests for GET /api/auth/me and token resolution."""

    def test_bearer_token(self, client: TestClient, student, headers_for) -> None:
        """The bearer header should resolve to the user."""
        response = client.get("/api/auth/me", headers=headers_for(student))
        assert response.status_code == 200
        assert response.json()["user"]["id"] == student.id

    def test_cookie_fallback(self, client: TestClient, student) -> None:
        """The session cookie should be used when no header is sent."""
        client.cookies.set("jwt", create_access_token(subject=student.id))
        response = client.get("/api/auth/me")
        assert response.status_code == 200
        assert response.json()["user"]["email"] == student.email

    def test_missing_token(self, client: TestClient) -> None:
        """No credentials should be unauthenticated."""
        response = client.get("/api/auth/me")
        assert response.status_code == 401
        assert response.json()["message"] == "No authentication token found"

    def test_expired_token(self, client: TestClient, student) -> None:
        """An expired token should be rejected."""
        token = create_access_token(subject=student.id, expires_delta=timedelta(seconds=-1))
        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"

    def test_deleted_user(self, client: TestClient, db, make_user) -> None:
        """A token for a removed account should be rejected."""
        user = make_user(UserRole.STUDENT)
        token = create_access_token(subject=user.id)
        db.delete(user)
        db.commit()

        response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["message"] == "User no longer exists"

    def test_logout_clears_cookie(self, client: TestClient) -> None:
        """Logout should expire the session cookie."""
        response = client.post("/api/auth/logout")
        assert response.status_code == 200
        assert "jwt=" in response.headers.get("set-cookie", "")


class TestRoleGates:
    """Tests for the instructor and student dependencies."""

    def test_student_cannot_use_instructor_routes(self, client: TestClient, student, headers_for) -> None:
        """Instructor-only routes should be forbidden to students."""
        response = client.get("/api/courses/instructor/my-courses", headers=headers_for(student))
        assert response.status_code == 403
        assert response.json()["message"] == "Access denied, Instructor only"

    def test_instructor_cannot_use_student_dashboard(self, client: TestClient, instructor, headers_for) -> None:
        """The student dashboard should be forbidden to instructors."""
        response = client.get("/api/dashboard/student", headers=headers_for(instructor))
        assert response.status_code == 403
