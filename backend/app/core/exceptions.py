"""
Domain errors for Learnly LMS.

Every rule violation raised by the services is an ``LMSError`` carrying a
stable ``code`` and the HTTP status it maps to. The handlers registered in
``app.main`` render them as ``{"error": code, "message": ...}``.
"""

from typing import Any, Optional

from fastapi import status


class LMSError(Exception):
    """Base error for domain rule violations."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"error": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class NotFoundError(LMSError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Resource not found"


class ForbiddenError(LMSError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "You are not allowed to perform this action"


class NotEnrolledError(ForbiddenError):
    code = "not_enrolled"
    default_message = "You must enroll in this course to view its content"


class AlreadyEnrolledError(LMSError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "already_enrolled"
    default_message = "Already enrolled in this course"


class SelfEnrollmentDeniedError(LMSError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "self_enrollment_denied"
    default_message = "Instructors cannot enroll in their own courses"


class ValidationFailedError(LMSError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_failed"
    default_message = "Validation failed"


class UnauthenticatedError(LMSError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "Could not validate credentials"
