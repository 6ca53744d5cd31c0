# services/exceptions.py — LMS 도메인 예외
"""
LMS 도메인 예외

서비스 계층에서 발생시키고 블루프린트에서 flash 메시지로 변환한다.
"""
from typing import Optional, Dict, Any


class LmsError(Exception):
    """Base exception for LMS operations."""

    def __init__(
        self,
        message: str,
        code: str = "LMS_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class AuthError(LmsError):
    """Raised when demo sign-in fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="AUTH_FAILED", details=details)


class ValidationError(LmsError):
    """Raised when a submitted form field is missing or malformed."""

    def __init__(
        self,
        message: str,
        field: str = None,
        details: Optional[Dict[str, Any]] = None
    ):
        error_details = details or {}
        if field:
            error_details["field"] = field
        self.field = field
        super().__init__(message=message, code="VALIDATION_ERROR", details=error_details)


class NotFoundError(LmsError):
    """Raised when a record id does not match anything in the workspace."""

    def __init__(self, kind: str, record_id: str = None, message: str = None):
        msg = message or f"{kind.capitalize()} not found: {record_id}"
        super().__init__(
            message=msg,
            code=f"{kind.upper()}_NOT_FOUND",
            details={f"{kind}_id": record_id},
        )


class QuizStateError(LmsError):
    """Raised when a quiz run is driven out of order (e.g. submitting twice)."""

    def __init__(self, message: str, state: str = None):
        super().__init__(message=message, code="QUIZ_STATE_ERROR", details={"state": state})
