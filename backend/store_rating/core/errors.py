# store_rating/core/errors.py
"""
Domain error taxonomy.

Every error is an HTTPException so services and dependencies can raise it
directly and FastAPI renders it as {"detail": {"code", "message", "errors"?}}.
"""
from typing import Optional

from fastapi import HTTPException, status


class AppError(HTTPException):
    default_status = status.HTTP_400_BAD_REQUEST
    default_code = "BAD_REQUEST"
    default_message = "Bad request"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        errors: Optional[list[dict]] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        detail = {"code": code or self.default_code, "message": message or self.default_message}
        if errors:
            detail["errors"] = errors
        super().__init__(status_code=status_code or self.default_status, detail=detail, headers=headers)

    @property
    def code(self) -> str:
        return self.detail["code"]


class ValidationFailed(AppError):
    default_code = "VALIDATION_ERROR"
    default_message = "Validation failed"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationFailed":
        return cls(errors=[{"field": field, "message": message}])


class Unauthenticated(AppError):
    default_status = status.HTTP_401_UNAUTHORIZED
    default_code = "AUTH_REQUIRED"
    default_message = "Authentication required"

    def __init__(self, message: Optional[str] = None, *, code: Optional[str] = None):
        super().__init__(message, code=code, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(AppError):
    default_status = status.HTTP_403_FORBIDDEN
    default_code = "FORBIDDEN"
    default_message = "Insufficient role for this resource"


class NotFound(AppError):
    default_status = status.HTTP_404_NOT_FOUND
    default_code = "NOT_FOUND"
    default_message = "Resource not found"


class Conflict(AppError):
    default_code = "EMAIL_EXISTS"
    default_message = "Email already registered"


class InvalidCredentials(AppError):
    default_status = status.HTTP_401_UNAUTHORIZED
    default_code = "AUTH_INVALID_CREDENTIALS"
    default_message = "Invalid credentials"


class InvalidOperation(AppError):
    default_code = "INVALID_OPERATION"
    default_message = "Operation not allowed"
