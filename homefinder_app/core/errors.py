"""Error taxonomy shared by services and routes.

Every error is an ``HTTPException`` so it travels through FastAPI's default
handler untouched; the status code is part of the type.
"""
from typing import Optional

from fastapi import HTTPException, status


class AppError(HTTPException):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Something went wrong on our end. Please try again."

    def __init__(self, detail: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Validation failed"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access Denied"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(AppError):
    # unique constraint violations are reported as 400, not 409
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Already exists"

    def __init__(self, detail: Optional[str] = None, field: Optional[str] = None):
        super().__init__(detail)
        self.field = field


class Internal(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
