from typing import List, Optional
from fastapi import HTTPException, status


class ApiError(HTTPException):
    """HTTP error rendered as the standard ``{success: false, ...}`` envelope."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        errors: Optional[List[str]] = None,
        headers: Optional[dict] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.errors = errors or []


class BadRequestError(ApiError):
    def __init__(self, detail: str = "Bad request", errors: Optional[List[str]] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail, errors)


class UnauthorizedError(ApiError):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundError(ApiError):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, detail)


class ConflictError(ApiError):
    def __init__(self, detail: str = "Resource conflict"):
        super().__init__(status.HTTP_409_CONFLICT, detail)


class TooManyRequestsError(ApiError):
    def __init__(self, detail: str = "Too many requests. Please try again later."):
        super().__init__(status.HTTP_429_TOO_MANY_REQUESTS, detail)
