"""HTTP-mapped error taxonomy for the API."""
from fastapi import HTTPException, status


class APIError(HTTPException):
    """Base class: an HTTPException with a fixed status and a default message"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"

    def __init__(self, detail: str | None = None, headers: dict | None = None):
        super().__init__(status_code=type(self).status_code,
                         detail=detail or self.default_detail,
                         headers=headers)


class InvalidArgument(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid argument"


class Unauthenticated(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Not authenticated"


class Forbidden(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not allowed"


class NotFound(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(APIError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Already exists"


class PersistenceError(APIError):
    """Store-level failure; the detail never carries the driver's message"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error"
