from typing import Any, Dict, Optional

from fastapi import status


class PortalError(Exception):
    """Base error rendered as ``{"error": ..., "message": ...}`` by the API."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal server error"

    def __init__(
        self,
        error: Optional[str] = None,
        message: Optional[str] = None,
        payload: Optional[Dict[str, Any]] = None,
    ):
        self.error = error or self.error
        self.message = message
        self.payload = payload or {}
        super().__init__(self.error)

    def to_dict(self) -> Dict[str, Any]:
        content: Dict[str, Any] = {"error": self.error}
        if self.message:
            content["message"] = self.message
        content.update(self.payload)
        return content


class BadRequestError(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Bad request"


class NotFoundError(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Not found"


class ConflictError(PortalError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class RateLimitedError(PortalError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    error = "Too many requests"


class InternalError(PortalError):
    pass
