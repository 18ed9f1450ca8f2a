"""API error taxonomy rendered as `{"message", "error", "errors"}` bodies.

Every error is an `HTTPException` so services can raise them directly, the same
way they raise plain HTTP errors.
"""

from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status


class APIError(HTTPException):
    """HTTP error carrying a stable kind and optional per-field detail."""

    kind = "Error"
    status_code_default = status.HTTP_400_BAD_REQUEST
    default_message = "Request failed"

    def __init__(self, message: str | None = None, *, errors: dict[str, str] | None = None) -> None:
        super().__init__(status_code=self.status_code_default, detail=message or self.default_message)
        self.errors = errors or None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"message": self.detail, "error": self.kind}
        if self.errors:
            payload["errors"] = self.errors
        return payload


class MissingRequiredField(APIError):
    kind = "MissingRequiredField"
    default_message = "Missing required fields: title and mediaType"


class InvalidMediaType(APIError):
    kind = "InvalidMediaType"
    default_message = "Invalid mediaType"


class InvalidFieldValue(APIError):
    kind = "InvalidFieldValue"
    default_message = "Validation Error"


class NotFound(APIError):
    kind = "NotFound"
    status_code_default = status.HTTP_404_NOT_FOUND
    default_message = "Media item not found"


class Forbidden(APIError):
    kind = "Forbidden"
    status_code_default = status.HTTP_403_FORBIDDEN
    default_message = "User not authorized to modify this item"


class Unauthorized(APIError):
    kind = "Unauthorized"
    status_code_default = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message)
        self.headers = {"WWW-Authenticate": "Bearer"}


class InternalError(APIError):
    kind = "InternalError"
    status_code_default = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
