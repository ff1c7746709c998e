# app/core/exceptions.py
"""
Application exception hierarchy.

Every business error carries a stable ``error_code`` so callers can branch on
the kind of failure instead of the message text, and an HTTP ``status_code``
used by the exception handlers.
"""

from typing import Any, Dict, List, Optional


class BaseAppException(Exception):
    """Base class for all exceptions raised on purpose by the application."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"
    default_detail: str = "An unexpected error occurred."

    def __init__(
        self,
        detail: Optional[str] = None,
        *,
        resource_type: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        self.detail = detail or self.default_detail
        self.resource_type = resource_type
        self.errors = errors or []
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable body for error responses."""
        body: Dict[str, Any] = {"error_code": self.error_code, "message": self.detail}
        if self.resource_type:
            body["resource_type"] = self.resource_type
        if self.errors:
            body["errors"] = self.errors
        return body

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(error_code='{self.error_code}', detail='{self.detail}')>"


class ValidationError(BaseAppException):
    """Malformed or missing request data."""

    status_code = 400
    error_code = "VALIDATION_ERROR"
    default_detail = "The request data is invalid."


class ResourceNotFound(BaseAppException):
    """A referenced book or author does not exist."""

    status_code = 404
    error_code = "NOT_FOUND"
    default_detail = "The requested resource was not found."


class ResourceAlreadyExists(BaseAppException):
    """Registration of an entity that is already stored."""

    status_code = 409
    error_code = "DUPLICATE_ENTITY"
    default_detail = "The resource already exists."


class InvalidReference(BaseAppException):
    """A request names an id that has no row behind it."""

    status_code = 422
    error_code = "INVALID_REFERENCE"
    default_detail = "The request references a resource that does not exist."


class InvalidState(BaseAppException):
    """The stored data is in a state the operation refuses to work on."""

    status_code = 409
    error_code = "INVALID_STATE"
    default_detail = "The resource is in an invalid state for this operation."


class InternalServerError(BaseAppException):
    """Unexpected persistence failure."""

    status_code = 500
    error_code = "STORE_FAILURE"
    default_detail = "An unexpected database error occurred."


__all__ = [
    "BaseAppException",
    "ValidationError",
    "ResourceNotFound",
    "ResourceAlreadyExists",
    "InvalidReference",
    "InvalidState",
    "InternalServerError",
]
