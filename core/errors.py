"""Error hierarchy for the domain layer.

Services raise these exceptions directly; ``api.error_handlers`` turns them
into JSON responses. Each error carries a stable ``code`` for clients and the
HTTP status used when it crosses the API boundary.
"""

from enum import Enum
from typing import Any, Dict


class ErrorCategory(str, Enum):
    """High-level error categories."""
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    BUSINESS_RULE = "business_rule"
    VALIDATION = "validation"
    INTERNAL = "internal"


class AgoraError(Exception):
    """Base exception for all domain errors."""

    code = "AGORA_ERROR"
    category = ErrorCategory.INTERNAL
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> Dict[str, Any]:
        """Convert to the REST error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
            }
        }


class NotFoundError(AgoraError):
    """A referenced entity does not exist."""
    code = "NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404


class ConflictError(AgoraError):
    """The relationship being created already exists."""
    code = "CONFLICT"
    category = ErrorCategory.CONFLICT
    http_status = 409


class SelfReferenceError(AgoraError):
    """An entity may not reference itself (e.g. following yourself)."""
    code = "SELF_REFERENCE"
    category = ErrorCategory.BUSINESS_RULE
    http_status = 400


class StateError(AgoraError):
    """The target entity is in a state that forbids the operation."""
    code = "INVALID_STATE"
    category = ErrorCategory.BUSINESS_RULE
    http_status = 409


class ValidationError(AgoraError):
    """A value does not match what the referenced entity requires."""
    code = "VALIDATION_FAILED"
    category = ErrorCategory.VALIDATION
    http_status = 422


class InvalidOperationError(AgoraError):
    """The caller's role does not allow the operation."""
    code = "INVALID_OPERATION"
    category = ErrorCategory.BUSINESS_RULE
    http_status = 400
