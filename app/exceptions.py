"""
Domain exceptions raised by the service layer.

Every failure carries a machine readable ``code``, a human readable
``message`` naming the offending identifiers and the HTTP status the
REST layer answers with. Services raise them at the point of violation and
never catch them; ``app.main`` renders them through a single handler.
"""

from typing import Any, Dict, Optional
from fastapi import status


class ShareItError(Exception):
    """Base exception for share-it service errors."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "SHAREIT_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(ShareItError):
    """Raised when a referenced user, item, booking or request does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity} with id:{entity_id} not found.",
            details={"entity": entity, "id": entity_id},
        )


class ValidationFailure(ShareItError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"


class AuthorizationFailure(ShareItError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "ACCESS_DENIED"


class StateConflict(ShareItError):
    """Raised when a booking's status no longer permits the operation."""

    status_code = status.HTTP_409_CONFLICT
    code = "STATE_CONFLICT"


class UnknownFilterError(ShareItError):
    """Raised for a booking filter token outside the fixed enumeration."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "UNKNOWN_STATE"

    def __init__(self, token: Any):
        self.token = token
        super().__init__(f"Unknown state: {token}", details={"state": token})

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message}


class EmailAlreadyExists(ShareItError):
    status_code = status.HTTP_409_CONFLICT
    code = "EMAIL_CONFLICT"

    def __init__(self, email: str):
        super().__init__(f"User with email {email} already exists.", details={"email": email})
