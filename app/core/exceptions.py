"""
Domain exceptions for the gold shop backend.

Services raise these; the handlers registered in ``main.py`` turn them into
JSON responses of the form ``{"detail": message, **payload}``.
"""
from typing import Any, Dict, Optional

from fastapi import status


class ShopError(Exception):
    """Base exception for all business errors."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, payload: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.payload = payload or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"detail": self.message, **self.payload}


class ValidationError(ShopError):
    """Malformed or out-of-range input."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ShopError):
    """Referenced entity does not exist."""
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ShopError):
    """Operation not allowed in the entity's current state."""
    status_code = status.HTTP_409_CONFLICT


class InternalError(ShopError):
    """Storage or unexpected failure."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
