"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and foundational application code.
"""

from app.config import settings
from app.exceptions import (
    LeChefError,
    ServiceValidationError,
    NotFoundError,
    ConflictError,
    UnauthorizedError,
    AIServiceError,
    AIResponseError,
)

__all__ = [
    "settings",
    "LeChefError",
    "ServiceValidationError",
    "NotFoundError",
    "ConflictError",
    "UnauthorizedError",
    "AIServiceError",
    "AIResponseError",
]
