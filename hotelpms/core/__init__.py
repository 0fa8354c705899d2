"""Core application modules."""

from .exceptions import (
    BaseAppException,
    BusinessLogicError,
    ErrorCode,
    ResourceNotFoundError,
    ValidationError,
)

__all__ = [
    "BaseAppException",
    "BusinessLogicError",
    "ErrorCode",
    "ResourceNotFoundError",
    "ValidationError",
]
