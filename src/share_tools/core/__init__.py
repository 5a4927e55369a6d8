"""Core utilities and shared components for share-tools."""

from .config import settings
from .exceptions import (
    FailureKind,
    ShareOperationError,
    ShareToolsError,
    ValidationError,
)
from .observability import get_logger, get_tracer

__all__ = [
    "settings",
    "FailureKind",
    "ShareOperationError",
    "ShareToolsError",
    "ValidationError",
    "get_logger",
    "get_tracer",
]
