"""Exception hierarchy for share-tools."""

from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    """Closed set of failure categories reported by listing, traversal and search."""

    AUTHENTICATION = "authentication"
    CONNECTIVITY = "connectivity"
    LISTING = "listing"
    PATTERN_SYNTAX = "pattern_syntax"
    UNEXPECTED = "unexpected"


class ShareToolsError(Exception):
    """Base exception for all share-tools errors."""

    pass


class ValidationError(ShareToolsError):
    """Raised when validation fails."""

    pass


class ShareOperationError(ShareToolsError):
    """Raised when a share operation fails.

    Every failure coming out of a directory lister, the traversal engine or the
    query layer is reported through this one type. Callers dispatch on ``kind``
    rather than on exception subclasses.

    Attributes:
        kind: Failure category
        message: Human-readable cause
        address: Remote address involved, if any
    """

    def __init__(
        self, kind: FailureKind, message: str, address: Optional[str] = None
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.address = address

    def __str__(self) -> str:
        return f"{self.kind.name}: {self.message}"
