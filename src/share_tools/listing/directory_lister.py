"""Directory lister interface consumed by the traversal engine."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class ChildDescriptor:
    """One immediate child as reported by a directory lister.

    Attributes:
        name: Leaf name, possibly with a trailing directory marker
        is_directory: Whether the child is a directory
        size: Size in bytes
        last_modified: Modification time reported by the server
        full_path: The lister's own absolute path for the child
    """

    name: str
    is_directory: bool
    size: int
    last_modified: datetime
    full_path: str


class DirectoryLister(Protocol):
    """Protocol for listing the immediate children of a remote directory."""

    def list_directory(self, address: str) -> list[ChildDescriptor]:
        """Return the children of the directory at ``address``.

        Raises:
            ShareOperationError: With kind AUTHENTICATION, CONNECTIVITY,
                LISTING or UNEXPECTED
        """
        ...
