"""Result types produced by share traversal."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, Optional

from share_tools.core import FailureKind


@dataclass(frozen=True)
class RemoteEntry:
    """One file or directory discovered during a traversal.

    Attributes:
        name: Leaf name without separators
        relative_path: Slash-joined path from the traversal's starting point
        is_directory: Whether the entry is a directory
        size: Size in bytes, always 0 for directories
        last_modified: Modification time reported by the server
        full_path: Lister-reported absolute path, kept for diagnostics
    """

    name: str
    relative_path: str
    is_directory: bool
    size: int
    last_modified: datetime
    full_path: str

    def __str__(self) -> str:
        kind = "DIR" if self.is_directory else "FILE"
        return (
            f"[{kind}] {self.relative_path} "
            f"({self.size} bytes, modified: {self.last_modified.isoformat()})"
        )


@dataclass(frozen=True)
class SkippedDirectory:
    """A nested directory whose listing failed and whose subtree was skipped."""

    relative_path: str
    address: str
    kind: FailureKind
    message: str


@dataclass
class TraversalResult:
    """Entries collected by one traversal, plus the subtrees it could not read."""

    entries: list[RemoteEntry] = field(default_factory=list)
    skipped: list[SkippedDirectory] = field(default_factory=list)
    cancelled: bool = False

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def __iter__(self) -> Iterator[RemoteEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a connectivity probe."""

    success: bool
    address: str
    kind: Optional[FailureKind] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.success
