"""Recursive inventory and search of remote SMB shares.

This package walks a remote share depth-first and produces a flat, ordered
inventory of every file and directory beneath a starting point. A directory
that cannot be read is skipped and reported rather than aborting the walk.

Key Features:
    - Pre-order traversal from the share root or any path beneath it
    - Per-subtree failure isolation with a skipped-directory report
    - Files-only, directories-only and regular-expression queries
    - Connectivity probe with categorized failures
    - CLI interface

Recommended Usage:
    Use the unified interface from this module for most operations:

    >>> from share_tools import ShareConfig, inventory_share
    >>> config = ShareConfig(
    ...     server_address="smb://fileserver/projects/",
    ...     username="alice",
    ...     password="secret",
    ... )
    >>> result = inventory_share(config)

Advanced Usage:
    Drive the engine with any object implementing ``DirectoryLister``:

    >>> from share_tools.traversal import ShareTraverser
    >>> traverser = ShareTraverser(my_lister, "smb://fileserver/projects/")
"""

__version__ = "0.1.0"

from .core import FailureKind, ShareOperationError, ShareToolsError
from .listing import ChildDescriptor, DirectoryLister, SMBDirectoryLister
from .schemas import ShareConfig
from .traversal import (
    ProbeResult,
    RemoteEntry,
    ShareTraverser,
    SkippedDirectory,
    TraversalResult,
    directories_only,
    files_only,
    search,
)

# Unified interface (recommended)
from .unified import (
    inventory_share,
    list_share_contents,
    search_share,
    verify_share_access,
)

__all__ = [
    # Configuration
    "ShareConfig",
    # Errors
    "FailureKind",
    "ShareOperationError",
    "ShareToolsError",
    # Unified interface
    "inventory_share",
    "list_share_contents",
    "search_share",
    "verify_share_access",
    # Listing
    "ChildDescriptor",
    "DirectoryLister",
    "SMBDirectoryLister",
    # Traversal
    "ProbeResult",
    "RemoteEntry",
    "ShareTraverser",
    "SkippedDirectory",
    "TraversalResult",
    "directories_only",
    "files_only",
    "search",
]
