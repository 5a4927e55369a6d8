"""Share operations that wire a configuration to a lister and traverser."""

import threading
from dataclasses import replace
from typing import Optional

from share_tools.core import ShareOperationError, get_logger
from share_tools.core.exceptions import ValidationError
from share_tools.listing import SMBDirectoryLister
from share_tools.schemas import ShareConfig
from share_tools.traversal import (
    ProbeResult,
    ShareTraverser,
    TraversalResult,
    compile_pattern,
    directories_only,
    files_only,
    search,
)

logger = get_logger(__name__)

CONTENT_TYPES = ("all", "files", "directories")


def inventory_share(
    config: ShareConfig,
    path: Optional[str] = None,
    cancel_event: Optional[threading.Event] = None,
) -> TraversalResult:
    """
    Collect every file and directory beneath the share root or a path under it.

    Args:
        config: Share connection configuration
        path: Optional path relative to the share root to start from
        cancel_event: Optional event that stops the walk when set

    Returns:
        TraversalResult with entries in pre-order and any skipped subtrees

    Raises:
        ShareOperationError: If the starting directory cannot be listed
    """
    logger.info("Inventorying share", server_address=config.server_address, path=path)

    with SMBDirectoryLister(config) as lister:
        traverser = ShareTraverser(lister, config.server_address)
        if path:
            return traverser.traverse_from_path(path, cancel_event=cancel_event)
        return traverser.traverse_from_root(cancel_event=cancel_event)


def list_share_contents(
    config: ShareConfig,
    content_type: str = "all",
    path: Optional[str] = None,
) -> TraversalResult:
    """
    List share contents recursively, optionally only files or only directories.

    Args:
        config: Share connection configuration
        content_type: "all", "files" or "directories"
        path: Optional path relative to the share root to start from

    Returns:
        TraversalResult holding the selected entries in pre-order, with the
        skipped subtrees of the underlying traversal

    Raises:
        ValidationError: If content_type is invalid
        ShareOperationError: If the starting directory cannot be listed
    """
    if content_type not in CONTENT_TYPES:
        raise ValidationError(
            f"content_type must be 'all', 'files' or 'directories', got: {content_type}"
        )

    result = inventory_share(config, path=path)

    if content_type == "files":
        return replace(result, entries=files_only(result))
    elif content_type == "directories":
        return replace(result, entries=directories_only(result))
    else:
        return result


def search_share(
    config: ShareConfig,
    pattern: str,
    path: Optional[str] = None,
) -> TraversalResult:
    """
    Find files whose name fully matches a regular expression.

    The pattern is compiled before the share is contacted, so an invalid
    pattern fails without any network traffic.

    Args:
        config: Share connection configuration
        pattern: Regular expression matched against file names
        path: Optional path relative to the share root to start from

    Returns:
        TraversalResult holding the matching files in pre-order, with the
        skipped subtrees of the underlying traversal

    Raises:
        ShareOperationError: PATTERN_SYNTAX for an invalid pattern, or a
            listing failure on the starting directory
    """
    compile_pattern(pattern)

    result = inventory_share(config, path=path)
    return replace(result, entries=search(result, pattern))


def verify_share_access(config: ShareConfig) -> ProbeResult:
    """
    Verify the share is reachable with the configured credentials.

    Args:
        config: Share connection configuration

    Returns:
        ProbeResult describing success or the failure category and cause
    """
    logger.info("Verifying share access", server_address=config.server_address)

    try:
        lister = SMBDirectoryLister(config)
    except ShareOperationError as e:
        return ProbeResult(
            success=False,
            address=config.server_address,
            kind=e.kind,
            message=e.message,
        )

    with lister:
        return ShareTraverser(lister, config.server_address).probe()
