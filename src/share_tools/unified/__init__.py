"""Unified interface for share operations driven by a ShareConfig."""

from .share_operations import (
    CONTENT_TYPES,
    inventory_share,
    list_share_contents,
    search_share,
    verify_share_access,
)

__all__ = [
    "CONTENT_TYPES",
    "inventory_share",
    "list_share_contents",
    "search_share",
    "verify_share_access",
]
