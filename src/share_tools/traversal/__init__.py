"""Recursive traversal of remote shares and queries over its results."""

from .models import ProbeResult, RemoteEntry, SkippedDirectory, TraversalResult
from .queries import compile_pattern, directories_only, files_only, search
from .engine import ShareTraverser, normalize_relative_path

__all__ = [
    "ProbeResult",
    "RemoteEntry",
    "SkippedDirectory",
    "TraversalResult",
    "compile_pattern",
    "directories_only",
    "files_only",
    "search",
    "ShareTraverser",
    "normalize_relative_path",
]
