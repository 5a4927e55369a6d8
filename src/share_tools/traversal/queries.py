"""Queries over an already collected set of remote entries.

None of these functions contact the share; they only filter a sequence that a
traversal has produced, so repeated queries cost nothing on the network.
"""

import re
from typing import Iterable

from share_tools.core import FailureKind, ShareOperationError, get_logger
from share_tools.traversal.models import RemoteEntry

logger = get_logger(__name__)


def files_only(entries: Iterable[RemoteEntry]) -> list[RemoteEntry]:
    """Return the non-directory entries, preserving order."""
    return [entry for entry in entries if not entry.is_directory]


def directories_only(entries: Iterable[RemoteEntry]) -> list[RemoteEntry]:
    """Return the directory entries, preserving order."""
    return [entry for entry in entries if entry.is_directory]


def compile_pattern(pattern: str) -> re.Pattern:
    """Compile a search pattern.

    Raises:
        ShareOperationError: PATTERN_SYNTAX if the pattern does not compile
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        error_msg = f"Invalid search pattern '{pattern}': {e}"
        logger.error(error_msg, pattern=pattern, error=str(e))
        raise ShareOperationError(FailureKind.PATTERN_SYNTAX, error_msg)


def search(entries: Iterable[RemoteEntry], pattern: str) -> list[RemoteEntry]:
    """Return files whose name fully matches a regular expression.

    The whole name must match, so ``r"\\.log"`` matches nothing while
    ``r".*\\.log"`` matches every ``.log`` file. Directories never match.

    Args:
        entries: Entries from a traversal
        pattern: Regular expression applied to each file name

    Returns:
        Matching file entries, in their original order

    Raises:
        ShareOperationError: PATTERN_SYNTAX if the pattern does not compile
    """
    compiled = compile_pattern(pattern)

    matches = [
        entry for entry in files_only(entries) if compiled.fullmatch(entry.name)
    ]
    logger.debug("Search completed", pattern=pattern, match_count=len(matches))
    return matches
