"""Depth-first traversal of a remote share.

The engine drives a ``DirectoryLister`` one directory at a time and
accumulates ``RemoteEntry`` records in pre-order: a directory is always
followed immediately by its whole subtree, and siblings keep the order the
lister reported them in.

Failure Policy:
    - A failure listing the starting directory is raised to the caller.
    - A failure listing any nested directory is logged, recorded as a
      ``SkippedDirectory`` and the subtree is treated as empty.

Cancellation:
    Pass a ``threading.Event``; it is checked before every listing. When set,
    the walk stops and the entries collected so far are returned with
    ``cancelled=True``.
"""

import threading
from typing import Optional
from urllib.parse import quote

from share_tools.core import (
    FailureKind,
    ShareOperationError,
    get_logger,
    get_tracer,
)
from share_tools.listing import ChildDescriptor, DirectoryLister
from share_tools.traversal import queries
from share_tools.traversal.models import (
    ProbeResult,
    RemoteEntry,
    SkippedDirectory,
    TraversalResult,
)

logger = get_logger(__name__)
tracer = get_tracer(__name__)

_DIRECTORY_MARKERS = "/\\"


def normalize_relative_path(path: str) -> str:
    """Normalize a share-relative path to ``a/b/c`` form.

    Backslashes become slashes, and leading, trailing and repeated
    separators are dropped.
    """
    components = [part for part in path.replace("\\", "/").split("/") if part]
    return "/".join(components)


def _child_address(parent_address: str, name: str) -> str:
    return f"{parent_address}{quote(name, safe='')}/"


def _is_cancelled(cancel_event: Optional[threading.Event]) -> bool:
    return cancel_event is not None and cancel_event.is_set()


class ShareTraverser:
    """Walks a remote share through a directory lister."""

    def __init__(self, lister: DirectoryLister, root_address: str):
        """Initialize share traverser.

        Args:
            lister: Collaborator that lists one directory's children
            root_address: URL-encoded address of the share root, e.g.
                smb://host/share/. Child names are encoded before being
                appended to it, so it must not hold raw '#', '?' or '%'.
        """
        self.lister = lister
        self.root_address = root_address if root_address.endswith("/") else f"{root_address}/"

    def address_for(self, relative_path: str) -> str:
        """Build the directory address for a path relative to the share root."""
        normalized = normalize_relative_path(relative_path)
        if not normalized:
            return self.root_address

        encoded = "/".join(quote(part, safe="") for part in normalized.split("/"))
        return f"{self.root_address}{encoded}/"

    def probe(self) -> ProbeResult:
        """List the share root once to check reachability and credentials.

        Returns:
            ProbeResult; never raises
        """
        logger.info("Probing share", address=self.root_address)

        try:
            self.lister.list_directory(self.root_address)
        except ShareOperationError as e:
            logger.error(
                "Share probe failed",
                address=self.root_address,
                kind=e.kind.value,
                error=e.message,
            )
            return ProbeResult(
                success=False,
                address=self.root_address,
                kind=e.kind,
                message=e.message,
            )
        except Exception as e:
            error_msg = f"Unexpected error during connection: {e}"
            logger.error(error_msg, address=self.root_address, error=str(e))
            return ProbeResult(
                success=False,
                address=self.root_address,
                kind=FailureKind.UNEXPECTED,
                message=error_msg,
            )

        logger.info("Share probe successful", address=self.root_address)
        return ProbeResult(
            success=True,
            address=self.root_address,
            message=f"Successfully connected to {self.root_address}",
        )

    def traverse_from_root(
        self, cancel_event: Optional[threading.Event] = None
    ) -> TraversalResult:
        """Collect every file and directory beneath the share root.

        Raises:
            ShareOperationError: If the share root cannot be listed
        """
        return self._traverse(self.root_address, cancel_event)

    def traverse_from_path(
        self, relative_path: str, cancel_event: Optional[threading.Event] = None
    ) -> TraversalResult:
        """Collect every file and directory beneath a path under the share root.

        Entry paths are relative to ``relative_path`` itself.

        Raises:
            ShareOperationError: If the starting directory cannot be listed
        """
        return self._traverse(self.address_for(relative_path), cancel_event)

    def get_files_only(self) -> list[RemoteEntry]:
        """Traverse from the root and keep only files."""
        return queries.files_only(self.traverse_from_root())

    def get_directories_only(self) -> list[RemoteEntry]:
        """Traverse from the root and keep only directories."""
        return queries.directories_only(self.traverse_from_root())

    def search_files(self, pattern: str) -> list[RemoteEntry]:
        """Traverse from the root and return files whose name matches ``pattern``."""
        return queries.search(self.traverse_from_root(), pattern)

    def _list_start(self, address: str) -> list[ChildDescriptor]:
        try:
            return self.lister.list_directory(address)
        except ShareOperationError:
            raise
        except Exception as e:
            error_msg = f"Unexpected error listing '{address}': {e}"
            logger.error(error_msg, address=address, error=str(e))
            raise ShareOperationError(FailureKind.UNEXPECTED, error_msg, address=address)

    def _traverse(
        self, start_address: str, cancel_event: Optional[threading.Event]
    ) -> TraversalResult:
        result = TraversalResult()

        with tracer.start_as_current_span("share_tools.traverse") as span:
            span.set_attribute("share.address", start_address)
            logger.info("Starting traversal", address=start_address)

            if _is_cancelled(cancel_event):
                logger.info("Traversal cancelled before start", address=start_address)
                result.cancelled = True
                return result

            # Each frame is (directory address, relative path, remaining children)
            stack = [(start_address, "", iter(self._list_start(start_address)))]

            while stack:
                parent_address, parent_path, pending = stack[-1]
                child = next(pending, None)
                if child is None:
                    stack.pop()
                    continue

                name = child.name.rstrip(_DIRECTORY_MARKERS)
                if not name:
                    logger.warning(
                        "Skipping child with empty name",
                        address=parent_address,
                        full_path=child.full_path,
                    )
                    continue

                relative_path = f"{parent_path}/{name}" if parent_path else name
                result.entries.append(
                    RemoteEntry(
                        name=name,
                        relative_path=relative_path,
                        is_directory=child.is_directory,
                        size=0 if child.is_directory else child.size,
                        last_modified=child.last_modified,
                        full_path=child.full_path,
                    )
                )

                if not child.is_directory:
                    continue

                if _is_cancelled(cancel_event):
                    logger.info(
                        "Traversal cancelled",
                        address=start_address,
                        entry_count=len(result.entries),
                    )
                    result.cancelled = True
                    break

                address = _child_address(parent_address, name)
                try:
                    children = self.lister.list_directory(address)
                except ShareOperationError as e:
                    self._skip(result, relative_path, address, e.kind, e.message)
                    continue
                except Exception as e:
                    self._skip(
                        result,
                        relative_path,
                        address,
                        FailureKind.UNEXPECTED,
                        f"Unexpected error listing '{address}': {e}",
                    )
                    continue

                stack.append((address, relative_path, iter(children)))

            span.set_attribute("share.entry_count", len(result.entries))
            span.set_attribute("share.skipped_count", result.skipped_count)
            span.set_attribute("share.cancelled", result.cancelled)

        logger.info(
            "Traversal completed",
            address=start_address,
            entry_count=len(result.entries),
            skipped_count=result.skipped_count,
            cancelled=result.cancelled,
        )
        return result

    @staticmethod
    def _skip(
        result: TraversalResult,
        relative_path: str,
        address: str,
        kind: FailureKind,
        message: str,
    ) -> None:
        logger.warning(
            "Error traversing directory, skipping subtree",
            address=address,
            relative_path=relative_path,
            kind=kind.value,
            error=message,
        )
        result.skipped.append(
            SkippedDirectory(
                relative_path=relative_path,
                address=address,
                kind=kind,
                message=message,
            )
        )
