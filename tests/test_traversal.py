"""Tests for the share traversal engine."""

import dataclasses
import threading

import pytest

from conftest import MODIFIED, ROOT, FakeLister, make_dir, make_file
from share_tools.core import FailureKind, ShareOperationError
from share_tools.traversal import (
    ProbeResult,
    RemoteEntry,
    ShareTraverser,
    TraversalResult,
    normalize_relative_path,
    search,
)


def _paths(entries):
    return [entry.relative_path for entry in entries]


class TestTraverseFromRoot:
    """Test traversal from the share root."""

    def test_preorder_scenario(self, fake_lister):
        """Test a directory's subtree is emitted before its next sibling."""
        result = ShareTraverser(fake_lister, ROOT).traverse_from_root()

        assert _paths(result) == ["sub", "sub/b.log", "a.txt"]

        sub, b_log, a_txt = result.entries
        assert sub == RemoteEntry(
            name="sub",
            relative_path="sub",
            is_directory=True,
            size=0,
            last_modified=MODIFIED,
            full_path=f"{ROOT}sub/",
        )
        assert b_log.name == "b.log"
        assert b_log.size == 20
        assert not b_log.is_directory
        assert a_txt.size == 10
        assert result.skipped_count == 0
        assert result.cancelled is False

    def test_search_after_traversal(self, fake_lister):
        """Test searching the scenario result for log files."""
        result = ShareTraverser(fake_lister, ROOT).traverse_from_root()

        matches = search(result, r".*\.log$")

        assert _paths(matches) == ["sub/b.log"]

    def test_lists_each_directory_once(self, fake_lister):
        """Test the lister is called once per directory, in document order."""
        ShareTraverser(fake_lister, ROOT).traverse_from_root()

        assert fake_lister.calls == [ROOT, f"{ROOT}sub/"]

    def test_root_address_gets_trailing_separator(self, fake_lister):
        """Test a root address without a trailing slash is normalized."""
        traverser = ShareTraverser(fake_lister, ROOT.rstrip("/"))

        assert traverser.root_address == ROOT
        assert len(traverser.traverse_from_root()) == 3

    def test_sibling_order_follows_lister(self):
        """Test siblings are not sorted by the engine."""
        lister = FakeLister(
            {ROOT: [make_file("zeta.txt", 1), make_file("alpha.txt", 2)]}
        )

        result = ShareTraverser(lister, ROOT).traverse_from_root()

        assert _paths(result) == ["zeta.txt", "alpha.txt"]

    def test_directory_size_is_zero(self):
        """Test directories report size 0 even if the lister says otherwise."""
        lister = FakeLister({ROOT: [make_dir("big", size=4096)], f"{ROOT}big/": []})

        result = ShareTraverser(lister, ROOT).traverse_from_root()

        assert result.entries[0].size == 0

    def test_strips_trailing_markers(self):
        """Test trailing slash and backslash markers are removed from names."""
        lister = FakeLister(
            {
                ROOT: [make_dir("one"), dataclasses.replace(make_dir("two"), name="two\\")],
                f"{ROOT}one/": [],
                f"{ROOT}two/": [],
            }
        )

        result = ShareTraverser(lister, ROOT).traverse_from_root()

        assert [entry.name for entry in result] == ["one", "two"]

    def test_child_addresses_are_url_encoded(self):
        """Test names with spaces produce well-formed child addresses."""
        lister = FakeLister(
            {ROOT: [make_dir("my dir")], f"{ROOT}my%20dir/": [make_file("x.txt", 1)]}
        )

        result = ShareTraverser(lister, ROOT).traverse_from_root()

        assert _paths(result) == ["my dir", "my dir/x.txt"]
        assert lister.calls[-1] == f"{ROOT}my%20dir/"

    def test_nested_preorder_contiguity(self, nested_tree):
        """Test every directory's descendants form a contiguous block after it."""
        result = ShareTraverser(FakeLister(nested_tree), ROOT).traverse_from_root()
        paths = _paths(result)

        assert paths == [
            "docs",
            "docs/specs",
            "docs/specs/design.md",
            "docs/notes.txt",
            "empty",
            "media",
            "media/photo.jpg",
            "readme.md",
        ]

        for index, entry in enumerate(result.entries):
            if not entry.is_directory:
                continue
            prefix = entry.relative_path + "/"
            descendants = [i for i, p in enumerate(paths) if p.startswith(prefix)]
            assert descendants == list(range(index + 1, index + 1 + len(descendants)))

    def test_no_orphaned_entries(self, nested_tree):
        """Test every entry's ancestors are present as directory entries."""
        result = ShareTraverser(FakeLister(nested_tree), ROOT).traverse_from_root()
        directories = {e.relative_path for e in result if e.is_directory}

        for entry in result:
            parts = entry.relative_path.split("/")
            for depth in range(1, len(parts)):
                assert "/".join(parts[:depth]) in directories

    def test_relative_paths_unique_and_clean(self, nested_tree):
        """Test relative paths are unique and carry no edge separators."""
        result = ShareTraverser(FakeLister(nested_tree), ROOT).traverse_from_root()
        paths = _paths(result)

        assert len(paths) == len(set(paths))
        assert all(not p.startswith("/") and not p.endswith("/") for p in paths)

    def test_deep_nesting_does_not_hit_recursion_limit(self):
        """Test traversal depth is not bounded by the interpreter stack."""
        depth = 3000
        tree = {}
        address = ROOT
        for _ in range(depth):
            tree[address] = [make_dir("d", parent=address)]
            address = f"{address}d/"
        tree[address] = [make_file("leaf.txt", 1, parent=address)]

        result = ShareTraverser(FakeLister(tree), ROOT).traverse_from_root()

        assert len(result) == depth + 1
        assert result.entries[-1].relative_path == "/".join(["d"] * depth) + "/leaf.txt"

    def test_empty_share(self):
        """Test an empty share yields an empty, successful result."""
        result = ShareTraverser(FakeLister({ROOT: []}), ROOT).traverse_from_root()

        assert result.entries == []
        assert result.skipped_count == 0


class TestFailureIsolation:
    """Test per-subtree failure handling."""

    def test_nested_listing_failure_is_skipped(self, sample_tree):
        """Test a failing subdirectory keeps its entry and its siblings."""
        sample_tree[f"{ROOT}sub/"] = ShareOperationError(
            FailureKind.LISTING, "Access is denied", address=f"{ROOT}sub/"
        )

        result = ShareTraverser(FakeLister(sample_tree), ROOT).traverse_from_root()

        assert _paths(result) == ["sub", "a.txt"]
        assert result.skipped_count == 1
        skipped = result.skipped[0]
        assert skipped.relative_path == "sub"
        assert skipped.address == f"{ROOT}sub/"
        assert skipped.kind == FailureKind.LISTING
        assert "Access is denied" in skipped.message

    def test_failure_keeps_previously_appended_siblings(self):
        """Test entries collected before a failing directory are kept."""
        lister = FakeLister(
            {
                ROOT: [make_file("first.txt", 1), make_dir("broken"), make_file("last.txt", 2)],
                f"{ROOT}broken/": ShareOperationError(FailureKind.LISTING, "gone"),
            }
        )

        result = ShareTraverser(lister, ROOT).traverse_from_root()

        assert _paths(result) == ["first.txt", "broken", "last.txt"]
        assert result.skipped_count == 1

    def test_unexpected_nested_error_is_skipped(self, sample_tree):
        """Test non-protocol errors in a nested directory follow the skip policy."""
        sample_tree[f"{ROOT}sub/"] = RuntimeError("socket exploded")

        result = ShareTraverser(FakeLister(sample_tree), ROOT).traverse_from_root()

        assert _paths(result) == ["sub", "a.txt"]
        assert result.skipped[0].kind == FailureKind.UNEXPECTED
        assert "socket exploded" in result.skipped[0].message

    def test_nested_authentication_failure_is_skipped(self, sample_tree):
        """Test an access failure below the root does not abort the walk."""
        sample_tree[f"{ROOT}sub/"] = ShareOperationError(
            FailureKind.AUTHENTICATION, "logon failure"
        )

        result = ShareTraverser(FakeLister(sample_tree), ROOT).traverse_from_root()

        assert result.skipped[0].kind == FailureKind.AUTHENTICATION
        assert len(result) == 2

    @pytest.mark.parametrize(
        "kind", [FailureKind.AUTHENTICATION, FailureKind.CONNECTIVITY]
    )
    def test_root_failure_is_fatal(self, kind):
        """Test a failure on the first listing is raised with no result."""
        lister = FakeLister({ROOT: ShareOperationError(kind, "cannot reach share")})

        with pytest.raises(ShareOperationError) as exc_info:
            ShareTraverser(lister, ROOT).traverse_from_root()

        assert exc_info.value.kind == kind
        assert "cannot reach share" in str(exc_info.value)

    def test_unexpected_root_error_is_wrapped(self):
        """Test a non-protocol error on the first listing becomes UNEXPECTED."""
        lister = FakeLister({ROOT: RuntimeError("boom")})

        with pytest.raises(ShareOperationError) as exc_info:
            ShareTraverser(lister, ROOT).traverse_from_root()

        assert exc_info.value.kind == FailureKind.UNEXPECTED
        assert "boom" in exc_info.value.message


class TestTraverseFromPath:
    """Test traversal starting below the share root."""

    @pytest.mark.parametrize("path", ["sub", "/sub", "sub/", "\\sub\\", "//sub//"])
    def test_path_is_normalized(self, fake_lister, path):
        """Test leading and trailing separators are normalized."""
        result = ShareTraverser(fake_lister, ROOT).traverse_from_path(path)

        assert fake_lister.calls == [f"{ROOT}sub/"]
        assert _paths(result) == ["b.log"]

    def test_empty_path_starts_at_root(self, fake_lister):
        """Test an empty path behaves like a root traversal."""
        result = ShareTraverser(fake_lister, ROOT).traverse_from_path("")

        assert _paths(result) == ["sub", "sub/b.log", "a.txt"]

    def test_nested_path(self, nested_tree):
        """Test entry paths are relative to the starting directory."""
        lister = FakeLister(nested_tree)

        result = ShareTraverser(lister, ROOT).traverse_from_path("docs")

        assert _paths(result) == ["specs", "specs/design.md", "notes.txt"]
        assert all("docs" not in p for p in _paths(result))

    def test_missing_start_path_is_fatal(self, fake_lister):
        """Test a start path that cannot be listed raises."""
        with pytest.raises(ShareOperationError) as exc_info:
            ShareTraverser(fake_lister, ROOT).traverse_from_path("missing")

        assert exc_info.value.kind == FailureKind.LISTING

    def test_normalize_relative_path(self):
        """Test relative path normalization helper."""
        assert normalize_relative_path("a\\b//c/") == "a/b/c"
        assert normalize_relative_path("/") == ""


class TestCancellation:
    """Test cooperative cancellation."""

    def test_cancelled_before_start(self, fake_lister):
        """Test a pre-set event returns immediately without listing."""
        event = threading.Event()
        event.set()

        result = ShareTraverser(fake_lister, ROOT).traverse_from_root(cancel_event=event)

        assert result.cancelled is True
        assert result.entries == []
        assert fake_lister.calls == []

    def test_cancelled_mid_walk(self, nested_tree):
        """Test cancellation stops before the next directory listing."""
        event = threading.Event()

        class CancellingLister(FakeLister):
            def list_directory(self, address):
                children = super().list_directory(address)
                if address == f"{ROOT}docs/":
                    event.set()
                return children

        lister = CancellingLister(nested_tree)
        result = ShareTraverser(lister, ROOT).traverse_from_root(cancel_event=event)

        assert result.cancelled is True
        assert lister.calls == [ROOT, f"{ROOT}docs/"]
        assert _paths(result) == ["docs", "docs/specs"]

    def test_unset_event_completes(self, fake_lister):
        """Test an unset event does not affect the walk."""
        result = ShareTraverser(fake_lister, ROOT).traverse_from_root(
            cancel_event=threading.Event()
        )

        assert result.cancelled is False
        assert len(result) == 3


class TestProbe:
    """Test the connectivity probe."""

    def test_probe_success(self, fake_lister):
        """Test a reachable share probes successfully with one listing."""
        result = ShareTraverser(fake_lister, ROOT).probe()

        assert result.success is True
        assert result.kind is None
        assert bool(result) is True
        assert fake_lister.calls == [ROOT]

    @pytest.mark.parametrize(
        "kind",
        [FailureKind.AUTHENTICATION, FailureKind.CONNECTIVITY, FailureKind.LISTING],
    )
    def test_probe_failure_kinds(self, kind):
        """Test probe failures carry their category and cause."""
        lister = FakeLister({ROOT: ShareOperationError(kind, "nope")})

        result = ShareTraverser(lister, ROOT).probe()

        assert result == ProbeResult(success=False, address=ROOT, kind=kind, message="nope")
        assert not result

    def test_probe_never_raises(self):
        """Test unexpected errors are reported rather than raised."""
        lister = FakeLister({ROOT: KeyError("weird")})

        result = ShareTraverser(lister, ROOT).probe()

        assert result.success is False
        assert result.kind == FailureKind.UNEXPECTED
        assert "weird" in result.message


class TestConvenienceQueries:
    """Test traverse-then-filter operations on the engine."""

    def test_get_files_only(self, fake_lister):
        """Test files-only listing from the root."""
        files = ShareTraverser(fake_lister, ROOT).get_files_only()

        assert _paths(files) == ["sub/b.log", "a.txt"]

    def test_get_directories_only(self, fake_lister):
        """Test directories-only listing from the root."""
        directories = ShareTraverser(fake_lister, ROOT).get_directories_only()

        assert _paths(directories) == ["sub"]

    def test_search_files(self, fake_lister):
        """Test searching by pattern from the root."""
        matches = ShareTraverser(fake_lister, ROOT).search_files(r".*\.txt")

        assert _paths(matches) == ["a.txt"]


class TestResultModels:
    """Test traversal result types."""

    def test_remote_entry_is_immutable(self):
        """Test entries cannot be modified after construction."""
        entry = RemoteEntry("a.txt", "a.txt", False, 10, MODIFIED, f"{ROOT}a.txt")

        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.size = 11  # type: ignore[misc]

    def test_remote_entry_str(self):
        """Test the entry summary line."""
        entry = RemoteEntry("sub", "sub", True, 0, MODIFIED, f"{ROOT}sub/")

        assert str(entry).startswith("[DIR] sub (0 bytes")

    def test_traversal_result_is_sequence_like(self):
        """Test results iterate and size over their entries."""
        entry = RemoteEntry("a.txt", "a.txt", False, 10, MODIFIED, f"{ROOT}a.txt")
        result = TraversalResult(entries=[entry])

        assert len(result) == 1
        assert list(result) == [entry]
        assert result.skipped_count == 0
