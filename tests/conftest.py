"""Test configuration and fixtures for share-tools."""

from datetime import datetime, timezone

import pytest

from share_tools.core import FailureKind, ShareOperationError
from share_tools.listing import ChildDescriptor
from share_tools.schemas import ShareConfig

ROOT = "smb://fileserver/share/"
MODIFIED = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)


def make_file(name, size, parent=ROOT):
    """Build a file descriptor as a lister would report it."""
    return ChildDescriptor(
        name=name,
        is_directory=False,
        size=size,
        last_modified=MODIFIED,
        full_path=f"{parent}{name}",
    )


def make_dir(name, parent=ROOT, size=0):
    """Build a directory descriptor, with the trailing marker SMB servers add."""
    return ChildDescriptor(
        name=f"{name}/",
        is_directory=True,
        size=size,
        last_modified=MODIFIED,
        full_path=f"{parent}{name}/",
    )


class FakeLister:
    """In-memory directory lister keyed by directory address.

    Values are either a list of ChildDescriptor or an exception to raise.
    """

    def __init__(self, tree):
        self.tree = tree
        self.calls = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True

    def list_directory(self, address):
        self.calls.append(address)
        if address not in self.tree:
            raise ShareOperationError(
                FailureKind.LISTING, f"No such directory: {address}", address=address
            )
        outcome = self.tree[address]
        if isinstance(outcome, Exception):
            raise outcome
        return list(outcome)


@pytest.fixture
def sample_tree():
    """Share root with directory ``sub`` (holding ``b.log``) and file ``a.txt``."""
    return {
        ROOT: [make_dir("sub"), make_file("a.txt", 10)],
        f"{ROOT}sub/": [make_file("b.log", 20, parent=f"{ROOT}sub/")],
    }


@pytest.fixture
def fake_lister(sample_tree):
    """Fake lister over the sample tree."""
    return FakeLister(sample_tree)


@pytest.fixture
def nested_tree():
    """A deeper tree for ordering checks.

    root/
        docs/
            specs/
                design.md
            notes.txt
        empty/
        media/
            photo.jpg
        readme.md
    """
    docs = f"{ROOT}docs/"
    specs = f"{docs}specs/"
    media = f"{ROOT}media/"
    return {
        ROOT: [
            make_dir("docs"),
            make_dir("empty"),
            make_dir("media"),
            make_file("readme.md", 5),
        ],
        docs: [make_dir("specs", parent=docs), make_file("notes.txt", 7, parent=docs)],
        specs: [make_file("design.md", 300, parent=specs)],
        f"{ROOT}empty/": [],
        media: [make_file("photo.jpg", 2048, parent=media)],
    }


@pytest.fixture
def share_config():
    """Share configuration with credentials."""
    return ShareConfig(
        server_address=ROOT,
        domain="WORKGROUP",
        username="auditor",
        password="secret",
    )
