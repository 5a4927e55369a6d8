"""Directory listing for remote shares."""

from .directory_lister import ChildDescriptor, DirectoryLister
from .smb_lister import SMBDirectoryLister, parse_smb_address

__all__ = [
    "ChildDescriptor",
    "DirectoryLister",
    "SMBDirectoryLister",
    "parse_smb_address",
]
