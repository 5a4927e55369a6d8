"""SMB directory listing built on the smbprotocol high-level client.

This module provides the concrete directory lister used against real SMB
shares. It owns the SMB session for one share configuration and translates
``smb://`` addresses into the UNC paths ``smbclient`` expects.

Authentication:
    1. Explicit credentials (username/password, optionally qualified by domain)
    2. Guest access (no credentials)

Error Mapping:
    smbprotocol raises a family of exception classes. They are folded into
    ``ShareOperationError`` with one of four kinds:
    AUTHENTICATION, CONNECTIVITY, LISTING or UNEXPECTED.
"""

import socket
from datetime import datetime, timezone
from urllib.parse import unquote, urlparse

import smbclient
from smbprotocol.exceptions import (
    SMBAuthenticationError,
    SMBConnectionClosed,
    SMBException,
)

from share_tools.core import FailureKind, ShareOperationError, get_logger
from share_tools.listing.directory_lister import ChildDescriptor
from share_tools.schemas import ShareConfig

logger = get_logger(__name__)


def parse_smb_address(address: str) -> tuple[str, str]:
    """Parse an SMB address into server and UNC path components.

    The address is URL-encoded; path components are decoded for the UNC
    path. UNC paths carry no port, so a port in the address is not returned
    here; ``ShareConfig`` takes it from the address instead.

    Args:
        address: Address in format smb://host[:port]/share[/path][/]

    Returns:
        Tuple of (server, unc_path), e.g. ("host", "\\\\host\\share\\path")

    Raises:
        ShareOperationError: CONNECTIVITY if the address is malformed
    """
    parsed = urlparse(address)
    if parsed.scheme.lower() != "smb":
        raise ShareOperationError(
            FailureKind.CONNECTIVITY,
            f"SMB address must start with 'smb://': {address}",
            address=address,
        )

    if parsed.query or parsed.fragment or address.endswith(("?", "#")):
        raise ShareOperationError(
            FailureKind.CONNECTIVITY,
            f"SMB address must be URL-encoded ('#' as %23, '?' as %3F): {address}",
            address=address,
        )

    server = parsed.hostname
    if not server:
        raise ShareOperationError(
            FailureKind.CONNECTIVITY,
            f"Invalid SMB address, missing host: {address}",
            address=address,
        )

    components = [unquote(part) for part in parsed.path.split("/") if part]
    if not components:
        raise ShareOperationError(
            FailureKind.CONNECTIVITY,
            f"Invalid SMB address, missing share: {address}",
            address=address,
        )

    unc_path = "\\\\" + "\\".join([server] + components)
    logger.debug("SMB address parsed", server=server, unc_path=unc_path)
    return server, unc_path


class SMBDirectoryLister:
    """Lists remote SMB directories for a single share configuration."""

    def __init__(self, config: ShareConfig):
        """Initialize SMB directory lister.

        Args:
            config: Share connection configuration
        """
        self.config = config
        self.server, _ = parse_smb_address(config.server_address)
        self._session_registered = False
        logger.info(
            "SMB directory lister initialized",
            server=self.server,
            port=config.port,
            guest=config.is_guest,
        )

    def __enter__(self) -> "SMBDirectoryLister":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _ensure_session(self) -> None:
        """Register the SMB session on first use."""
        if self._session_registered:
            return

        try:
            smbclient.register_session(
                self.server,
                username=self.config.account,
                password=self.config.password or None,
                port=self.config.port,
                encrypt=self.config.encrypt,
                connection_timeout=self.config.timeout,
            )
        except SMBAuthenticationError as e:
            error_msg = f"Authentication failed for '{self.server}': {e}"
            logger.error(error_msg, server=self.server, error=str(e))
            raise ShareOperationError(
                FailureKind.AUTHENTICATION, error_msg, address=self.server
            )
        except (SMBException, ValueError, OSError) as e:
            error_msg = f"Failed to connect to SMB server '{self.server}': {e}"
            logger.error(error_msg, server=self.server, error=str(e))
            raise ShareOperationError(
                FailureKind.CONNECTIVITY, error_msg, address=self.server
            )

        self._session_registered = True
        logger.info("SMB session registered", server=self.server)

    def list_directory(self, address: str) -> list[ChildDescriptor]:
        """List the immediate children of an SMB directory.

        Args:
            address: Directory address in format smb://host/share/path/

        Returns:
            Child descriptors in the order the server reported them

        Raises:
            ShareOperationError: If the directory cannot be listed
        """
        _, unc_path = parse_smb_address(address)
        self._ensure_session()

        logger.debug("Listing SMB directory", address=address, unc_path=unc_path)

        try:
            children = []
            for entry in smbclient.scandir(unc_path, port=self.config.port):
                if entry.name in (".", ".."):
                    continue

                is_directory = entry.is_dir()
                stat = entry.stat()
                children.append(
                    ChildDescriptor(
                        name=entry.name,
                        is_directory=is_directory,
                        size=0 if is_directory else stat.st_size,
                        last_modified=datetime.fromtimestamp(
                            stat.st_mtime, tz=timezone.utc
                        ),
                        full_path=entry.path,
                    )
                )

        except SMBAuthenticationError as e:
            error_msg = f"Authentication failed listing '{address}': {e}"
            logger.error(error_msg, address=address, error=str(e))
            raise ShareOperationError(
                FailureKind.AUTHENTICATION, error_msg, address=address
            )
        except (
            SMBConnectionClosed,
            ConnectionError,
            socket.timeout,
            ValueError,
        ) as e:
            error_msg = f"Lost connection listing '{address}': {e}"
            logger.error(error_msg, address=address, error=str(e))
            raise ShareOperationError(
                FailureKind.CONNECTIVITY, error_msg, address=address
            )
        except (SMBException, OSError) as e:
            error_msg = f"Failed to list SMB directory '{address}': {e}"
            logger.error(error_msg, address=address, error=str(e))
            raise ShareOperationError(FailureKind.LISTING, error_msg, address=address)
        except Exception as e:
            error_msg = f"Unexpected error listing '{address}': {e}"
            logger.error(error_msg, address=address, error=str(e))
            raise ShareOperationError(
                FailureKind.UNEXPECTED, error_msg, address=address
            )

        logger.debug("SMB directory listed", address=address, child_count=len(children))
        return children

    def close(self) -> None:
        """Drop the registered SMB session, if any."""
        if not self._session_registered:
            return

        try:
            smbclient.delete_session(self.server, port=self.config.port)
        except SMBException as e:
            logger.warning("Failed to close SMB session", server=self.server, error=str(e))
        finally:
            self._session_registered = False
