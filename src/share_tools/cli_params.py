"""Shared CLI parameter definitions.

Each function returns a Typer option for use inside ``Annotated`` so every
command exposes the same connection options with the same names and help text:

    @app.command()
    def my_command(
        server: Annotated[str, server_option()],
        username: Annotated[Optional[str], username_option()] = None,
    ):
        pass
"""

from typing import Annotated, Optional

import typer


def server_option() -> Annotated[str, typer.Option]:
    """Share address option."""
    return typer.Option(
        "--server",
        "-s",
        envvar="SHARE_TOOLS_SERVER",
        help="Share address, e.g. smb://host/share/",
    )


def domain_option() -> Annotated[str, typer.Option]:
    """Domain/workgroup option."""
    return typer.Option(
        "--domain",
        "-d",
        envvar="SHARE_TOOLS_DOMAIN",
        help="Domain or workgroup (empty for the default workgroup)",
    )


def username_option() -> Annotated[Optional[str], typer.Option]:
    """Username option."""
    return typer.Option(
        "--username",
        "-u",
        envvar="SHARE_TOOLS_USERNAME",
        help="Username (omit together with --password for guest access)",
    )


def password_option() -> Annotated[Optional[str], typer.Option]:
    """Password option."""
    return typer.Option(
        "--password",
        "-p",
        envvar="SHARE_TOOLS_PASSWORD",
        help="Password (omit together with --username for guest access)",
    )


def port_option() -> Annotated[Optional[int], typer.Option]:
    """SMB port option."""
    return typer.Option("--port", help="SMB port (defaults to SHARE_TOOLS_SMB_PORT)")


def timeout_option() -> Annotated[Optional[int], typer.Option]:
    """Connection timeout option."""
    return typer.Option("--timeout", help="Connection timeout in seconds")


def path_option() -> Annotated[Optional[str], typer.Option]:
    """Starting path option."""
    return typer.Option(
        "--path", help="Path under the share root to start from (default: root)"
    )


def content_type_option() -> Annotated[str, typer.Option]:
    """Content type option."""
    return typer.Option(
        "--type", help="Entries to show: 'all', 'files' or 'directories'"
    )
