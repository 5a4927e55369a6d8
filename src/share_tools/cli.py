"""Command-line interface for share-tools.

Commands:
    - probe: Check that the share is reachable with the given credentials
    - list: Recursively list share contents as a table
    - search: Recursively find files whose name matches a regular expression

Every command probes the share first and exits with status 1 if the probe fails.
"""

from typing import Annotated, Optional

import pydantic
import typer

from . import __version__
from .cli_params import (
    content_type_option,
    domain_option,
    password_option,
    path_option,
    port_option,
    server_option,
    timeout_option,
    username_option,
)
from .core.exceptions import ShareToolsError
from .reporting import render_table
from .schemas import ShareConfig
from .traversal import TraversalResult, compile_pattern
from .unified import (
    CONTENT_TYPES,
    list_share_contents,
    search_share,
    verify_share_access,
)

app = typer.Typer(
    name="share-tools",
    help="Recursive inventory and search of remote SMB shares.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"share-tools {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    Share-Tools: recursive inventory and search of remote SMB shares.
    """
    pass


def _create_share_config(
    server: str,
    domain: str,
    username: Optional[str],
    password: Optional[str],
    port: Optional[int],
    timeout: Optional[int],
) -> ShareConfig:
    """Build a ShareConfig from CLI options, exiting on invalid input."""
    overrides = {}
    if port is not None:
        overrides["port"] = port
    if timeout is not None:
        overrides["timeout"] = timeout

    try:
        return ShareConfig(
            server_address=server,
            domain=domain,
            username=username,
            password=password,
            **overrides,
        )
    except pydantic.ValidationError as e:
        for error in e.errors():
            typer.echo(f"Configuration error: {error['msg']}", err=True)
        raise typer.Exit(1)


def _probe_or_exit(config: ShareConfig) -> None:
    """Probe the share and exit with status 1 on failure."""
    result = verify_share_access(config)
    if not result:
        kind = result.kind.name if result.kind else "UNEXPECTED"
        typer.echo(f"✗ {kind}: {result.message}", err=True)
        raise typer.Exit(1)
    typer.echo(f"✓ {result.message}")


def _echo_skipped(result: TraversalResult) -> None:
    if result.skipped_count:
        typer.echo(f"Skipped unreadable directories: {result.skipped_count}", err=True)
        for skipped in result.skipped:
            typer.echo(
                f"  {skipped.relative_path} ({skipped.kind.name}): {skipped.message}",
                err=True,
            )


@app.command("probe")
def probe_cmd(
    server: Annotated[str, server_option()],
    domain: Annotated[str, domain_option()] = "",
    username: Annotated[Optional[str], username_option()] = None,
    password: Annotated[Optional[str], password_option()] = None,
    port: Annotated[Optional[int], port_option()] = None,
    timeout: Annotated[Optional[int], timeout_option()] = None,
) -> None:
    """
    Check that the share is reachable with the given credentials.

    Example:
        share-tools probe --server smb://fileserver/projects/ -u alice -p secret
    """
    config = _create_share_config(server, domain, username, password, port, timeout)
    _probe_or_exit(config)


@app.command("list")
def list_cmd(
    server: Annotated[str, server_option()],
    content_type: Annotated[str, content_type_option()] = "all",
    path: Annotated[Optional[str], path_option()] = None,
    domain: Annotated[str, domain_option()] = "",
    username: Annotated[Optional[str], username_option()] = None,
    password: Annotated[Optional[str], password_option()] = None,
    port: Annotated[Optional[int], port_option()] = None,
    timeout: Annotated[Optional[int], timeout_option()] = None,
) -> None:
    """
    Recursively list share contents.

    Examples:
        share-tools list --server smb://fileserver/projects/ -u alice -p secret
        share-tools list --server smb://fileserver/public/ --path reports --type files
    """
    if content_type not in CONTENT_TYPES:
        typer.echo(
            f"Error: --type must be 'all', 'files' or 'directories', got: {content_type}",
            err=True,
        )
        raise typer.Exit(1)

    config = _create_share_config(server, domain, username, password, port, timeout)
    _probe_or_exit(config)

    try:
        result = list_share_contents(config, content_type=content_type, path=path)
    except ShareToolsError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for line in render_table(result):
        typer.echo(line)
    _echo_skipped(result)


@app.command("search")
def search_cmd(
    pattern: Annotated[
        str, typer.Argument(help="Regular expression matched against whole file names")
    ],
    server: Annotated[str, server_option()],
    path: Annotated[Optional[str], path_option()] = None,
    domain: Annotated[str, domain_option()] = "",
    username: Annotated[Optional[str], username_option()] = None,
    password: Annotated[Optional[str], password_option()] = None,
    port: Annotated[Optional[int], port_option()] = None,
    timeout: Annotated[Optional[int], timeout_option()] = None,
) -> None:
    """
    Recursively find files whose whole name matches PATTERN.

    Example:
        share-tools search '.*\\.txt' --server smb://fileserver/projects/
    """
    try:
        compile_pattern(pattern)
    except ShareToolsError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    config = _create_share_config(server, domain, username, password, port, timeout)
    _probe_or_exit(config)

    try:
        result = search_share(config, pattern, path=path)
    except ShareToolsError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for line in render_table(result):
        typer.echo(line)
    _echo_skipped(result)


if __name__ == "__main__":
    app()
