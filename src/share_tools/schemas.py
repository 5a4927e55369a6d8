"""Share connection configuration schema for share-tools."""

from typing import Any, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from share_tools.core import settings


class ShareConfig(BaseModel):
    """Configuration for an SMB share connection.

    Leaving both ``username`` and ``password`` unset (or empty) selects guest
    access. Setting only one of them is rejected.

    The server address is a URL and must be URL-encoded: a share or directory
    name containing ``#``, ``?``, ``%`` or a space is written as ``%23``,
    ``%3F``, ``%25`` or ``%20``. A port in the address (``smb://host:4455/share/``)
    sets ``port``; passing a different ``port`` alongside it is rejected.

    Example:
        config = ShareConfig(
            server_address="smb://fileserver.local/projects/",
            domain="WORKGROUP",
            username="auditor",
            password="secret",
        )
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    server_address: str = Field(
        ..., description="URL-encoded share address, e.g. smb://host[:port]/share/"
    )
    domain: str = Field(default="", description="Domain or workgroup")
    username: Optional[str] = Field(default=None, description="Username")
    password: Optional[str] = Field(default=None, description="Password")
    port: int = Field(default_factory=lambda: settings.smb_port, description="SMB port")
    timeout: int = Field(
        default_factory=lambda: settings.connection_timeout,
        description="Connection timeout in seconds",
    )
    encrypt: Optional[bool] = Field(
        default=None, description="Require SMB3 encryption (None lets the server decide)"
    )

    @field_validator("server_address")
    @classmethod
    def _check_server_address(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme.lower() != "smb":
            raise ValueError(f"server address must start with 'smb://': {value}")
        if not parsed.hostname:
            raise ValueError(f"server address is missing a host: {value}")
        if not parsed.path.strip("/"):
            raise ValueError(f"server address is missing a share name: {value}")
        if parsed.query or parsed.fragment or value.endswith(("?", "#")):
            raise ValueError(
                f"server address must be URL-encoded ('#' as %23, '?' as %3F): {value}"
            )
        if not value.endswith("/"):
            value += "/"
        return value

    @model_validator(mode="before")
    @classmethod
    def _port_from_address(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not isinstance(data.get("server_address"), str):
            return data

        address_port = urlparse(data["server_address"]).port
        if address_port is None:
            return data

        explicit_port = data.get("port")
        if explicit_port is not None and int(explicit_port) != address_port:
            raise ValueError(
                f"port {explicit_port} conflicts with port {address_port} "
                f"in server address {data['server_address']}"
            )
        return {**data, "port": address_port}

    @field_validator("domain", mode="before")
    @classmethod
    def _default_domain(cls, value: Optional[str]) -> str:
        return value or ""

    @model_validator(mode="after")
    def _check_credentials(self) -> "ShareConfig":
        if bool(self.username) != bool(self.password):
            raise ValueError(
                "username and password must be given together, or both left "
                "empty for guest access"
            )
        return self

    @property
    def is_guest(self) -> bool:
        """True when no credentials are configured."""
        return not self.username

    @property
    def account(self) -> Optional[str]:
        """Username qualified with the domain, as NTLM expects it."""
        if self.is_guest:
            return None
        if self.domain:
            return f"{self.domain}\\{self.username}"
        return self.username
