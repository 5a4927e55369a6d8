"""Configuration management for share-tools."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    log_level: str = "INFO"
    otel_enabled: bool = False
    otel_service_name: str = "share-tools"
    otel_exporter_endpoint: str = "http://localhost:4317"
    smb_port: int = 445
    connection_timeout: int = 60

    model_config = {
        "env_prefix": "SHARE_TOOLS_",
        "case_sensitive": False,
    }


settings = Settings()
