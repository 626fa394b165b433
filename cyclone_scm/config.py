"""Configuration management using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cyclone_scm.models import ConnectionConfig

DEFAULT_STATUS_CONTEXT = "continuous-integration/cyclone"


class Settings(BaseSettings):
    """Settings from ``CYCLONE_SCM_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CYCLONE_SCM_",
        extra="ignore",
    )

    # Connection defaults
    server: str = Field(
        default="https://gitlab.com",
        description="GitLab server URL",
    )
    username: str = Field(
        default="",
        description="GitLab username; when set, OAuth tokens are used",
    )
    password: str = Field(
        default="",
        description="GitLab password, exchanged for a token if no token is set",
        repr=False,
    )
    token: str = Field(
        default="",
        description="GitLab private token or OAuth access token",
        repr=False,
    )

    # GitLab API
    api_timeout: float = Field(
        default=30,
        description="GitLab API timeout in seconds",
    )
    status_context: str = Field(
        default=DEFAULT_STATUS_CONTEXT,
        description="Context name of the commit statuses set for builds",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format_json: bool = Field(
        default=True,
        description="Use JSON logging format (False for human-readable logs in development)",
    )

    def connection_config(self) -> ConnectionConfig:
        """Build a fresh, unresolved connection config from the settings."""
        return ConnectionConfig(
            server=self.server,
            username=self.username,
            password=self.password,
            token=self.token,
        )
