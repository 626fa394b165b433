"""Pydantic models shared by the SCM provider layer."""

from enum import StrEnum

import httpx
from pydantic import BaseModel, ConfigDict, Field


class SCMType(StrEnum):
    GITLAB = "Gitlab"


class APIVersion(StrEnum):
    """Major revision of the GitLab wire API spoken by a server."""

    V3 = "v3"
    V4 = "v4"


class BuildStatus(StrEnum):
    """Status of a pipeline record as reported by the build subsystem."""

    PENDING = "Pending"
    RUNNING = "Running"
    SUCCESS = "Success"
    FAILED = "Failed"
    ABORTED = "Aborted"


class FileKind(StrEnum):
    FILE = "blob"
    DIRECTORY = "tree"
    SUBMODULE = "commit"


class ConnectionConfig(BaseModel):
    """Connection parameters for one GitLab installation and one identity.

    The model is mutable: ``token`` is filled in once a password
    grant succeeds and ``server`` may be rewritten for the public GitLab, so
    every holder of the same instance observes the resolved values.
    """

    server: str
    username: str = ""
    password: str = Field(default="", repr=False)
    token: str = Field(default="", repr=False)

    @property
    def uses_oauth(self) -> bool:
        """OAuth bearer tokens are used whenever a username is configured."""
        return bool(self.username)

    def auth_headers(self) -> dict[str, str]:
        """Headers carrying the resolved credential for raw API requests."""
        headers = {"Content-Type": "application/json"}
        if self.uses_oauth:
            headers["Authorization"] = f"Bearer {self.token}"
        else:
            headers["PRIVATE-TOKEN"] = self.token
        return headers


class ServerIdentity(BaseModel, frozen=True):
    """Normalized server address used as version cache key.

    Scheme and host are lower-cased, default ports and trailing slashes are
    dropped, so ``HTTPS://GitLab.example.com/`` and
    ``https://gitlab.example.com`` share one identity.
    """

    scheme: str
    host: str
    port: int | None = None
    path: str = ""

    @classmethod
    def from_server(cls, server: str) -> "ServerIdentity":
        url = httpx.URL(server.strip())
        return cls(
            scheme=url.scheme.lower(),
            host=url.host.lower(),
            port=url.port,
            path=url.path.rstrip("/"),
        )

    def __str__(self) -> str:
        port = f":{self.port}" if self.port is not None else ""
        return f"{self.scheme}://{self.host}{port}{self.path}"


class RepoFile(BaseModel):
    """One entry of a repository tree listing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    kind: FileKind = Field(..., alias="type")
    path: str


class OAuthToken(BaseModel, frozen=True):
    """Token object returned by the GitLab ``/oauth/token`` endpoint."""

    access_token: str
    token_type: str | None = None
    refresh_token: str | None = None
    scope: str | None = None
    created_at: int | None = None


class VersionInfo(BaseModel, frozen=True):
    """Body of the ``/api/v4/version`` response.

    Any JSON object counts as a version body; servers may omit fields.
    """

    version: str = ""
    revision: str = ""
