"""Access token resolution for GitLab connections.

A connection either carries a token (private token or OAuth access token) or
a username/password pair that is exchanged for an OAuth access token with the
password grant.
"""

from collections.abc import Sequence

import httpx
import structlog
from pydantic import ValidationError

from cyclone_scm.exceptions import MissingCredentialsError, TokenExchangeFailedError
from cyclone_scm.gitlab.instrumentation import GitLabApiHook, gitlab_api_call
from cyclone_scm.models import ConnectionConfig, OAuthToken

logger = structlog.get_logger(__name__)

PUBLIC_GITLAB_HOST = "gitlab.com"
PUBLIC_GITLAB_SERVER = "https://gitlab.com"

TOKEN_PATH = "/oauth/token"


def enforce_public_https(server: str) -> str:
    """Return the server to use for the public GitLab, forcing HTTPS.

    The public GitLab only accepts the password grant over HTTPS, so a plain
    ``http://`` address pointing at it is replaced by the canonical secure
    endpoint. Any other server is returned unchanged.

    Examples:
        >>> enforce_public_https("http://gitlab.com")
        'https://gitlab.com'
        >>> enforce_public_https("http://gitlab.example.com")
        'http://gitlab.example.com'
    """
    try:
        url = httpx.URL(server.strip())
    except httpx.InvalidURL:
        return server
    if url.scheme.lower() == "http" and url.host.lower() == PUBLIC_GITLAB_HOST:
        return PUBLIC_GITLAB_SERVER
    return server


def resolve_token(
    config: ConnectionConfig,
    client: httpx.Client,
    pre_hooks: Sequence[GitLabApiHook] | None = None,
) -> str:
    """Make sure ``config`` carries an access token and return it.

    A config which already has a token is returned as is, without any network
    traffic. Otherwise the username/password pair is exchanged for an OAuth
    access token which is stored on ``config``.

    Args:
        config: Connection config, updated in place
        client: HTTP client used for the token exchange
        pre_hooks: Additional hooks run before the token request

    Returns:
        The access token

    Raises:
        MissingCredentialsError: No token and no complete username/password pair
        TokenExchangeFailedError: The token endpoint did not return a token
    """
    if config.token:
        return config.token

    config.token = exchange_password(config, client, pre_hooks=pre_hooks)
    return config.token


def exchange_password(
    config: ConnectionConfig,
    client: httpx.Client,
    pre_hooks: Sequence[GitLabApiHook] | None = None,
) -> str:
    """Exchange the username/password of ``config`` for an access token."""
    if not config.username or not config.password:
        raise MissingCredentialsError("GitLab username or password is missing")

    server = enforce_public_https(config.server)
    if server != config.server:
        logger.info(
            "Converting SCM server to HTTPS for public GitLab",
            server=config.server,
            new_server=server,
        )
        config.server = server

    url = f"{config.server.rstrip('/')}{TOKEN_PATH}"
    body = {
        "grant_type": "password",
        "username": config.username,
        "password": config.password,
    }
    try:
        with gitlab_api_call("oauth.token", "POST", config.server, pre_hooks):
            response = client.post(
                url, json=body, headers={"Content-Type": "application/json"}
            )
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.error("Failed to request token", server=config.server, error=str(exc))
        raise TokenExchangeFailedError(f"Failed to request token: {exc}") from exc

    if not response.is_success:
        raise TokenExchangeFailedError(
            f"Failed to request token: HTTP {response.status_code}",
            body=response.text,
        )

    try:
        token = OAuthToken.model_validate_json(response.content)
    except ValidationError as exc:
        raise TokenExchangeFailedError(
            "Failed to decode token response", body=response.text
        ) from exc
    return token.access_token
