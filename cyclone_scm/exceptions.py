"""Error taxonomy of the SCM provider layer.

Every failure that leaves this package is one of the classes below. Callers
can catch a whole family (``AuthError``) or a single case
(``MissingCredentialsError``).
"""


class SCMError(Exception):
    """Base exception for the SCM provider layer."""


# ── Credentials ─────────────────────────────────────────────────────────────


class AuthError(SCMError):
    """No usable access token could be obtained."""


class MissingCredentialsError(AuthError):
    """Neither a token nor a username/password pair is configured."""


class TokenExchangeFailedError(AuthError):
    """The password grant against ``/oauth/token`` did not yield a token."""

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(message)
        self.body = body


# ── Version detection ───────────────────────────────────────────────────────


class ProbeError(SCMError):
    """The API version of a server could not be detected."""


class ServerUnreachableError(ProbeError):
    """The version probe failed on the transport level."""


# ── Client construction ─────────────────────────────────────────────────────


class ProviderError(SCMError):
    """A provider adapter could not be built."""


class UnsupportedAPIVersionError(ProviderError):
    """No adapter exists for the detected API version."""


class ClientConstructionError(ProviderError):
    """The generation-specific API client rejected its configuration."""


# ── Operations ──────────────────────────────────────────────────────────────


class OperationError(SCMError):
    """An operation against a resolved provider failed."""


class HTTPFailureError(OperationError):
    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(f"{message}: HTTP {status_code} {body}".rstrip())
        self.status_code = status_code
        self.body = body
