"""Call context and built-in hooks wrapped around every GitLab request."""

import contextlib
import contextvars
import time
from collections.abc import Callable, Generator, Sequence
from dataclasses import dataclass

import structlog

from cyclone_scm.metrics import (
    gitlab_request,
    gitlab_request_duration,
    gitlab_request_errors,
)

logger = structlog.get_logger(__name__)

# Local storage for latency tracking (tuple stack to support nested calls)
_latency_tracker: contextvars.ContextVar[tuple[float, ...]] = contextvars.ContextVar(
    f"{__name__}.latency_tracker", default=()
)


@dataclass(frozen=True)
class GitLabApiCallContext:
    """Context information passed to API call hooks.

    Attributes:
        method: API method name (e.g., "version.get", "languages.get")
        verb: HTTP verb (e.g., "GET")
        server: GitLab server the request goes to
    """

    method: str
    verb: str
    server: str


type GitLabApiHook = Callable[[GitLabApiCallContext], None]


def _metrics_hook(context: GitLabApiCallContext) -> None:
    """Built-in Prometheus metrics hook."""
    gitlab_request.labels(context.method, context.verb).inc()


def _error_metrics_hook(context: GitLabApiCallContext) -> None:
    gitlab_request_errors.labels(context.method, context.verb).inc()


def _latency_start_hook(_context: GitLabApiCallContext) -> None:
    """Built-in hook to start latency measurement."""
    _latency_tracker.set((*_latency_tracker.get(), time.perf_counter()))


def _latency_end_hook(context: GitLabApiCallContext) -> None:
    """Built-in hook to record latency measurement."""
    stack = _latency_tracker.get()
    start_time = stack[-1]
    _latency_tracker.set(stack[:-1])
    duration = time.perf_counter() - start_time
    gitlab_request_duration.labels(context.method, context.verb).observe(duration)


def _request_log_hook(context: GitLabApiCallContext) -> None:
    """Built-in hook for logging API requests."""
    logger.debug(
        "API request", method=context.method, verb=context.verb, server=context.server
    )


@contextlib.contextmanager
def gitlab_api_call(
    method: str,
    verb: str,
    server: str,
    pre_hooks: Sequence[GitLabApiHook] | None = None,
) -> Generator[GitLabApiCallContext, None, None]:
    """Run the wrapped request with the built-in hooks plus ``pre_hooks``.

    Caller hooks run after the request counter and debug log and before the
    latency clock starts; a hook that raises aborts the call before the
    request is sent. Failed requests are counted as errors and re-raised.

    Example:
        >>> with gitlab_api_call("version.get", "GET", "https://gitlab.com"):
        ...     response = client.get("https://gitlab.com/api/v4/version")
    """
    context = GitLabApiCallContext(method=method, verb=verb, server=server)
    for hook in (
        _metrics_hook,
        _request_log_hook,
        *(pre_hooks or []),
        _latency_start_hook,
    ):
        hook(context)
    try:
        yield context
    except Exception:
        _error_metrics_hook(context)
        raise
    finally:
        _latency_end_hook(context)
