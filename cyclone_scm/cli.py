import json
import sys
from collections.abc import Callable
from functools import wraps
from typing import Any

import click

from cyclone_scm.config import Settings
from cyclone_scm.exceptions import SCMError
from cyclone_scm.gitlab.factory import GitLabProviderFactory
from cyclone_scm.gitlab.provider import GitLabProvider
from cyclone_scm.logger import setup_logging
from cyclone_scm.models import BuildStatus


def handle_errors(function: Callable) -> Callable:
    """Print SCM and input errors on stderr and exit non-zero."""

    @wraps(function)
    def f(*args: Any, **kwargs: Any) -> Any:
        try:
            return function(*args, **kwargs)
        except (SCMError, ValueError) as e:
            click.echo(f"error: {e}", err=True)
            sys.exit(1)

    return f


@click.group()
@click.option("--server", default=None, help="GitLab server URL.")
@click.option("--username", default=None, help="GitLab username.")
@click.option("--password", default=None, help="GitLab password.")
@click.option("--token", default=None, help="GitLab private or OAuth token.")
@click.pass_context
def root(
    ctx: click.Context,
    server: str | None,
    username: str | None,
    password: str | None,
    token: str | None,
) -> None:
    overrides = {
        "server": server,
        "username": username,
        "password": password,
        "token": token,
    }
    settings = Settings(**{k: v for k, v in overrides.items() if v is not None})
    setup_logging(settings)
    ctx.obj = {
        "settings": settings,
        "factory": GitLabProviderFactory(settings=settings),
    }
    ctx.call_on_close(ctx.obj["factory"].close)


def _provider(ctx: click.Context) -> GitLabProvider:
    settings: Settings = ctx.obj["settings"]
    provider = ctx.obj["factory"].new_provider(settings.connection_config())
    ctx.call_on_close(provider.close)
    return provider


@root.command()
@click.pass_context
@handle_errors
def probe(ctx: click.Context) -> None:
    """Print the API version of the GitLab server."""
    settings: Settings = ctx.obj["settings"]
    click.echo(ctx.obj["factory"].api_version(settings.connection_config()))


@root.command()
@click.argument("project")
@click.option("--top", is_flag=True, help="Only print the main language.")
@click.pass_context
@handle_errors
def languages(ctx: click.Context, project: str, top: bool) -> None:
    """Print the language breakdown of PROJECT (e.g. group/project)."""
    provider = _provider(ctx)
    if top:
        click.echo(provider.detect_language(project))
        return
    click.echo(json.dumps(provider.get_languages(project), indent=2))


@root.command()
@click.argument("project")
@click.pass_context
@handle_errors
def contents(ctx: click.Context, project: str) -> None:
    """List the repository root of PROJECT (e.g. group/project)."""
    for item in _provider(ctx).list_contents(project):
        click.echo(f"{item.kind.value}\t{item.path}")


@root.command()
@click.argument("repo_url")
@click.argument("commit_sha")
@click.argument("status", type=click.Choice([s.value for s in BuildStatus]))
@click.argument("target_url")
@click.pass_context
@handle_errors
def status(
    ctx: click.Context, repo_url: str, commit_sha: str, status: str, target_url: str
) -> None:
    """Set the commit status of COMMIT_SHA in REPO_URL."""
    _provider(ctx).report_status(
        BuildStatus(status), target_url, repo_url, commit_sha
    )
