"""CLI for cloning every repository of an organisation."""

import typer

from ...config.settings import get_settings
from ...core.constants import DEFAULT_WORKERS, EXIT_API_ERROR, EXIT_FATAL, MAX_WORKERS
from ...core.github_client import GitHubClient, GitHubError
from .service import CloneAborted, clone_org

app = typer.Typer(add_completion=False)


def require_token() -> str:
    token = get_settings().github_token
    if not token:
        typer.echo("Specify GITHUB_TOKEN environment variable", err=True)
        raise typer.Exit(code=EXIT_FATAL)
    return token


@app.command()
def clone(
    org: str = typer.Argument(..., help="GitHub organisation to clone"),
    dest: str = typer.Argument(..., help="Path to clone repos to"),
    workers: int = typer.Option(
        DEFAULT_WORKERS,
        "--workers",
        min=1,
        max=MAX_WORKERS,
        help=f"How many git repos should be pulled in parallel (max is {MAX_WORKERS})",
    ),
    list_first: bool = typer.Option(
        False, "--list-first", help="Fetch the whole repository list before cloning anything"
    ),
):
    """Shallow-clone all repositories of ORG into DEST."""
    token = require_token()
    s = get_settings()
    client = GitHubClient(token, api_base=s.github_api_url, timeout=s.http_timeout)

    try:
        report = clone_org(org, dest, token, workers, list_first=list_first, client=client)
    except OSError as e:
        typer.echo(f"Unable to create clone directory: {e}", err=True)
        raise typer.Exit(code=EXIT_FATAL)
    except GitHubError as e:
        typer.echo(f"fatal error calling github api: {e}", err=True)
        raise typer.Exit(code=EXIT_API_ERROR)
    except CloneAborted as e:
        typer.echo(e.report.summary(), err=True)
        raise typer.Exit(code=EXIT_FATAL)

    typer.echo(report.summary())
