"""CLI entrypoint for bulkclone."""

import typer

from ..commands.clone.cli import app, require_token

__all__ = ["app", "main"]


def main() -> None:
    """Console-script entrypoint: GITHUB_TOKEN is checked before the command line is parsed."""
    try:
        require_token()
    except typer.Exit as e:
        raise SystemExit(e.exit_code)
    app(prog_name="bulkclone")
