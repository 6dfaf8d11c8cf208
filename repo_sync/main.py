"""
repo-sync — CLI Entry Point

Usage:
    repo-sync sync [--file repos.yml] [--force-push] [--overwrite-repo-visibility] [--json]
    repo-sync check-config [--file repos.yml]
    repo-sync list-repos [--file repos.yml] [--json]
    repo-sync derive-url https://ghes.example.com/api/v3
"""

from __future__ import annotations

# Load .env file FIRST, before anything reads env vars
from pathlib import Path
from dotenv import load_dotenv

_env_file = Path.cwd() / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

from typing import Optional

import click

from . import __version__
from .cli.sync import check_config, derive_url, list_repos, sync
from .logging_config import LOG_FORMATS, setup_logging


@click.group()
@click.version_option(__version__, prog_name="repo-sync")
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR (default: LOG_LEVEL or INFO)")
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMATS),
    default=None,
    help="Log output format (default: LOG_FORMAT, github on Actions, else text)",
)
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str], log_format: Optional[str]) -> None:
    """repo-sync — Mirror GitHub repositories between two hosts."""
    ctx.ensure_object(dict)
    setup_logging(level=log_level, format_type=log_format)


cli.add_command(sync)
cli.add_command(check_config)
cli.add_command(list_repos)
cli.add_command(derive_url)


if __name__ == "__main__":
    cli()
