"""
CLI sync commands — run the mirror, validate config, inspect the repo list.

Usage:
    repo-sync sync [--file FILE] [--source-github-token T] [--target-github-token T]
                   [--source-github-api-url URL] [--target-github-api-url URL]
                   [--overwrite-repo-visibility] [--force-push] [--json]
    repo-sync check-config [same options as sync]
    repo-sync list-repos [--file FILE] [--json]
    repo-sync derive-url API_URL
"""

from __future__ import annotations

import json as json_lib
import logging
from typing import Any, Callable, Dict, List

import click

from ..config.repo_list import RepoSpec, load_repo_list
from ..config.settings import SyncSettings, resolve_repo_list_file
from ..mirror.errors import ConfigError, RepoListError
from ..mirror.models import RunSummary

logger = logging.getLogger(__name__)


def _file_option(fn: Callable) -> Callable:
    return click.option(
        "--file", "-f", "repo_list_file", default=None,
        help="Repository list YAML file (default: actions-list.yml)",
    )(fn)


def sync_options(fn: Callable) -> Callable:
    """Options shared by ``sync`` and ``check-config``."""
    options = [
        click.option("--source-github-token", default=None, help="GitHub PAT for source repositories"),
        click.option("--target-github-token", default=None, help="GitHub PAT for target repositories"),
        click.option("--source-github-api-url", default=None, help="Source GitHub API URL (default: https://api.github.com)"),
        click.option("--target-github-api-url", default=None, help="Target GitHub API URL (default: source API URL)"),
        click.option(
            "--overwrite-repo-visibility", is_flag=True, default=False,
            help="Overwrite visibility of existing repositories to match YAML config",
        ),
        click.option("--force-push", is_flag=True, default=False, help="Force push to target repositories (overwrites history)"),
    ]
    for option in reversed(options):
        fn = option(fn)
    return _file_option(fn)


def _setting_names(options: Dict[str, Any]) -> Dict[str, Any]:
    """click parameter names → setting names (``force_push`` → ``force-push``)."""
    return {name.replace("_", "-"): value for name, value in options.items()}


def _resolve_settings(options: Dict[str, Any]) -> SyncSettings:
    try:
        return SyncSettings.resolve(_setting_names(options))
    except ConfigError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)


def _load_specs(path) -> List[RepoSpec]:
    try:
        return load_repo_list(path)
    except RepoListError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        raise SystemExit(1)


def summary_lines(summary: RunSummary, show_visibility: bool) -> List[str]:
    """Human-readable run summary."""
    lines = [
        "",
        "=== SYNC SUMMARY ===",
        f"Total repositories: {summary.total}",
        f"✅ Successful: {summary.successful}",
        f"❌ Failed: {summary.failed}",
        f"🆕 Created: {summary.created}",
        f"🔄 Updated: {summary.updated}",
    ]
    if show_visibility:
        lines.append(f"👁️  Visibility updated: {summary.visibility_updated}")
    lines.append(f"📝 Description updated: {summary.description_updated}")
    lines.append(f"📦 Archived: {summary.archived}")

    if summary.failures:
        lines.append("")
        lines.append("❌ Failed repositories:")
        for repo, error in summary.failures:
            lines.append(f"  • {repo}: {error}")
    return lines


@click.command("sync")
@sync_options
@click.option("--json", "as_json", is_flag=True, help="Print the summary as JSON")
@click.pass_context
def sync(ctx: click.Context, as_json: bool, **options: Any) -> None:
    """Mirror every repository in the list from source to target."""
    from ..mirror.manager import RepoSyncManager

    settings = _resolve_settings(options)

    logger.info("Configuration:")
    for line in settings.describe():
        logger.info(f"  {line}")

    logger.info(f"Looping through {settings.repo_list_file} ...")
    specs = _load_specs(settings.repo_list_file)

    with RepoSyncManager.from_settings(settings) as manager:
        summary = manager.run(specs)

    if as_json:
        click.echo(json_lib.dumps(summary.to_dict(), indent=2, default=str))
    else:
        for line in summary_lines(summary, settings.overwrite_visibility):
            click.echo(line)

    raise SystemExit(summary.exit_code)


@click.command("check-config")
@sync_options
@click.pass_context
def check_config(ctx: click.Context, **options: Any) -> None:
    """Validate settings and the repository list without touching the network."""
    problems = 0
    click.echo("\n📋 Configuration\n")

    try:
        settings = SyncSettings.resolve(_setting_names(options))
    except ConfigError as e:
        click.secho(f"  ✗ settings — {e}", fg="red")
        problems += 1
        list_path = resolve_repo_list_file(_setting_names(options))
    else:
        click.secho("  ✓ settings", fg="green")
        for line in settings.describe():
            click.echo(f"      {line}")
        list_path = settings.repo_list_file

    try:
        specs = load_repo_list(list_path)
    except RepoListError as e:
        click.secho(f"  ✗ repository list — {e}", fg="red")
        problems += 1
    else:
        click.secho(f"  ✓ repository list — {len(specs)} repositories in {list_path}", fg="green")

    click.echo()
    if problems:
        click.secho(f"Summary: {problems} problem(s) found", fg="red", bold=True)
        raise SystemExit(1)
    click.secho("Summary: ready to sync", fg="green", bold=True)


@click.command("list-repos")
@_file_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def list_repos(ctx: click.Context, repo_list_file: str, as_json: bool) -> None:
    """Show the repository list with defaults applied."""
    path = resolve_repo_list_file({"repo-list-file": repo_list_file})
    specs = _load_specs(path)

    if as_json:
        data = [spec.model_dump(by_alias=True) for spec in specs]
        click.echo(json_lib.dumps(data, indent=2))
        return

    click.echo(f"\n📦 {len(specs)} repositories in {path}\n")
    for spec in specs:
        flags = []
        if spec.disable_actions:
            flags.append("actions disabled")
        if spec.archive_after_sync:
            flags.append("archive after sync")
        suffix = f" — {', '.join(flags)}" if flags else ""
        click.echo(f"  {spec.display_name} ({spec.visibility}){suffix}")
    click.echo()


@click.command("derive-url")
@click.argument("api_url")
def derive_url(api_url: str) -> None:
    """Print the instance (web) URL derived from an API URL."""
    from ..mirror.urls import derive_instance_url

    click.echo(derive_instance_url(api_url))
