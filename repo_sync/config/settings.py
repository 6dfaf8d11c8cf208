"""
Sync Settings — Resolve run-wide settings from inputs, flags and env vars.

Each setting is looked up in this order (first non-empty wins):

1. Runner input       INPUT_SOURCE-GITHUB-TOKEN   (as exported by Actions)
2. Input-style env    INPUT_SOURCE_GITHUB_TOKEN
3. Command-line flag  --source-github-token
4. Plain env var      SOURCE_GITHUB_TOKEN
5. Default

Boolean settings are switched on if any layer switches them on.

The resolved SyncSettings is immutable and passed explicitly to every
component; nothing below the CLI reads the environment.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping, Optional

from ..mirror.errors import ConfigError
from ..mirror.github_api import DEFAULT_API_URL
from ..mirror.urls import derive_instance_url

logger = logging.getLogger(__name__)

DEFAULT_REPO_LIST = "actions-list.yml"

# Setting name → plain environment variable
PLAIN_ENV_VARS = {
    "repo-list-file": "REPO_LIST_FILE",
    "source-github-token": "SOURCE_GITHUB_TOKEN",
    "target-github-token": "TARGET_GITHUB_TOKEN",
    "source-github-api-url": "SOURCE_GITHUB_API_URL",
    "target-github-api-url": "TARGET_GITHUB_API_URL",
    "overwrite-repo-visibility": "OVERWRITE_REPO_VISIBILITY",
    "force-push": "FORCE_PUSH",
}

# The runner only understands YAML 1.2 core booleans.
RUNNER_TRUE = ("true", "True", "TRUE")
TRUE_VALUES = ("true", "1", "yes")


def runner_input_name(name: str) -> str:
    """``repo-list-file`` → ``INPUT_REPO-LIST-FILE``."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


def input_env_name(name: str) -> str:
    """``repo-list-file`` → ``INPUT_REPO_LIST_FILE``."""
    return f"INPUT_{name.replace('-', '_').replace(' ', '_').upper()}"


def _is_true(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() in TRUE_VALUES


@dataclass(frozen=True)
class HostConfig:
    """Token and URLs for one GitHub host."""

    token: str
    api_url: str
    web_url: str = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "web_url", derive_instance_url(self.api_url))


@dataclass(frozen=True)
class SyncSettings:
    """Run-wide settings shared by every repository."""

    repo_list_file: Path
    source: HostConfig
    target: HostConfig
    overwrite_visibility: bool = False
    force_push: bool = False

    @property
    def same_token(self) -> bool:
        return self.source.token == self.target.token

    @classmethod
    def resolve(
        cls,
        options: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "SyncSettings":
        """
        Build settings from command-line ``options`` and ``environ``.

        Args:
            options: Command-line values keyed by setting name
                     (e.g. ``{"force-push": True}``); None means "not given".
            environ: Environment mapping (defaults to os.environ).

        Raises:
            ConfigError: If a required token is missing.
        """
        resolver = _Resolver(options or {}, os.environ if environ is None else environ)

        source_api_url = resolver.string("source-github-api-url") or DEFAULT_API_URL
        target_api_url = resolver.string("target-github-api-url") or source_api_url

        source_token = resolver.string("source-github-token")
        target_token = resolver.string("target-github-token")
        if not source_token:
            raise ConfigError("SOURCE_GITHUB_TOKEN is required")
        if not target_token:
            raise ConfigError("TARGET_GITHUB_TOKEN is required")

        return cls(
            repo_list_file=resolve_repo_list_file(options, environ),
            source=HostConfig(token=source_token, api_url=source_api_url),
            target=HostConfig(token=target_token, api_url=target_api_url),
            overwrite_visibility=resolver.flag("overwrite-repo-visibility"),
            force_push=resolver.flag("force-push"),
        )

    def describe(self) -> List[str]:
        """Configuration lines safe to log (no tokens)."""
        tokens = "same token for source and target" if self.same_token else "separate source and target tokens"
        return [
            f"Source: {self.source.web_url} (API: {self.source.api_url})",
            f"Target: {self.target.web_url} (API: {self.target.api_url})",
            f"Tokens: {tokens}",
            f"Repository list: {self.repo_list_file}",
            f"Overwrite visibility: {self.overwrite_visibility}",
            f"Force push: {self.force_push}",
        ]


class _Resolver:
    """Walks the five configuration layers for one setting at a time."""

    def __init__(self, options: Mapping[str, Any], environ: Mapping[str, str]):
        self.options = options
        self.environ = environ

    def string(self, name: str) -> Optional[str]:
        candidates = (
            self.environ.get(runner_input_name(name)),
            self.environ.get(input_env_name(name)),
            self.options.get(name),
            self.environ.get(PLAIN_ENV_VARS[name]),
        )
        for value in candidates:
            if value is not None and str(value).strip():
                return str(value).strip()
        return None

    def flag(self, name: str) -> bool:
        runner_value = (self.environ.get(runner_input_name(name)) or "").strip()
        return (
            runner_value in RUNNER_TRUE
            or _is_true(self.environ.get(input_env_name(name)))
            or bool(self.options.get(name))
            or _is_true(self.environ.get(PLAIN_ENV_VARS[name]))
        )


def resolve_repo_list_file(
    options: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """Resolve only the repository list path (no tokens required)."""
    resolver = _Resolver(options or {}, os.environ if environ is None else environ)
    return Path(resolver.string("repo-list-file") or DEFAULT_REPO_LIST)
