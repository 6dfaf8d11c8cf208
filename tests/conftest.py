"""
Shared fixtures for repo-sync tests.

API clients are MagicMocks specced on GitHubAPI so the manager and the
reconcilers can be driven without a network. Git is never executed.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from repo_sync.config.repo_list import RepoSpec
from repo_sync.config.settings import HostConfig, SyncSettings
from repo_sync.mirror.errors import RepositoryNotFound
from repo_sync.mirror.github_api import GitHubAPI

SOURCE_TOKEN = "ghp_sourceSecret123"
TARGET_TOKEN = "ghp_targetSecret456"


def make_settings(
    overwrite_visibility: bool = False,
    force_push: bool = False,
    repo_list_file: Path = Path("actions-list.yml"),
) -> SyncSettings:
    """Settings for github.com → GHES with distinct tokens."""
    return SyncSettings(
        repo_list_file=repo_list_file,
        source=HostConfig(token=SOURCE_TOKEN, api_url="https://api.github.com"),
        target=HostConfig(token=TARGET_TOKEN, api_url="https://ghes.example.com/api/v3"),
        overwrite_visibility=overwrite_visibility,
        force_push=force_push,
    )


def make_spec(**overrides) -> RepoSpec:
    data = {"source": "src-org/app", "target": "dst-org/app"}
    data.update(overrides)
    return RepoSpec(**data)


def not_found() -> RepositoryNotFound:
    return RepositoryNotFound(404, "Not Found")


@pytest.fixture
def settings() -> SyncSettings:
    return make_settings()


@pytest.fixture
def source_api() -> MagicMock:
    api = MagicMock(spec=GitHubAPI)
    api.get_repo.return_value = {"description": "Upstream app", "archived": False}
    return api


@pytest.fixture
def target_api() -> MagicMock:
    api = MagicMock(spec=GitHubAPI)
    api.get_repo.side_effect = not_found()
    return api


@pytest.fixture
def repo_list_file(tmp_path: Path) -> Path:
    """Path for a repos YAML inside tmp_path (not yet written)."""
    return tmp_path / "repos.yml"


def write_repo_list(path: Path, content: str) -> Path:
    """Helper to write a repos YAML file."""
    path.write_text(content, encoding="utf-8")
    return path
