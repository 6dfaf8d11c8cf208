"""
Sync Manager — Orchestrates the mirror of every configured repository.

Per repository, the steps run strictly in this order:

1. source_description — read the source description (best effort)
2. ensure_repository  — create/align the target (fatal on failure)
3. ensure_unarchived  — only with archive-after-sync (best effort)
4. disable_actions    — only with disable-github-actions (best effort)
5. transfer           — mirror clone + push in a scratch dir (fatal)
6. archive            — only after a successful transfer (best effort)

Repositories are processed one at a time, in list order. A failure in one
repository is recorded in the summary and never stops the run.

## Usage

    settings = SyncSettings.resolve(options)
    with RepoSyncManager.from_settings(settings) as manager:
        summary = manager.run(load_repo_list(settings.repo_list_file))
    sys.exit(summary.exit_code)
"""

from __future__ import annotations

import logging
from typing import Any, List, Sequence

from ..config.repo_list import RepoSpec
from ..config.settings import SyncSettings
from ..logging_config import log_group
from . import actions, archive, git_sync
from .errors import GitHubAPIError, TransferError
from .github_api import GitHubAPI
from .models import RunSummary, StepResult, SyncOutcome
from .reconcile import RepoStatus, ensure_repository
from .redaction import sanitize
from .urls import repo_git_url

logger = logging.getLogger(__name__)


class RepoSyncManager:
    """
    Runs the per-repository sync pipeline against two GitHub hosts.

    The API clients are injected so tests can hand in fakes.
    """

    def __init__(self, settings: SyncSettings, source_api: GitHubAPI, target_api: GitHubAPI):
        self.settings = settings
        self.source_api = source_api
        self.target_api = target_api

    @classmethod
    def from_settings(cls, settings: SyncSettings) -> "RepoSyncManager":
        return cls(
            settings,
            GitHubAPI(settings.source.token, settings.source.api_url),
            GitHubAPI(settings.target.token, settings.target.api_url),
        )

    def close(self) -> None:
        self.source_api.close()
        self.target_api.close()

    def __enter__(self) -> "RepoSyncManager":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ─── Run ────────────────────────────────────────────────

    def run(self, specs: Sequence[RepoSpec]) -> RunSummary:
        """Sync every repository in order and return the run summary."""
        summary = RunSummary()

        if not specs:
            logger.info("[mirror] No repositories to process")
            return summary

        logger.info(f"[mirror] Found {len(specs)} repositories to sync")

        for spec in specs:
            with log_group(spec.display_name):
                try:
                    outcome = self.sync_repository(spec)
                except Exception as e:
                    error = sanitize(e)
                    logger.error(
                        f"[mirror] Failed to mirror {spec.source}: {error}",
                        extra={"repo": spec.target},
                    )
                    outcome = SyncOutcome.failed(spec.target, error)
            summary.record(outcome, spec.display_name)

        logger.info(
            f"[mirror] Sync finished: {summary.successful}/{summary.total} succeeded, "
            f"{summary.failed} failed"
        )
        return summary

    # ─── Single repository ──────────────────────────────────

    def sync_repository(self, spec: RepoSpec) -> SyncOutcome:
        """
        Run the step pipeline for one repository.

        Transfer failures come back as a failed outcome. Reconcile failures
        (target cannot be queried or created) propagate to ``run``.
        """
        steps: List[StepResult] = []
        logger.info(f"[mirror] Processing: {spec.source} → {spec.target} ({spec.visibility})")

        description = self._source_description(spec, steps)
        status = self._ensure_target(spec, description, steps)

        if spec.archive_after_sync:
            self._unarchive(spec, steps)

        if spec.disable_actions:
            self._disable_actions(spec, steps)

        try:
            self._transfer(spec, steps)
        except TransferError as e:
            error = sanitize(e)
            steps.append(StepResult("transfer", False, error))
            logger.error(f"[mirror] Failed to mirror {spec.source}: {error}")
            return SyncOutcome.failed(spec.target, error, tuple(steps))

        logger.info(f"[mirror] Successfully mirrored {spec.source} → {spec.target} ({spec.visibility})")

        archived = False
        if spec.archive_after_sync:
            archived = self._archive(spec, steps)

        return SyncOutcome(
            success=True,
            repo=spec.target,
            created=status.created,
            visibility_updated=status.visibility_updated,
            description_updated=status.description_updated,
            archived=archived,
            steps=tuple(steps),
        )

    # ─── Steps ──────────────────────────────────────────────

    def _source_description(self, spec: RepoSpec, steps: List[StepResult]) -> str:
        try:
            repo = self.source_api.get_repo(spec.source_owner, spec.source_name)
        except GitHubAPIError as e:
            logger.warning(f"[mirror] Could not fetch source repo description: {e}")
            steps.append(StepResult("source_description", False, str(e)))
            return ""

        description = repo.get("description") or ""
        logger.info(f"[mirror] Source repo description: {description or '(no description)'}")
        steps.append(StepResult("source_description", True, description or None))
        return description

    def _ensure_target(self, spec: RepoSpec, description: str, steps: List[StepResult]) -> RepoStatus:
        status = ensure_repository(
            self.target_api,
            spec.target_owner,
            spec.target_name,
            visibility=spec.visibility,
            description=description,
            overwrite_visibility=self.settings.overwrite_visibility,
        )
        detail = "created" if status.created else "exists"
        steps.append(StepResult("ensure_repository", True, detail))
        return status

    def _unarchive(self, spec: RepoSpec, steps: List[StepResult]) -> None:
        logger.info("[mirror] Checking archive status...")
        check = archive.ensure_unarchived(self.target_api, spec.target_owner, spec.target_name)
        steps.append(StepResult("ensure_unarchived", True, "unarchived" if check.was_archived else None))

    def _disable_actions(self, spec: RepoSpec, steps: List[StepResult]) -> None:
        logger.info("[mirror] Disabling GitHub Actions...")
        ok = actions.disable_actions(self.target_api, spec.target_owner, spec.target_name)
        steps.append(StepResult("disable_actions", ok))

    def _transfer(self, spec: RepoSpec, steps: List[StepResult]) -> None:
        clone_url = repo_git_url(self.settings.source.web_url, spec.source)
        push_url = repo_git_url(self.settings.target.web_url, spec.target)

        with git_sync.scratch_directory() as work_dir:
            git_sync.mirror_transfer(
                clone_url,
                push_url,
                self.settings.source.token,
                self.settings.target.token,
                work_dir,
                force_push=self.settings.force_push,
            )
        steps.append(StepResult("transfer", True))

    def _archive(self, spec: RepoSpec, steps: List[StepResult]) -> bool:
        logger.info("[mirror] Archiving repository...")
        ok = archive.archive_repository(self.target_api, spec.target_owner, spec.target_name)
        steps.append(StepResult("archive", ok))
        return ok
