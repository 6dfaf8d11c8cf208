"""
Repository Reconciler — Make sure the target repo exists and matches config.

Creation or query failures are fatal for the repository (nothing can be
pushed without a target). Metadata update failures are only warnings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict

from .errors import GitHubAPIError, ReconcileError, RepositoryNotFound
from .github_api import GitHubAPI

logger = logging.getLogger(__name__)

PRIVATE_VISIBILITIES = ("private", "internal")


@dataclass(frozen=True)
class RepoStatus:
    """What ensure_repository changed on the target."""

    created: bool = False
    visibility_updated: bool = False
    description_updated: bool = False


def ensure_repository(
    api: GitHubAPI,
    org: str,
    name: str,
    visibility: str = "private",
    description: str = "",
    overwrite_visibility: bool = False,
) -> RepoStatus:
    """
    Ensure ``org/name`` exists on the target host.

    Missing repos are created with the requested visibility and description.
    Existing repos get their description aligned, and their visibility too
    when ``overwrite_visibility`` is set; both changes go in one PATCH.
    """
    try:
        repo = api.get_repo(org, name)
    except RepositoryNotFound:
        logger.info(f"[mirror] {org}/{name} does not exist")
        return _create(api, org, name, visibility, description)
    except GitHubAPIError as e:
        logger.error(f"[mirror] Query of {org}/{name} failed: {e}")
        raise ReconcileError(f"Failed to query repository {org}/{name}: {e}") from e

    logger.info(f"[mirror] {org}/{name} exists")

    updates: Dict[str, Any] = {}
    visibility_updated = False
    description_updated = False

    if overwrite_visibility:
        current_visibility = repo.get("visibility")
        if current_visibility != visibility:
            logger.info(f"[mirror] Updating visibility from {current_visibility} to {visibility}")
            updates["visibility"] = visibility
            visibility_updated = True
        else:
            logger.info(f"[mirror] Visibility already matches ({current_visibility})")

    current_description = repo.get("description") or ""
    target_description = description or ""
    if current_description != target_description:
        logger.info(
            f"[mirror] Description differs - updating from "
            f"\"{current_description}\" to \"{target_description}\""
        )
        updates["description"] = target_description
        description_updated = True

    if updates:
        try:
            api.update_repo(org, name, **updates)
            logger.info(f"[mirror] {org}/{name} updated")
        except GitHubAPIError as e:
            logger.warning(f"[mirror] Could not update {org}/{name}: {e}")

    return RepoStatus(
        visibility_updated=visibility_updated,
        description_updated=description_updated,
    )


def _create(
    api: GitHubAPI,
    org: str,
    name: str,
    visibility: str,
    description: str,
) -> RepoStatus:
    try:
        api.create_org_repo(
            org,
            name,
            private=visibility in PRIVATE_VISIBILITIES,
            visibility=visibility,
            description=description,
        )
    except GitHubAPIError as e:
        logger.error(f"[mirror] Creation of {org}/{name} failed: {e}")
        raise ReconcileError(f"Failed to create repository {org}/{name}: {e}") from e

    logger.info(f"[mirror] {org}/{name} created ({visibility})")
    return RepoStatus(created=True)
