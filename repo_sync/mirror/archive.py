"""
Archive Control — Unarchive before a push, re-archive after it.

An archived repository is read-only, so repos configured with
archive-after-sync are unarchived first and archived again only once the
transfer has succeeded. Both operations are best effort.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import GitHubAPIError
from .github_api import GitHubAPI

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchiveCheck:
    was_archived: bool = False


def ensure_unarchived(api: GitHubAPI, org: str, name: str) -> ArchiveCheck:
    """Unarchive ``org/name`` if it is currently archived."""
    try:
        # Fresh read: the existence check may predate an archive toggle.
        repo = api.get_repo(org, name)
        if not repo.get("archived"):
            logger.info(f"[mirror] {org}/{name} is not archived")
            return ArchiveCheck(was_archived=False)

        logger.info(f"[mirror] {org}/{name} is archived, unarchiving for sync")
        api.update_repo(org, name, archived=False)
    except GitHubAPIError as e:
        logger.warning(f"[mirror] Could not check/unarchive {org}/{name}: {e}")
        return ArchiveCheck(was_archived=False)

    logger.info(f"[mirror] {org}/{name} unarchived")
    return ArchiveCheck(was_archived=True)


def archive_repository(api: GitHubAPI, org: str, name: str) -> bool:
    """Archive ``org/name``. Returns True on success."""
    try:
        api.update_repo(org, name, archived=True)
    except GitHubAPIError as e:
        logger.warning(f"[mirror] Could not archive {org}/{name}: {e}")
        return False

    logger.info(f"[mirror] {org}/{name} archived")
    return True
