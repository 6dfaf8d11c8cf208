"""
Actions Control — Switch off GitHub Actions on mirror targets.

Mirrors carry the source's workflow files; disabling Actions keeps them
from running on the target. Best effort: failures only warn.
"""

from __future__ import annotations

import logging

from .errors import GitHubAPIError
from .github_api import GitHubAPI

logger = logging.getLogger(__name__)


def disable_actions(api: GitHubAPI, org: str, name: str) -> bool:
    """Disable GitHub Actions on ``org/name``. Returns True on success."""
    try:
        api.set_actions_permissions(org, name, enabled=False)
    except GitHubAPIError as e:
        logger.warning(f"[mirror] Could not disable GitHub Actions on {org}/{name}: {e}")
        return False

    logger.info(f"[mirror] GitHub Actions disabled on {org}/{name}")
    return True
