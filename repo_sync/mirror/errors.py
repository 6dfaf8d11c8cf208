"""
Mirror Errors — Exception hierarchy for the sync pipeline.

Fatal-to-run errors (ConfigError, RepoListError) stop the process before
any repository is touched. Fatal-to-repository errors (ReconcileError,
TransferError) fail one repository and let the run continue.
"""

from __future__ import annotations

from typing import Optional


class RepoSyncError(Exception):
    """Base class for all repo-sync errors."""


class ConfigError(RepoSyncError):
    """Required settings are missing or invalid."""


class RepoListError(RepoSyncError):
    """The repository list file is missing, unparsable or malformed."""


class ReconcileError(RepoSyncError):
    """The target repository could not be queried or created."""


class TransferError(RepoSyncError):
    """Mirror clone or push failed. The message is always redacted."""


class GitHubAPIError(RepoSyncError):
    """A GitHub REST call failed."""

    def __init__(self, status_code: Optional[int], message: str):
        self.status_code = status_code
        self.message = message
        if status_code is None:
            super().__init__(message)
        else:
            super().__init__(f"HTTP {status_code}: {message}")


class RepositoryNotFound(GitHubAPIError):
    """The queried repository does not exist (HTTP 404)."""
