"""
GitHub API — Minimal REST client for the repository endpoints we need.

Works against github.com (https://api.github.com) and GitHub Enterprise
Server (https://ghes.example.com/api/v3). Every call is attempted once;
failures surface as GitHubAPIError, a 404 on a repository lookup as
RepositoryNotFound.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from .. import __version__
from .errors import GitHubAPIError, RepositoryNotFound

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
API_TIMEOUT = 30.0


def _get_headers(token: str) -> Dict[str, str]:
    """Get GitHub API headers."""
    return {
        "Accept": "application/vnd.github+json",
        "Authorization": f"Bearer {token}",
        "User-Agent": f"repo-sync/{__version__}",
        "X-GitHub-Api-Version": "2022-11-28",
    }


def _error_message(resp: httpx.Response) -> str:
    """Pull GitHub's ``message`` field out of an error response."""
    try:
        data = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return resp.text or resp.reason_phrase


class GitHubAPI:
    """
    Thin wrapper over an ``httpx.Client`` bound to one host and token.

    A custom ``transport`` can be passed for tests (httpx.MockTransport).
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_url = api_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.api_url,
            headers=_get_headers(token),
            timeout=API_TIMEOUT,
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "GitHubAPI":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        try:
            resp = self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise GitHubAPIError(None, f"{method} {path} failed: {e}") from e

        if resp.is_success:
            return resp

        logger.debug(f"[mirror-api] {method} {path} → HTTP {resp.status_code}")
        if resp.status_code == 404:
            raise RepositoryNotFound(404, _error_message(resp))
        raise GitHubAPIError(resp.status_code, _error_message(resp))

    # ─── Repositories ───────────────────────────────────────

    def get_repo(self, owner: str, repo: str) -> Dict[str, Any]:
        """Fetch a repository. Raises RepositoryNotFound on 404."""
        return self._request("GET", f"/repos/{owner}/{repo}").json()

    def create_org_repo(
        self,
        org: str,
        name: str,
        private: bool,
        visibility: str,
        description: str = "",
    ) -> Dict[str, Any]:
        """Create a repository in an organization."""
        payload = {
            "name": name,
            "private": private,
            "visibility": visibility,
            "description": description,
        }
        return self._request("POST", f"/orgs/{org}/repos", json=payload).json()

    def update_repo(self, owner: str, repo: str, **fields: Any) -> Dict[str, Any]:
        """Patch repository settings (visibility, description, archived...)."""
        return self._request("PATCH", f"/repos/{owner}/{repo}", json=fields).json()

    # ─── Actions ────────────────────────────────────────────

    def set_actions_permissions(self, owner: str, repo: str, enabled: bool) -> None:
        """Enable or disable GitHub Actions for a repository."""
        self._request(
            "PUT",
            f"/repos/{owner}/{repo}/actions/permissions",
            json={"enabled": enabled},
        )
