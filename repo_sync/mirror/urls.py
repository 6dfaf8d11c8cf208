"""
URL helpers — Derive web URLs from API URLs and build authenticated git URLs.

    https://api.github.com            → https://github.com
    https://api.acme.ghe.com          → https://acme.ghe.com
    https://ghes.acme.com/api/v3      → https://ghes.acme.com
    https://api.example.com:8080/x?y  → https://example.com:8080
"""

from __future__ import annotations

import logging
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

GITHUB_API_HOST = "api.github.com"
GITHUB_WEB_URL = "https://github.com"

_DEFAULT_PORTS = {"http": 80, "https": 443}


def derive_instance_url(api_url: str) -> str:
    """
    Map an API base URL to the instance (web) URL of the same host.

    Never raises: an unparseable URL is logged and returned unchanged.
    """
    try:
        parts = urlsplit(api_url)
        hostname = parts.hostname
        port = parts.port
        if not parts.scheme or not hostname:
            raise ValueError("missing scheme or host")
    except (TypeError, ValueError) as e:
        logger.warning(f"[mirror] Failed to parse API URL \"{api_url}\": {e}")
        return api_url

    if hostname == GITHUB_API_HOST:
        return GITHUB_WEB_URL

    if hostname.startswith("api."):
        hostname = hostname[4:]

    if ":" in hostname:
        hostname = f"[{hostname}]"

    scheme = parts.scheme.lower()
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        return f"{scheme}://{hostname}:{port}"
    return f"{scheme}://{hostname}"


def authenticated_url(url: str, token: str) -> str:
    """Embed ``x-access-token:<token>@`` right after the scheme separator."""
    return url.replace("://", f"://x-access-token:{token}@", 1)


def repo_git_url(instance_url: str, full_name: str) -> str:
    """Plain HTTPS git URL for ``owner/name`` on an instance."""
    return f"{instance_url.rstrip('/')}/{full_name}.git"
