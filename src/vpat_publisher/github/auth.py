"""Authentication helpers for GitHub API."""

from __future__ import annotations

import httpx

from .. import __version__
from ..config import Config


def get_github_client(config: Config) -> httpx.Client:
    """Return a configured GitHub httpx client with the Authorization header set."""
    return httpx.Client(
        base_url=config.api_url,
        headers={
            "Authorization": f"token {config.github_token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": f"vpat-publisher/{__version__}",
        },
        timeout=config.timeout_s,
    )
