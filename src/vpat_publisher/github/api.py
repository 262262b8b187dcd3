"""GitHub REST API wrapper.

Only the handful of endpoints needed to publish one file through a pull
request are wrapped here.  Lookups that may legitimately find nothing return
``None`` on 404 instead of raising; every other non-2xx response raises
``GitHubAPIError``.
"""

from __future__ import annotations

import base64
import logging
from urllib.parse import quote

import httpx

from ..config import Config
from ..errors import GitHubAPIError
from .auth import get_github_client

logger = logging.getLogger(__name__)


def _github_request(
    config: Config,
    method: str,
    path: str,
    *,
    params: dict[str, object] | None = None,
    json: dict[str, object] | None = None,
    allow_404: bool = False,
) -> object | None:
    """Perform an HTTP request against the GitHub API.

    This helper wraps ``httpx`` to provide the configured timeout, GitHub
    client headers and basic error handling.  ``path`` is relative to the
    configured API URL; absolute URLs are rejected so that the token is never
    sent anywhere else.
    """
    if not path.startswith("/repos/"):
        raise ValueError(f"Invalid GitHub API path: {path}")

    try:
        with get_github_client(config) as client:
            resp = client.request(method, path, params=params, json=json)
    except httpx.HTTPError as exc:
        logger.error("GitHub API request failed: %s", exc)
        raise GitHubAPIError(f"GitHub API request failed: {exc}") from exc

    if allow_404 and resp.status_code == 404:
        return None

    if 200 <= resp.status_code < 300:
        try:
            return resp.json()
        except ValueError:
            return resp.text

    raise _error_from_response(resp)


def _error_from_response(resp: httpx.Response) -> GitHubAPIError:
    """Build a ``GitHubAPIError`` from a failed response."""
    message = ""
    errors: list[dict[str, object]] = []
    try:
        payload = resp.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        message = str(payload.get("message") or "")
        raw_errors = payload.get("errors")
        if isinstance(raw_errors, list):
            errors = [e if isinstance(e, dict) else {"message": str(e)} for e in raw_errors]
    if not message:
        message = resp.text or f"HTTP {resp.status_code}"
    logger.error("GitHub API error %s: %s", resp.status_code, resp.text)
    return GitHubAPIError(message, status_code=resp.status_code, errors=errors)


def _repo_path(config: Config) -> str:
    return f"/repos/{quote(config.owner, safe='')}/{quote(config.repo, safe='')}"


def get_ref_sha(config: Config, ref: str) -> str | None:
    """Return the commit SHA ``ref`` (e.g. ``heads/main``) points at, or ``None``."""
    url = f"{_repo_path(config)}/git/ref/{quote(ref, safe='/')}"
    data = _github_request(config, "GET", url, allow_404=True)
    if data is None:
        return None
    return data["object"]["sha"]


def create_ref(config: Config, ref: str, sha: str) -> str:
    """Create ``ref`` (e.g. ``refs/heads/topic``) at ``sha`` and return its SHA."""
    url = f"{_repo_path(config)}/git/refs"
    data = _github_request(config, "POST", url, json={"ref": ref, "sha": sha})
    return data["object"]["sha"]


def get_file_sha(config: Config, path: str, ref: str) -> str | None:
    """Return the blob SHA of ``path`` on ``ref``, or ``None`` if it does not exist."""
    url = f"{_repo_path(config)}/contents/{quote(path.lstrip('/'), safe='/')}"
    data = _github_request(config, "GET", url, params={"ref": ref}, allow_404=True)
    if data is None:
        return None
    if not isinstance(data, dict):
        raise GitHubAPIError(f"Path {path} on {ref} is a directory, not a file")
    return data["sha"]


def put_file_contents(
    config: Config,
    path: str,
    branch: str,
    content: str,
    message: str,
    committer: dict[str, str],
    sha: str | None = None,
) -> dict[str, object]:
    """Create or update ``path`` on ``branch`` with ``content``.

    ``sha`` must be the current blob SHA when the file already exists and
    omitted when creating it.  Returns the new commit and content SHAs.
    """
    url = f"{_repo_path(config)}/contents/{quote(path.lstrip('/'), safe='/')}"
    payload: dict[str, object] = {
        "message": message,
        "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
        "branch": branch,
        "committer": committer,
    }
    if sha is not None:
        payload["sha"] = sha

    data = _github_request(config, "PUT", url, json=payload)
    return {
        "commit_sha": data["commit"]["sha"],
        "content_sha": (data.get("content") or {}).get("sha"),
    }


def create_pull_request(
    config: Config,
    head_branch: str,
    base_branch: str,
    title: str,
    body: str,
) -> dict[str, object]:
    """Open a pull request from ``head_branch`` into ``base_branch``.

    Returns the PR URL and number.
    """
    url = f"{_repo_path(config)}/pulls"
    payload = {
        "title": title,
        "body": body,
        "head": head_branch,
        "base": base_branch,
    }
    data = _github_request(config, "POST", url, json=payload)
    return {"pr_url": data["html_url"], "pr_number": data["number"]}


def find_open_pull_request(
    config: Config,
    head_branch: str,
    base_branch: str,
) -> dict[str, object] | None:
    """Return the open PR from ``head_branch`` into ``base_branch``, if any.

    The head filter uses the ``owner:branch`` form the API expects.
    """
    url = f"{_repo_path(config)}/pulls"
    params = {
        "head": f"{config.owner}:{head_branch}",
        "base": base_branch,
        "state": "open",
        "per_page": 1,
    }
    items = _github_request(config, "GET", url, params=params)
    if not items:
        return None
    pr = items[0]
    return {"pr_url": pr["html_url"], "pr_number": pr["number"]}
