"""GitHub API integration."""

from .api import (
    create_pull_request,
    create_ref,
    find_open_pull_request,
    get_file_sha,
    get_ref_sha,
    put_file_contents,
)
from .auth import get_github_client

__all__ = [
    "get_github_client",
    "get_ref_sha",
    "create_ref",
    "get_file_sha",
    "put_file_contents",
    "create_pull_request",
    "find_open_pull_request",
]
