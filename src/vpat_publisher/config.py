"""Configuration loading for VPAT Publisher.

This module populates a `Config` object from the step inputs and the
optional settings.  Everything is read when `Config.load_from_env` is called,
so values loaded from a `.env` file (see ``cli``) are picked up.

Required inputs (read from ``INPUT_<NAME>`` variables, see ``actions``):
- docs-site-base-branch
- docs-site-github-token
- docs-site-repository (``owner/name``)
- docs-site-vpat-directory
- product-id
- vpat-content

Optional variables with defaults:
- GITHUB_API_URL (default: 'https://api.github.com')
- GITHUB_API_TIMEOUT_S (default: 30)
- LOG_LEVEL (default: 'INFO')
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from . import constants
from .actions import get_input
from .errors import ConfigError


def get_required_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Return the value of a required input.

    :raises ConfigError: if the input is unset or blank
    """
    value = get_input(name, environ)
    if value == "":
        raise ConfigError(f"Input {name} is required")
    return value


def split_repository(repository: str) -> tuple[str, str]:
    """Split an ``owner/name`` reference into its two components."""
    parts = repository.split("/")
    if len(parts) != 2 or not all(part.strip() for part in parts):
        raise ConfigError(
            f"Input {constants.INPUT_REPOSITORY} must be of the form 'owner/name', got '{repository}'"
        )
    owner, name = (part.strip() for part in parts)
    return owner, name


def _optional(env: Mapping[str, str], name: str, default: str) -> str:
    value = (env.get(name) or "").strip()
    return value or default


def _parse_timeout(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError as exc:
        raise ConfigError(f"{constants.ENV_API_TIMEOUT_S} must be a number, got '{value}'") from exc
    if timeout <= 0:
        raise ConfigError(f"{constants.ENV_API_TIMEOUT_S} must be positive, got '{value}'")
    return timeout


@dataclass
class Config:
    """Validated inputs for one publish run."""

    base_branch: str
    github_token: str
    owner: str
    repo: str
    target_directory: str
    product_id: str
    vpat_content: str
    api_url: str = constants.DEFAULT_GITHUB_API_URL
    timeout_s: float = constants.DEFAULT_GITHUB_API_TIMEOUT_S
    log_level: str = constants.DEFAULT_LOG_LEVEL

    @property
    def repo_slug(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def load_from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Load configuration from the step inputs and optional settings.

        Reads ``environ`` when given, otherwise the process environment.
        Inputs are read in declaration order and the first blank one raises
        `ConfigError`, so nothing touches the network with an incomplete
        configuration.
        """
        env = os.environ if environ is None else environ

        base_branch = get_required_input(constants.INPUT_BASE_BRANCH, env)
        github_token = get_required_input(constants.INPUT_TOKEN, env)
        repository = get_required_input(constants.INPUT_REPOSITORY, env)
        target_directory = get_required_input(constants.INPUT_VPAT_DIRECTORY, env)
        product_id = get_required_input(constants.INPUT_PRODUCT_ID, env)
        vpat_content = get_required_input(constants.INPUT_VPAT_CONTENT, env)

        owner, repo = split_repository(repository)

        api_url = _optional(env, constants.ENV_API_URL, constants.DEFAULT_GITHUB_API_URL).rstrip("/")
        timeout_s = _parse_timeout(
            _optional(env, constants.ENV_API_TIMEOUT_S, str(constants.DEFAULT_GITHUB_API_TIMEOUT_S))
        )
        log_level = _optional(env, constants.ENV_LOG_LEVEL, constants.DEFAULT_LOG_LEVEL).upper()

        return cls(
            base_branch=base_branch,
            github_token=github_token,
            owner=owner,
            repo=repo,
            target_directory=target_directory,
            product_id=product_id,
            vpat_content=vpat_content,
            api_url=api_url,
            timeout_s=timeout_s,
            log_level=log_level,
        )
