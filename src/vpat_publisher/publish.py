"""Publish a VPAT report to the docs site as a pull request.

The workflow is three steps, each of which is a no-op when the remote state
it targets already holds, so an interrupted or repeated run can always start
again from the top:

1. ensure the head branch exists, forked from the base branch;
2. ensure the VPAT file on the head branch has the desired content;
3. ensure an open pull request from the head branch into the base branch.

Nothing is rolled back on failure.  A branch created by a run whose file
commit then failed stays in place and is reused by the next run.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass

from .config import Config
from .errors import BaseBranchNotFoundError, GitHubAPIError
from .github import api as github_api
from .github import templates
from .naming import head_branch_name, vpat_file_path

logger = logging.getLogger(__name__)

_REF_EXISTS = "Reference already exists"


class PublishState(str, enum.Enum):
    START = "START"
    BRANCH_READY = "BRANCH_READY"
    FILE_COMMITTED = "FILE_COMMITTED"
    PR_ENSURED = "PR_ENSURED"
    DONE = "DONE"


@dataclass
class BranchResult:
    name: str
    sha: str
    created: bool


@dataclass
class FileResult:
    path: str
    commit_sha: str
    created: bool


@dataclass
class PullRequestResult:
    number: int | None
    url: str | None
    created: bool


@dataclass
class PublishResult:
    """Outcome of one publish run."""

    head_branch: str
    base_branch: str
    file_path: str
    branch_sha: str
    branch_created: bool
    commit_sha: str
    file_created: bool
    pr_number: int | None
    pr_url: str | None
    pr_created: bool
    state: PublishState = PublishState.DONE


def _is_ref_exists_error(exc: GitHubAPIError) -> bool:
    if exc.status_code != 422:
        return False
    messages = [exc.message, *exc.error_messages()]
    return any(_REF_EXISTS in message for message in messages)


def is_pull_request_exists_error(exc: GitHubAPIError, owner: str, head_branch: str) -> bool:
    """Return ``True`` if ``exc`` says an open PR already exists for the head.

    The structured ``errors`` entries are checked first; the top-level
    message is only consulted when the response carried none.
    """
    if exc.status_code is not None and exc.status_code != 422:
        return False
    pattern = re.compile(
        rf"A pull request already exists for {re.escape(owner)}:{re.escape(head_branch)}\.?$",
        re.IGNORECASE,
    )
    messages = exc.error_messages() or [exc.message]
    return any(pattern.search(message.strip()) for message in messages)


def ensure_head_branch(config: Config, head_branch: str, base_branch: str) -> BranchResult:
    """Make sure ``head_branch`` exists, creating it from ``base_branch`` if necessary.

    :raises BaseBranchNotFoundError: if the head branch is missing and so is
        the base branch it should be created from
    """
    logger.info("Checking for branch: %s", head_branch)
    sha = github_api.get_ref_sha(config, f"heads/{head_branch}")
    if sha is not None:
        logger.info("Branch exists: %s (SHA: %s)", head_branch, sha)
        return BranchResult(name=head_branch, sha=sha, created=False)

    logger.info("Branch does not exist: %s", head_branch)
    base_sha = github_api.get_ref_sha(config, f"heads/{base_branch}")
    if base_sha is None:
        raise BaseBranchNotFoundError(
            f"Base branch {base_branch} does not exist in {config.repo_slug}",
            status_code=404,
        )

    logger.info("Creating branch: %s from %s (SHA: %s)", head_branch, base_branch, base_sha)
    try:
        sha = github_api.create_ref(config, f"refs/heads/{head_branch}", base_sha)
    except GitHubAPIError as exc:
        if not _is_ref_exists_error(exc):
            raise
        # Another run created it between our lookup and create.
        logger.info("Branch was created concurrently: %s", head_branch)
        sha = github_api.get_ref_sha(config, f"heads/{head_branch}")
        if sha is None:
            raise
        return BranchResult(name=head_branch, sha=sha, created=False)

    logger.info("Branch created: %s (SHA: %s)", head_branch, sha)
    return BranchResult(name=head_branch, sha=sha, created=True)


def ensure_file_content(
    config: Config,
    path: str,
    head_branch: str,
    content: str,
    product_id: str,
) -> FileResult:
    """Commit ``content`` to ``path`` on ``head_branch``.

    The file is updated if it already exists, otherwise created.  An existing
    file's SHA is required by the API, so it is read right before the write.
    """
    logger.info("Checking for file: %s on %s", path, head_branch)
    sha = github_api.get_file_sha(config, path, ref=head_branch)
    if sha is None:
        logger.info("File does not exist: %s", path)
    else:
        logger.info("File exists: %s (SHA: %s)", path, sha)

    result = github_api.put_file_contents(
        config,
        path=path,
        branch=head_branch,
        content=content,
        message=templates.commit_message(product_id),
        committer=templates.committer(),
        sha=sha,
    )
    commit_sha = str(result["commit_sha"])
    logger.info("Created commit %s", commit_sha)
    return FileResult(path=path, commit_sha=commit_sha, created=sha is None)


def ensure_pull_request(
    config: Config,
    head_branch: str,
    base_branch: str,
    product_id: str,
) -> PullRequestResult:
    """Make sure an open PR merges ``head_branch`` into ``base_branch``.

    If one already exists its number is looked up and returned instead.
    """
    try:
        pr = github_api.create_pull_request(
            config,
            head_branch=head_branch,
            base_branch=base_branch,
            title=templates.pr_title(product_id),
            body=templates.pr_body(product_id),
        )
    except GitHubAPIError as exc:
        if not is_pull_request_exists_error(exc, config.owner, head_branch):
            raise
        logger.info("Pull request already exists for %s:%s", config.owner, head_branch)
        existing = github_api.find_open_pull_request(config, head_branch, base_branch)
        if existing is None:
            logger.warning("Could not look up the existing pull request for %s", head_branch)
            return PullRequestResult(number=None, url=None, created=False)
        logger.info("Existing pull request %s", existing["pr_number"])
        return PullRequestResult(
            number=existing["pr_number"], url=existing["pr_url"], created=False
        )

    logger.info("Created pull request %s", pr["pr_number"])
    return PullRequestResult(number=pr["pr_number"], url=pr["pr_url"], created=True)


def publish_vpat(config: Config) -> PublishResult:
    """Publish ``config.vpat_content`` for ``config.product_id``.

    Runs the three ensure steps in order.  Any exception aborts the run and
    propagates unchanged.
    """
    head_branch = head_branch_name(config.product_id)
    path = vpat_file_path(config.target_directory, config.product_id)
    state = PublishState.START
    logger.info(
        "Publishing VPAT for %s to %s (%s -> %s)",
        config.product_id,
        config.repo_slug,
        head_branch,
        config.base_branch,
    )

    try:
        branch = ensure_head_branch(config, head_branch, config.base_branch)
        state = PublishState.BRANCH_READY
        logger.debug("State: %s", state.value)

        committed = ensure_file_content(
            config, path, head_branch, config.vpat_content, config.product_id
        )
        state = PublishState.FILE_COMMITTED
        logger.debug("State: %s", state.value)

        pr = ensure_pull_request(config, head_branch, config.base_branch, config.product_id)
        state = PublishState.PR_ENSURED
        logger.debug("State: %s", state.value)
    except Exception:
        logger.error("Publishing failed after state %s", state.value)
        raise

    return PublishResult(
        head_branch=head_branch,
        base_branch=config.base_branch,
        file_path=path,
        branch_sha=branch.sha,
        branch_created=branch.created,
        commit_sha=committed.commit_sha,
        file_created=committed.created,
        pr_number=pr.number,
        pr_url=pr.url,
        pr_created=pr.created,
    )
