"""Pytest configuration and fixtures for VPAT Publisher tests.

This module provides a FakeGitHub that stands in for the handful of GitHub
REST endpoints the publisher talks to, so workflow tests can run against
remote state that persists between calls.
"""

from __future__ import annotations

import hashlib
import json as jsonlib
import re
from dataclasses import dataclass, field

import pytest

from vpat_publisher.config import Config

OWNER = "dequelabs"
REPO = "docs-site"
BASE_SHA = "a" * 40


class FakeResponse:
    """Minimal stand-in for ``httpx.Response``."""

    def __init__(self, status_code: int, payload: object) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = jsonlib.dumps(payload)

    def json(self) -> object:
        return self._payload


@dataclass
class FakeFile:
    sha: str
    content: str


@dataclass
class FakePull:
    number: int
    head: str
    base: str
    state: str = "open"


@dataclass
class FakeGitHub:
    """In-memory GitHub repository reachable through ``request()``.

    This is ONLY for testing - not used in production.
    """

    owner: str = OWNER
    repo: str = REPO
    refs: dict[str, str] = field(default_factory=dict)
    files: dict[tuple[str, str], FakeFile] = field(default_factory=dict)
    pulls: list[FakePull] = field(default_factory=list)
    calls: list[tuple[str, str, dict | None, dict | None]] = field(default_factory=list)
    ref_race: bool = False
    counter: int = 0

    def __enter__(self) -> FakeGitHub:
        return self

    def __exit__(self, *exc_info: object) -> bool:
        return False

    def next_sha(self) -> str:
        self.counter += 1
        return hashlib.sha1(f"fake-{self.counter}".encode()).hexdigest()

    def calls_to(self, method: str, fragment: str = "") -> list[tuple[str, str, dict | None, dict | None]]:
        return [c for c in self.calls if c[0] == method and fragment in c[1]]

    def mutations(self) -> list[tuple[str, str, dict | None, dict | None]]:
        return [c for c in self.calls if c[0] != "GET"]

    def request(
        self,
        method: str,
        url: str,
        params: dict | None = None,
        json: dict | None = None,
    ) -> FakeResponse:
        self.calls.append((method, url, params, json))
        prefix = f"/repos/{self.owner}/{self.repo}"
        assert url.startswith(prefix), url
        path = url[len(prefix):]

        match = re.fullmatch(r"/git/ref/heads/(.+)", path)
        if match and method == "GET":
            return self._get_ref(match.group(1))
        if path == "/git/refs" and method == "POST":
            return self._create_ref(json or {})
        match = re.fullmatch(r"/contents/(.+)", path)
        if match and method == "GET":
            return self._get_content(match.group(1), (params or {}).get("ref"))
        if match and method == "PUT":
            return self._put_content(match.group(1), json or {})
        if path == "/pulls" and method == "POST":
            return self._create_pull(json or {})
        if path == "/pulls" and method == "GET":
            return self._list_pulls(params or {})
        return FakeResponse(404, {"message": "Not Found"})

    def _get_ref(self, branch: str) -> FakeResponse:
        if branch not in self.refs:
            return FakeResponse(404, {"message": "Not Found"})
        return FakeResponse(
            200,
            {"ref": f"refs/heads/{branch}", "object": {"sha": self.refs[branch], "type": "commit"}},
        )

    def _create_ref(self, body: dict) -> FakeResponse:
        branch = body["ref"].removeprefix("refs/heads/")
        if self.ref_race:
            # Another run creates the branch between our lookup and create.
            self.refs[branch] = body["sha"]
            self.ref_race = False
        if branch in self.refs:
            return FakeResponse(422, {"message": "Reference already exists"})
        self.refs[branch] = body["sha"]
        return FakeResponse(201, {"ref": body["ref"], "object": {"sha": body["sha"], "type": "commit"}})

    def _get_content(self, path: str, ref: str | None) -> FakeResponse:
        if ref not in self.refs:
            return FakeResponse(404, {"message": f"No commit found for the ref {ref}"})
        found = self.files.get((ref, path))
        if found is None:
            return FakeResponse(404, {"message": "Not Found"})
        return FakeResponse(200, {"type": "file", "path": path, "sha": found.sha})

    def _put_content(self, path: str, body: dict) -> FakeResponse:
        branch = body["branch"]
        if branch not in self.refs:
            return FakeResponse(404, {"message": f"Branch {branch} not found"})
        existing = self.files.get((branch, path))
        sha = body.get("sha")
        if existing is not None and sha is None:
            return FakeResponse(422, {"message": 'Invalid request.\n\n"sha" wasn\'t supplied.'})
        if (existing is None and sha is not None) or (existing is not None and sha != existing.sha):
            return FakeResponse(409, {"message": f"{path} does not match {sha}"})
        blob_sha = self.next_sha()
        commit_sha = self.next_sha()
        self.files[(branch, path)] = FakeFile(sha=blob_sha, content=body["content"])
        self.refs[branch] = commit_sha
        status = 201 if existing is None else 200
        return FakeResponse(status, {"content": {"path": path, "sha": blob_sha}, "commit": {"sha": commit_sha}})

    def _create_pull(self, body: dict) -> FakeResponse:
        head, base = body["head"], body["base"]
        if any(p.head == head and p.base == base and p.state == "open" for p in self.pulls):
            return FakeResponse(
                422,
                {
                    "message": "Validation Failed",
                    "errors": [
                        {
                            "resource": "PullRequest",
                            "code": "custom",
                            "message": f"A pull request already exists for {self.owner}:{head}.",
                        }
                    ],
                },
            )
        pull = FakePull(number=len(self.pulls) + 1, head=head, base=base)
        self.pulls.append(pull)
        return FakeResponse(201, self._pull_payload(pull))

    def _list_pulls(self, params: dict) -> FakeResponse:
        owner, _, head = str(params.get("head", "")).partition(":")
        items = [
            self._pull_payload(p)
            for p in self.pulls
            if owner == self.owner
            and p.head == head
            and p.base == params.get("base")
            and p.state == params.get("state", "open")
        ]
        return FakeResponse(200, items)

    def _pull_payload(self, pull: FakePull) -> dict:
        return {
            "number": pull.number,
            "html_url": f"https://github.com/{self.owner}/{self.repo}/pull/{pull.number}",
            "head": {"ref": pull.head},
            "base": {"ref": pull.base},
            "state": pull.state,
        }


@pytest.fixture
def fake_github(mocker) -> FakeGitHub:
    """Patch the API client factory to talk to a fresh FakeGitHub.

    The base branch ``main`` exists; nothing else does.
    """
    fake = FakeGitHub()
    fake.refs["main"] = BASE_SHA
    mocker.patch("vpat_publisher.github.api.get_github_client", return_value=fake)
    return fake


@pytest.fixture
def config() -> Config:
    return Config(
        base_branch="main",
        github_token="ghp_" + "x" * 36,
        owner=OWNER,
        repo=REPO,
        target_directory="vpat",
        product_id="demo",
        vpat_content="<html><body>VPAT for demo</body></html>",
        api_url="https://api.github.com",
        timeout_s=5.0,
    )


@pytest.fixture
def inputs() -> dict[str, str]:
    """A complete set of step inputs, as the runner would pass them."""
    return {
        "INPUT_DOCS-SITE-BASE-BRANCH": "main",
        "INPUT_DOCS-SITE-GITHUB-TOKEN": "ghp_" + "y" * 36,
        "INPUT_DOCS-SITE-REPOSITORY": f"{OWNER}/{REPO}",
        "INPUT_DOCS-SITE-VPAT-DIRECTORY": "vpat",
        "INPUT_PRODUCT-ID": "demo",
        "INPUT_VPAT-CONTENT": "<html><body>VPAT for demo</body></html>",
    }
