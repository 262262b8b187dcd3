"""Exception types raised by VPAT Publisher."""

from __future__ import annotations


class ConfigError(ValueError):
    """A required input is missing or malformed."""


class GitHubAPIError(RuntimeError):
    """A GitHub API call failed.

    ``message`` is the API's top-level message and ``errors`` its structured
    error entries; both are kept as-is for matching.  ``str(exc)`` joins them
    (``Validation Failed: <detail>``) so the step's failure reason carries
    the detail.  ``status_code`` is ``None`` for transport failures that never
    produced a response.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: list[dict[str, object]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.errors = errors or []

    def __str__(self) -> str:
        details = self.error_details()
        if not details:
            return self.message
        return f"{self.message}: {'; '.join(details)}"

    def error_messages(self) -> list[str]:
        """Return the messages of the structured ``errors`` entries."""
        messages = []
        for entry in self.errors:
            if isinstance(entry, dict) and entry.get("message"):
                messages.append(str(entry["message"]))
        return messages

    def error_details(self) -> list[str]:
        """Describe every structured entry, including those without a message."""
        details = []
        for entry in self.errors:
            if not isinstance(entry, dict):
                continue
            if entry.get("message"):
                details.append(str(entry["message"]))
                continue
            # e.g. {"resource": "PullRequest", "field": "head", "code": "invalid"}
            target = ".".join(str(entry[k]) for k in ("resource", "field") if entry.get(k))
            code = str(entry.get("code") or "")
            text = " ".join(part for part in (target, code) if part)
            if text:
                details.append(text)
        return details


class BaseBranchNotFoundError(GitHubAPIError):
    """The base branch the head branch should fork from does not exist."""
