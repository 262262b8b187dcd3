"""Templates for the VPAT commit and pull request text."""

from __future__ import annotations

from ..constants import COMMITTER_EMAIL, COMMITTER_NAME


def commit_message(product_id: str) -> str:
    return f"chore: update vpat for {product_id}"


def committer() -> dict[str, str]:
    return {"name": COMMITTER_NAME, "email": COMMITTER_EMAIL}


def pr_title(product_id: str) -> str:
    return f"Update VPAT for {product_id}"


def pr_body(product_id: str) -> str:
    return f"This PR updates the VPAT for {product_id}."
