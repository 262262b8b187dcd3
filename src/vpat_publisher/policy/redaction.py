"""Secret redaction utilities.

This module removes occurrences of secrets from text before it is logged.
Redaction is a simple string replacement that substitutes secrets with the
string ``"<REDACTED>"``.  Only explicit secrets and GitHub token shapes are
matched; generic long-string patterns would also swallow commit SHAs, which
the log trace needs.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

_TOKEN_PATTERNS = [
    # GitHub personal access, OAuth, app and refresh tokens
    re.compile(r"gh[pousr]_[A-Za-z0-9]{30,}"),
    re.compile(r"github_pat_[A-Za-z0-9_]{20,}"),
    # Authorization header values
    re.compile(r"(?<=Authorization: token )\S+", re.IGNORECASE),
]


def redact_secrets(text: str, secrets: Iterable[str]) -> str:
    """Return ``text`` with secrets and GitHub token patterns replaced.

    :param text: arbitrary text that may contain secrets
    :param secrets: iterable of secret strings to redact
    :return: redacted text
    """
    redacted = text or ""
    for secret in secrets:
        if secret:
            redacted = redacted.replace(secret, "<REDACTED>")
    for pattern in _TOKEN_PATTERNS:
        redacted = pattern.sub("<REDACTED>", redacted)
    return redacted
