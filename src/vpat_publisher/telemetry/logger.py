"""Logging setup for VPAT Publisher."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable

from ..policy.redaction import redact_secrets

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class RedactingFilter(logging.Filter):
    """Replace known secrets in every record's rendered message."""

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        super().__init__()
        self.secrets = [s for s in secrets if s]

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message, self.secrets)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def configure_logging(level: str, secrets: Iterable[str] = ()) -> None:
    """Send log records to stderr, redacting ``secrets`` on the way out.

    Stdout is kept for workflow commands.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    redactor = RedactingFilter(secrets)
    for handler in logging.getLogger().handlers:
        handler.addFilter(redactor)

