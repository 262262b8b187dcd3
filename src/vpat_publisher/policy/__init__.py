"""Policy utilities for VPAT Publisher."""

from .redaction import redact_secrets

__all__ = ["redact_secrets"]
