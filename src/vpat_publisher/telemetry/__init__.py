"""Telemetry and logging utilities."""

from .logger import RedactingFilter, configure_logging

__all__ = ["configure_logging", "RedactingFilter"]
