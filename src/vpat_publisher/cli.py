"""Command-line entrypoint for VPAT Publisher.

Reads the step inputs, runs the publish workflow and reports the outcome as
the process exit status.  On failure the underlying error's message is
emitted verbatim as an error annotation.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

from dotenv import find_dotenv, load_dotenv

from . import actions
from .config import Config
from .constants import DEFAULT_LOG_LEVEL, INPUT_TOKEN
from .publish import PublishResult, publish_vpat
from .telemetry import configure_logging

logger = logging.getLogger(__name__)


def export_outputs(result: PublishResult) -> None:
    """Expose the run's results as step outputs."""
    outputs = {
        "head-branch": result.head_branch,
        "file-path": result.file_path,
        "commit-sha": result.commit_sha,
        "pull-request-number": result.pr_number,
    }
    for name, value in outputs.items():
        if not actions.set_output(name, value):
            logger.debug("No outputs file configured, skipping outputs")
            return


def run(environ: Mapping[str, str] | None = None) -> int:
    """Run one publish and return the process exit status."""
    if environ is None:
        load_dotenv(find_dotenv(usecwd=True))
    secrets = [actions.get_input(INPUT_TOKEN, environ)]
    # Until the config loads, failures are logged at the default level.
    configure_logging(DEFAULT_LOG_LEVEL, secrets=secrets)

    try:
        config = Config.load_from_env(environ)
        configure_logging(config.log_level, secrets=secrets)
        result = publish_vpat(config)
    except Exception as exc:
        logger.error("VPAT publish failed: %s", exc)
        actions.set_failed(str(exc))
        return 1

    logger.info(
        "Published %s on %s (commit %s, pull request %s)",
        result.file_path,
        result.head_branch,
        result.commit_sha,
        result.pr_number,
    )
    export_outputs(result)
    return 0


def main() -> None:
    """Entrypoint for the ``vpat-publisher`` console script."""
    sys.exit(run())


if __name__ == "__main__":
    main()
