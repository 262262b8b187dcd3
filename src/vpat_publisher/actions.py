"""Pipeline runner I/O.

Inputs arrive the way a GitHub Actions runner passes them: as ``INPUT_<NAME>``
environment variables.  Outputs are appended to the file named by
``GITHUB_OUTPUT`` and failures are reported with an ``::error::`` workflow
command on stdout.
"""

from __future__ import annotations

import os
import sys
import uuid
from collections.abc import Mapping


def _input_env_names(name: str) -> list[str]:
    """Return the environment variable names that may carry input ``name``."""
    runner_name = f"INPUT_{name.replace(' ', '_').upper()}"
    underscored = runner_name.replace("-", "_")
    if underscored == runner_name:
        return [runner_name]
    return [runner_name, underscored]


def get_input(name: str, environ: Mapping[str, str] | None = None) -> str:
    """Return the trimmed value of input ``name``, or ``""`` if unset."""
    env = os.environ if environ is None else environ
    for key in _input_env_names(name):
        value = env.get(key)
        if value is not None:
            return value.strip()
    return ""


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def set_output(name: str, value: object) -> bool:
    """Append ``name`` to the step outputs file.

    Returns ``False`` when no outputs file is configured (e.g. a local run).
    Values are written with a heredoc delimiter so multi-line values survive.
    """
    path = os.environ.get("GITHUB_OUTPUT")
    if not path:
        return False
    text = "" if value is None else str(value)
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(path, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
    return True


def set_failed(message: str) -> None:
    """Emit an error annotation carrying ``message``."""
    sys.stdout.write(f"::error::{_escape_data(message)}\n")
    sys.stdout.flush()
