"""Branch and file naming for published VPATs.

Both names are derived only from the product identifier, so re-runs for one
product always reconcile the same branch and file, and runs for different
products never share either.
"""

from __future__ import annotations

from .constants import HEAD_BRANCH_PREFIX, VPAT_FILE_EXTENSION


def head_branch_name(product_id: str) -> str:
    """Return the head branch carrying the VPAT for ``product_id``."""
    return f"{HEAD_BRANCH_PREFIX}{product_id}"


def vpat_file_path(target_directory: str, product_id: str) -> str:
    """Return the repository path of the VPAT for ``product_id``."""
    directory = target_directory.rstrip("/")
    return f"{directory}/{product_id}{VPAT_FILE_EXTENSION}"
