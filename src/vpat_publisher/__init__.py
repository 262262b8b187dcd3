"""Top‑level package for VPAT Publisher.

This package publishes a generated VPAT report into a documentation
repository by opening a pull request against it.  See `README.md` for more
information.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
