"""Global constants for VPAT Publisher.

Defaults for the settings that may differ between runners (API endpoint,
timeout and log level) live here; `config` reads the overrides when a run
starts.  The naming and committer constants are fixed so that repeated runs
for a product always touch the same branch and file.
"""

# Input names, as declared by the pipeline step
INPUT_BASE_BRANCH = "docs-site-base-branch"
INPUT_TOKEN = "docs-site-github-token"
INPUT_REPOSITORY = "docs-site-repository"
INPUT_VPAT_DIRECTORY = "docs-site-vpat-directory"
INPUT_PRODUCT_ID = "product-id"
INPUT_VPAT_CONTENT = "vpat-content"

REQUIRED_INPUTS = (
    INPUT_BASE_BRANCH,
    INPUT_TOKEN,
    INPUT_REPOSITORY,
    INPUT_VPAT_DIRECTORY,
    INPUT_PRODUCT_ID,
    INPUT_VPAT_CONTENT,
)

# Naming
HEAD_BRANCH_PREFIX = "publish-vpat-"
VPAT_FILE_EXTENSION = ".html"

# Committer identity used for every VPAT commit
COMMITTER_NAME = "deque-docs"
COMMITTER_EMAIL = "deque-docs@github.com"

# Optional settings: environment variable names and defaults
ENV_API_URL = "GITHUB_API_URL"
ENV_API_TIMEOUT_S = "GITHUB_API_TIMEOUT_S"
ENV_LOG_LEVEL = "LOG_LEVEL"

# Transport
DEFAULT_GITHUB_API_URL = "https://api.github.com"
DEFAULT_GITHUB_API_TIMEOUT_S = 30.0

# Logging
DEFAULT_LOG_LEVEL = "INFO"
