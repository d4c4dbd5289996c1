"""Module holding constants used across bulkclone."""

API_BASE = "https://api.github.com"
GITHUB_API_ACCEPT = "application/vnd.github+json"
USER_AGENT = "bulkclone/0.1"
HTTP_TIMEOUT_SEC = 30
PER_PAGE = 99  # also the work queue bound
DEFAULT_WORKERS = 1
MAX_WORKERS = 10
CLONE_DEPTH = 1
DIR_MODE = 0o755

# exit codes
EXIT_API_ERROR = 1
EXIT_FATAL = 2
