"""Exceptions raised by workflow_retention."""


class RetentionError(Exception):
    """Base class for every error raised by this package."""


class InvalidRepositoryError(RetentionError, ValueError):
    """Raised when a repository is not given as 'owner/name'."""

    def __init__(self, repository: str):
        self.repository = repository
        super().__init__(
            f"Invalid repository '{repository}'. Expected format {{owner}}/{{repo}}."
        )


class ConfigurationError(RetentionError, ValueError):
    """Raised when an option value cannot be used."""


class GitHubAPIError(RetentionError):
    """Raised when the GitHub API answers with a non-success status."""

    def __init__(self, status_code: int, message: str, url: str = ""):
        self.status_code = status_code
        self.message = message
        self.url = url
        detail = f"{status_code}: {message}" if message else str(status_code)
        super().__init__(f"GitHub API request failed ({detail})")


class RateLimitError(GitHubAPIError):
    """Raised when the API rate limit is exhausted and no retry is left."""
