"""GitHub REST API access."""

from .client import GitHubAPIError, GitHubClient
from .source import ActivitySource

__all__ = ["ActivitySource", "GitHubAPIError", "GitHubClient"]
