"""GitHub client - GraphQL access to GitHub Projects and issues."""

from projectsync.github.client import GitHubClient
from projectsync.github.exceptions import FetchError, GitHubError, MutateError

__all__ = [
    "FetchError",
    "GitHubClient",
    "GitHubError",
    "MutateError",
]
