"""Custom exceptions for the GitHub client."""


class GitHubError(Exception):
    """Base exception for GitHub client errors."""


class FetchError(GitHubError):
    """A read (project metadata, field ids, item values) failed."""


class MutateError(GitHubError):
    """A write (field value, add item, issue type) failed."""
