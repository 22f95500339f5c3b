"""Runtime settings read from the environment."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"


def _get_github_token() -> str:
    """Get GitHub token from environment or gh CLI."""
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return token
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError):
        return ""


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@dataclass
class Settings:
    """Settings for the webhook receiver.

    Attributes:
        github_token: Token with project and issue write scopes.
        organization: Login of the organization owning the board.
        project_number: Board number, as shown in the project URL.
        host: Interface the HTTP server binds to.
        port: Port the HTTP server listens on.
        graphql_url: GitHub GraphQL endpoint (for testing/enterprise).
    """

    github_token: str
    organization: str = "syntasso"
    project_number: int = 4
    host: str = "0.0.0.0"
    port: int = 8080
    graphql_url: str = DEFAULT_GRAPHQL_URL

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from PROJECTSYNC_* variables and GITHUB_TOKEN."""
        return cls(
            github_token=_get_github_token(),
            organization=os.environ.get("PROJECTSYNC_ORGANIZATION", "syntasso"),
            project_number=_int_from_env("PROJECTSYNC_PROJECT_NUMBER", 4),
            host=os.environ.get("PROJECTSYNC_HOST", "0.0.0.0"),
            port=_int_from_env("PROJECTSYNC_PORT", 8080),
            graphql_url=os.environ.get("PROJECTSYNC_GRAPHQL_URL", DEFAULT_GRAPHQL_URL),
        )
