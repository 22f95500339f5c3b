"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import TYPE_CHECKING, Annotated, Protocol

from fastapi import Depends

if TYPE_CHECKING:
    from projectsync.sync import ActionResult, ProjectSchema, WebhookEvent


class Orchestrator(Protocol):
    """Interface for the SyncOrchestrator component."""

    schema: ProjectSchema

    def handle(self, event: WebhookEvent) -> list[ActionResult]:
        """Handle one webhook delivery."""
        ...


# Global SyncOrchestrator instance (initialized on app startup)
_orchestrator: Orchestrator | None = None


def init_orchestrator(orchestrator: Orchestrator) -> None:
    """Initialize the global SyncOrchestrator instance."""
    global _orchestrator  # noqa: PLW0603
    _orchestrator = orchestrator


def close_orchestrator() -> None:
    """Close the global SyncOrchestrator instance."""
    global _orchestrator  # noqa: PLW0603
    _orchestrator = None


def get_orchestrator() -> Generator[Orchestrator, None, None]:
    """Dependency that provides the SyncOrchestrator instance."""
    if _orchestrator is None:
        raise RuntimeError("Orchestrator not initialized. Call init_orchestrator() first.")
    yield _orchestrator


# Type alias for dependency injection
OrchestratorDep = Annotated[Orchestrator, Depends(get_orchestrator)]
