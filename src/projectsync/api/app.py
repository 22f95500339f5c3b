"""FastAPI application setup."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from projectsync import __version__
from projectsync.api.dependencies import close_orchestrator, init_orchestrator
from projectsync.api.routes import health, webhook
from projectsync.config import Settings
from projectsync.github import FetchError, GitHubClient
from projectsync.logging import get_logger
from projectsync.sync import SyncOrchestrator, TypeMapping, load_issue_types

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from projectsync.sync import BoardClient

logger = get_logger("api.app")


def bootstrap(client: BoardClient, settings: Settings) -> SyncOrchestrator:
    """Take the project snapshot and build the orchestrator.

    Raises:
        FetchError: If the project fields cannot be fetched.
    """
    schema = client.fetch_project_schema(settings.organization, settings.project_number)
    logger.info("Project ID: %s", schema.id)

    type_mapping = TypeMapping()
    try:
        load_issue_types(client, schema, type_mapping)
    except FetchError as e:
        logger.warning("Could not load organization issue types: %s", e)

    return SyncOrchestrator(client=client, schema=schema, type_mapping=type_mapping)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    settings: Settings = app.state.settings or Settings.from_env()
    if app.state.client is not None:
        client = app.state.client
        owns_client = False
    else:
        if not settings.github_token:
            raise RuntimeError("GitHub token not configured (set GITHUB_TOKEN or run gh auth login)")
        client = GitHubClient(token=settings.github_token, base_url=settings.graphql_url)
        owns_client = True

    try:
        orchestrator = bootstrap(client, settings)
    except FetchError:
        logger.exception("Failed to query project details")
        if owns_client:
            client.close()
        raise
    init_orchestrator(orchestrator)

    yield
    # Shutdown
    close_orchestrator()
    if owns_client:
        client.close()


def create_app(settings: Settings | None = None, client: BoardClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use. Read from the environment on startup if None.
        client: Board client to use instead of a GitHubClient built from settings.
    """
    app = FastAPI(
        title="projectsync",
        description="Webhook receiver keeping a GitHub Project board in sync",
        version=__version__,
        lifespan=lifespan,
    )

    # Store config for lifespan manager
    app.state.settings = settings
    app.state.client = client

    app.include_router(webhook.router)
    app.include_router(health.router)

    return app


# Default app instance
app = create_app()
