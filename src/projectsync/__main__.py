"""Run the webhook receiver with uvicorn."""

from __future__ import annotations

import uvicorn

from projectsync.api import create_app
from projectsync.config import Settings
from projectsync.logging import get_logger, setup_logging

logger = get_logger("main")


def main() -> None:
    """Start the HTTP server."""
    setup_logging()
    logger.info("--- Starting the application ---")
    settings = Settings.from_env()
    app = create_app(settings=settings)
    logger.info("Server starting on %s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
