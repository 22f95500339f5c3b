"""HTTP API for projectsync."""

from projectsync.api.app import app, create_app
from projectsync.api.models import HealthResponse

__all__ = [
    "HealthResponse",
    "app",
    "create_app",
]
