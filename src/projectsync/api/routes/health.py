"""Liveness endpoint."""

from fastapi import APIRouter

from projectsync.api.dependencies import OrchestratorDep
from projectsync.api.models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(orchestrator: OrchestratorDep) -> HealthResponse:
    """Report that the receiver is up and which board it syncs."""
    return HealthResponse(
        status="ok",
        project_id=orchestrator.schema.id,
        fields=len(orchestrator.schema.by_id),
    )
