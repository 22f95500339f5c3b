"""Webhook endpoint receiving GitHub deliveries."""

from fastapi import APIRouter, Request, status
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool
from starlette.requests import ClientDisconnect

from projectsync.api.dependencies import OrchestratorDep
from projectsync.logging import get_logger, truncate_output
from projectsync.sync import DecodeError, decode_event

logger = get_logger("api.webhook")

router = APIRouter(tags=["webhook"])


@router.post("/", response_class=PlainTextResponse)
async def receive_webhook(request: Request, orchestrator: OrchestratorDep) -> PlainTextResponse:
    """Receive one delivery and sync the board.

    Always answers 200 "OK" once the body is decoded; action failures are
    only logged.
    """
    logger.info("Incoming request")
    try:
        body = await request.body()
    except ClientDisconnect:
        logger.error("Client disconnected while reading request body")
        return PlainTextResponse(
            "Error reading request body", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    try:
        event = decode_event(body)
    except DecodeError as e:
        logger.warning("%s", e)
        return PlainTextResponse(
            "Error parsing request body", status_code=status.HTTP_400_BAD_REQUEST
        )

    logger.debug("Request body: %s", truncate_output(body.decode("utf-8", errors="replace")))

    # The GitHub client is blocking, keep it off the event loop
    try:
        results = await run_in_threadpool(orchestrator.handle, event)
    except Exception as e:
        # The delivery was received; a sync bug must not make GitHub redeliver it
        logger.exception("Error handling %s delivery: %s", event.action or "unknown", e)
        return PlainTextResponse("OK")

    for result in results:
        if not result.success:
            logger.warning("Action %s failed: %s", result.action, result.detail)

    return PlainTextResponse("OK")
