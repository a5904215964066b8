"""
MCOP Hub relay - API routes.

Endpoints for checking Hub connectivity and relaying events from other
services. Relayed events are delivered after the response is sent, so
the caller never waits on the Hub.
"""

import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from mcop_hub.client import SendOptions, ping_hub, send_event
from mcop_hub.delivery.config import CONFIG_MISSING_ERROR
from mcop_hub.dispatch import EventDispatcher, get_event_dispatcher
from mcop_hub.events.models import HubEventType

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hub", tags=["hub"])


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================


class EmitEventRequest(BaseModel):
    """Event relay request."""

    payload: dict[str, Any] = Field(default_factory=dict, description="Event payload")
    source_version: str | None = Field(None, description="Emitting system version")


class EmitEventResponse(BaseModel):
    """Event relay response."""

    accepted: bool
    type: str


def get_dispatcher() -> EventDispatcher:
    """Dependency providing the delivery settings (config and transport)."""
    return get_event_dispatcher()


# =============================================================================
# ROUTES
# =============================================================================


@router.get("/health")
async def hub_health(dispatcher: EventDispatcher = Depends(get_dispatcher)):
    """Check Hub connectivity with a ping event."""
    result = await ping_hub(dispatcher.config, transport=dispatcher.transport)

    if result.ok:
        return {
            "success": True,
            "hub_status": "connected",
            "attempts": result.attempts,
            "status": result.status,
        }

    if result.was_skipped:
        hub_status = "unconfigured"
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif result.status is not None:
        hub_status = "error"
        code = status.HTTP_502_BAD_GATEWAY
    else:
        hub_status = "unreachable"
        code = status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=code,
        content={
            "success": False,
            "hub_status": hub_status,
            "error": result.error or CONFIG_MISSING_ERROR,
            "attempts": result.attempts,
        },
    )


@router.post(
    "/events/{event_type}",
    response_model=EmitEventResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def relay_event(
    event_type: str,
    request: EmitEventRequest,
    background_tasks: BackgroundTasks,
    dispatcher: EventDispatcher = Depends(get_dispatcher),
):
    """Accept an event and deliver it to the Hub in the background."""
    parsed = HubEventType.parse(event_type)
    if parsed is None:
        raise HTTPException(status_code=404, detail=f"Unknown event type: {event_type}")

    background_tasks.add_task(
        send_event,
        parsed,
        request.payload,
        dispatcher.config,
        SendOptions(source_version=request.source_version),
        transport=dispatcher.transport,
    )
    logger.debug(f"Accepted {parsed.value} for background delivery")

    return EmitEventResponse(accepted=True, type=parsed.value)
