from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request

from po_agent.middleware.error_handler import UNKNOWN_ERROR
from po_agent.models.relay import RelayErrorBody, RelayRequest, RelayResult
from po_agent.services.agent.errors import RelayError
from po_agent.services.agent.relay import PoAgentRelay

logger = logging.getLogger(__name__)

router = APIRouter(tags=["agent"])


def get_relay(request: Request) -> PoAgentRelay:
    return request.app.state.relay


_ERROR_RESPONSES = {status: {"model": RelayErrorBody} for status in (400, 402, 429, 500)}
_REQUEST_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": RelayRequest.model_json_schema()}},
    }
}


@router.post(
    "/po-agent",
    response_model=RelayResult,
    responses=_ERROR_RESPONSES,
    openapi_extra=_REQUEST_BODY,
)
async def po_agent(request: Request, relay: PoAgentRelay = Depends(get_relay)) -> dict:
    """Relay one action to the LLM and return ``{"result": ...}``.

    Every failure comes back as ``{"error": ...}`` with the matching status.
    The body is parsed after the credential check; an unreadable body is a 500.
    """
    try:
        relay.ensure_configured()
        body = RelayRequest.model_validate_json(await request.body())
        result = await relay.run(body)
    except RelayError:
        raise
    except Exception as exc:
        logger.exception("po-agent error: %s", exc)
        raise RelayError(str(exc) or UNKNOWN_ERROR) from exc
    return {"result": result}
