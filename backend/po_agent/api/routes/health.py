from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from po_agent.api.routes.agent import get_relay
from po_agent.config import settings
from po_agent.services.agent.relay import PoAgentRelay

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.get("/health/detail")
async def health_detail() -> dict:
    """Detailed health check. Never calls the upstream model."""
    return {
        "backend": {"status": "ok"},
        "llm": _check_llm(),
    }


@router.get("/health/llm")
async def health_llm(relay: PoAgentRelay = Depends(get_relay)) -> dict:
    """Send one minimal completion to the gateway to check the key and model."""
    if not relay.configured:
        return {"success": False, "message": "No API key set for the LLM gateway"}
    try:
        await relay.llm.test_connection()
    except Exception as e:
        logger.warning("LLM connection test failed: %s", e)
        return {"success": False, "message": str(e)}
    return {"success": True, "message": "Connection successful", "model": relay.llm.model}


def _check_llm() -> dict:
    info = {
        "provider": "openai_compat",
        "base_url": settings.llm_base_url,
        "model": settings.llm_model,
    }
    if settings.llm_api_key:
        return {"status": "configured", **info}
    return {
        "status": "no_api_key",
        **info,
        "message": "No API key set for the LLM gateway",
    }
