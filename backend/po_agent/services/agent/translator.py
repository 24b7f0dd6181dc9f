from __future__ import annotations

import json
import logging

import openai

from po_agent.services.agent.errors import (
    NoStructuredResultError,
    RelayError,
    UpstreamBillingError,
    UpstreamRateLimitError,
    UpstreamServiceError,
)

logger = logging.getLogger(__name__)


def extract_tool_result(body: dict) -> dict:
    """Parse the arguments of the first tool call in a chat completion body.

    The payload is returned as-is; its shape is only guaranteed by the
    upstream's forced tool choice.
    """
    choices = body.get("choices") or []
    message = (choices[0].get("message") or {}) if choices else {}
    tool_calls = message.get("tool_calls") or []
    if not tool_calls:
        logger.error("No tool call in response: %s", json.dumps(body, ensure_ascii=False)[:500])
        raise NoStructuredResultError()

    arguments = (tool_calls[0].get("function") or {}).get("arguments")
    try:
        return json.loads(arguments)
    except (TypeError, ValueError):
        logger.error("Unparseable tool call arguments: %r", arguments)
        raise NoStructuredResultError() from None


def translate_upstream_error(exc: openai.APIStatusError) -> RelayError:
    status = exc.status_code
    logger.error("AI gateway error: %s %s", status, exc.response.text[:500])
    if status == 429:
        return UpstreamRateLimitError()
    if status == 402:
        return UpstreamBillingError()
    return UpstreamServiceError()
