from __future__ import annotations

import logging

import openai

from po_agent.models.relay import RelayRequest
from po_agent.services.agent.actions import get_action_spec, resolve_action
from po_agent.services.agent.composer import compose_user_message
from po_agent.services.agent.errors import MissingCredentialError
from po_agent.services.agent.translator import extract_tool_result, translate_upstream_error
from po_agent.services.llm.base import LLMProvider
from po_agent.services.llm.openai_compat import get_provider

logger = logging.getLogger(__name__)


class PoAgentRelay:
    """Stateless relay: one client request in, one upstream call, one JSON result out."""

    def __init__(self, llm: LLMProvider, api_key: str | None) -> None:
        self.llm = llm
        self.api_key = api_key

    @classmethod
    def from_settings(cls, settings) -> PoAgentRelay:
        return cls(llm=get_provider(settings), api_key=settings.llm_api_key)

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def ensure_configured(self) -> None:
        if not self.configured:
            raise MissingCredentialError()

    async def run(self, request: RelayRequest) -> dict:
        """Dispatch ``request`` to the model and return its structured result.

        Raises a ``RelayError`` subclass for every failure the caller should
        report; transport errors from the client library propagate unchanged.
        """
        self.ensure_configured()

        action = resolve_action(request.action)
        spec = get_action_spec(action)
        user_message = compose_user_message(action, request)

        logger.info("Dispatching %s to %s", action.value, spec.tool_name)
        try:
            body = await self.llm.call_tool(
                system_prompt=spec.system_prompt,
                user_message=user_message,
                tools=spec.tools,
                tool_choice=spec.tool_choice,
            )
        except openai.APIStatusError as exc:
            raise translate_upstream_error(exc) from exc

        return extract_tool_result(body)
