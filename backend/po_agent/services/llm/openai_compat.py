from __future__ import annotations

import logging
from typing import Any

from po_agent.services.llm.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "google/gemini-3-flash-preview"


class OpenAICompatProvider(LLMProvider):
    """Provider for any OpenAI-compatible chat completions gateway.

    The client never retries: each ``call_tool`` is exactly one outbound request.
    Non-2xx replies surface as ``openai.APIStatusError`` and transport failures
    as ``openai.APIConnectionError``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ) -> None:
        super().__init__(api_key=api_key, base_url=base_url, model=model)
        self.timeout = timeout
        self._client = None

    def _get_client(self):
        if self._client is None:
            import openai

            kwargs: dict[str, Any] = {"api_key": self.api_key or "no-key", "max_retries": 0}
            if self.base_url:
                kwargs["base_url"] = self.base_url
            if self.timeout is not None:
                kwargs["timeout"] = self.timeout
            self._client = openai.AsyncOpenAI(**kwargs)
        return self._client

    async def call_tool(
        self,
        system_prompt: str,
        user_message: str,
        tools: list[dict],
        tool_choice: dict,
    ) -> dict:
        client = self._get_client()
        response = await client.chat.completions.create(
            model=self.model or DEFAULT_MODEL,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            tools=tools,
            tool_choice=tool_choice,
        )
        return response.model_dump()

    async def test_connection(self) -> bool:
        client = self._get_client()
        response = await client.chat.completions.create(
            model=self.model or DEFAULT_MODEL,
            messages=[{"role": "user", "content": "Hi"}],
            max_tokens=1,
        )
        return bool(response.choices)


def get_provider(settings) -> LLMProvider:
    """Build the gateway provider from application settings."""
    return OpenAICompatProvider(
        api_key=settings.llm_api_key,
        base_url=settings.llm_base_url,
        model=settings.llm_model,
        timeout=settings.llm_timeout,
    )
