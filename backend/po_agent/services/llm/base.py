from __future__ import annotations

import abc


class LLMProvider(abc.ABC):
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url
        self.model = model

    @abc.abstractmethod
    async def call_tool(
        self,
        system_prompt: str,
        user_message: str,
        tools: list[dict],
        tool_choice: dict,
    ) -> dict:
        """One chat completion with a forced tool call. Returns the raw response body."""

    @abc.abstractmethod
    async def test_connection(self) -> bool:
        """Test connectivity to the gateway. Returns True on success."""
