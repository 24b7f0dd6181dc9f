"""Async client for the PO agent relay.

Each operation sends one request and returns typed results; every failure
(transport, relay-reported or malformed result) is raised as ``AgentError``.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from po_agent.models.results import FeedbackAnalysis, PrioritizedFeature, UserStory

logger = logging.getLogger(__name__)

DEFAULT_ERROR = "Erreur de communication avec l'agent"


class AgentError(Exception):
    """Single error value carrying a human-readable message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PoAgentClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        path: str = "/po-agent",
    ) -> None:
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self.path = path

    async def __aenter__(self) -> PoAgentClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _call(self, action: str, payload: dict[str, Any]) -> Any:
        try:
            resp = await self._client.post(self.path, json={"action": action, **payload})
        except httpx.HTTPError as exc:
            logger.warning("Relay call %s failed: %s", action, exc)
            raise AgentError(str(exc) or DEFAULT_ERROR) from exc

        try:
            data = resp.json()
        except ValueError:
            raise AgentError(DEFAULT_ERROR) from None

        if isinstance(data, dict) and data.get("error"):
            raise AgentError(str(data["error"]))
        if resp.is_error or not isinstance(data, dict) or "result" not in data:
            raise AgentError(DEFAULT_ERROR)
        return data["result"]

    async def analyze_feedback(self, content: str) -> FeedbackAnalysis:
        result = await self._call("analyze-feedback", {"content": content})
        return _parse(FeedbackAnalysis, result)

    async def generate_stories(self, content: str, persona: str) -> list[UserStory]:
        result = await self._call("generate-stories", {"content": content, "persona": persona})
        stories = _field(result, "stories")
        # The model supplies no id; number stories by position
        return [
            _parse(UserStory, story, id=str(i + 1))
            for i, story in enumerate(stories)
        ]

    async def prioritize_features(
        self, features: Iterable[Mapping[str, Any] | str]
    ) -> list[PrioritizedFeature]:
        names = [{"name": f if isinstance(f, str) else f["name"]} for f in features]
        result = await self._call("prioritize-features", {"features": names})
        return [_parse(PrioritizedFeature, f) for f in _field(result, "features")]


def _field(result: Any, name: str) -> list:
    if not isinstance(result, dict) or not isinstance(result.get(name), list):
        raise AgentError(DEFAULT_ERROR)
    return result[name]


def _parse(model, data: Any, **extra: Any):
    if not isinstance(data, dict):
        raise AgentError(DEFAULT_ERROR)
    try:
        return model.model_validate({**data, **extra})
    except ValidationError as exc:
        logger.warning("Unexpected %s payload: %s", model.__name__, exc)
        raise AgentError(DEFAULT_ERROR) from exc
