from __future__ import annotations

import json

import httpx
import openai
import pytest
from httpx import ASGITransport, AsyncClient

from po_agent.api.routes.agent import get_relay
from po_agent.main import app
from po_agent.services.agent.relay import PoAgentRelay
from po_agent.services.llm.base import LLMProvider


class FakeLLM(LLMProvider):
    """Records every call and answers with a canned body or raises a canned error."""

    def __init__(self, response: dict | None = None, error: Exception | None = None) -> None:
        super().__init__(api_key="fake", base_url=None, model="fake-model")
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    async def call_tool(self, system_prompt, user_message, tools, tool_choice) -> dict:
        self.calls.append({
            "system_prompt": system_prompt,
            "user_message": user_message,
            "tools": tools,
            "tool_choice": tool_choice,
        })
        if self.error is not None:
            raise self.error
        return self.response

    async def test_connection(self) -> bool:
        self.calls.append({"method": "test_connection"})
        if self.error is not None:
            raise self.error
        return True


def tool_response(name: str, arguments: dict | str) -> dict:
    """A chat completion body carrying one tool call."""
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {
        "id": "chatcmpl-test",
        "choices": [
            {
                "index": 0,
                "finish_reason": "tool_calls",
                "message": {
                    "role": "assistant",
                    "content": None,
                    "tool_calls": [
                        {
                            "id": "call_1",
                            "type": "function",
                            "function": {"name": name, "arguments": arguments},
                        }
                    ],
                },
            }
        ],
    }


def status_error(status: int, body: str = "upstream said no") -> openai.APIStatusError:
    request = httpx.Request("POST", "https://gateway.test/v1/chat/completions")
    response = httpx.Response(status, request=request, text=body)
    return openai.APIStatusError(f"Error code: {status}", response=response, body=None)


SAMPLE_ANALYSIS = {
    "summary": "Les utilisateurs veulent un export PDF et une recherche plus rapide.",
    "sentiment": "mixed",
    "patterns": ["Demande récurrente d'export"],
    "featureRequests": [{"title": "Export PDF", "priority": "Haute", "mentions": 3}],
    "painPoints": ["Recherche lente"],
}

SAMPLE_STORIES = {
    "stories": [
        {
            "role": "utilisateur connecté",
            "action": "exporter mon tableau de bord en PDF",
            "benefit": "partager un rapport avec mon équipe",
            "acceptanceCriteria": ["Un bouton 'Exporter en PDF' est visible"],
            "complexity": "M",
            "complexityReason": "Génération PDF côté client.",
        },
        {
            "role": "chef de projet",
            "action": "recevoir des notifications Slack",
            "benefit": "rester informé en temps réel",
            "acceptanceCriteria": ["Connexion du workspace Slack", "Choix du channel"],
            "complexity": "L",
            "complexityReason": "OAuth Slack et webhooks.",
        },
    ]
}

SAMPLE_PRIORITIZATION = {
    "features": [
        {
            "name": "Export PDF",
            "reach": 600,
            "impact": 2,
            "confidence": 90,
            "effort": 2,
            "moscow": "must",
            "justification": "Demande forte et effort limité.",
        },
        {
            "name": "Slack",
            "reach": 300,
            "impact": 1,
            "confidence": 70,
            "effort": 5,
            "moscow": "could",
            "justification": "Utile mais non critique.",
        },
    ]
}


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM(response=tool_response("analyze_feedback", SAMPLE_ANALYSIS))


@pytest.fixture
def relay(fake_llm: FakeLLM) -> PoAgentRelay:
    return PoAgentRelay(llm=fake_llm, api_key="test-key")


@pytest.fixture
async def client(relay: PoAgentRelay) -> AsyncClient:
    app.dependency_overrides[get_relay] = lambda: relay
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c
    finally:
        app.dependency_overrides.pop(get_relay, None)
