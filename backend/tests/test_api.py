"""Tests for the /po-agent relay endpoint, CORS and health routes."""
from __future__ import annotations

import pytest

from conftest import (
    SAMPLE_ANALYSIS,
    SAMPLE_PRIORITIZATION,
    SAMPLE_STORIES,
    FakeLLM,
    status_error,
    tool_response,
)
from po_agent.api.routes.agent import get_relay
from po_agent.main import app
from po_agent.services.agent.relay import PoAgentRelay


def _use(llm: FakeLLM, api_key: str = "test-key") -> None:
    relay = PoAgentRelay(llm=llm, api_key=api_key)
    app.dependency_overrides[get_relay] = lambda: relay


class TestRelaySuccess:
    @pytest.mark.asyncio
    async def test_analyze_feedback(self, client):
        resp = await client.post("/po-agent", json={"action": "analyze-feedback", "content": "Trop lent"})
        assert resp.status_code == 200
        result = resp.json()["result"]
        assert set(result) == {"summary", "sentiment", "patterns", "featureRequests", "painPoints"}

    @pytest.mark.asyncio
    async def test_generate_stories(self, client):
        _use(FakeLLM(response=tool_response("generate_user_stories", SAMPLE_STORIES)))
        resp = await client.post(
            "/po-agent",
            json={"action": "generate-stories", "content": "Export PDF", "persona": "admin"},
        )
        assert resp.status_code == 200
        stories = resp.json()["result"]["stories"]
        for story in stories:
            assert set(story) == {
                "role", "action", "benefit", "acceptanceCriteria", "complexity", "complexityReason",
            }

    @pytest.mark.asyncio
    async def test_prioritize_features(self, client):
        llm = FakeLLM(response=tool_response("prioritize_features", SAMPLE_PRIORITIZATION))
        _use(llm)
        resp = await client.post(
            "/po-agent",
            json={
                "action": "prioritize-features",
                "features": [{"name": "Export PDF"}, {"name": "Slack"}],
            },
        )
        assert resp.status_code == 200
        for feature in resp.json()["result"]["features"]:
            assert set(feature) == {
                "name", "reach", "impact", "confidence", "effort", "moscow", "justification",
            }
        assert "1. Export PDF\n2. Slack" in llm.calls[0]["user_message"]


class TestRelayErrors:
    @pytest.mark.asyncio
    async def test_unknown_action(self, client):
        resp = await client.post("/po-agent", json={"action": "summarize", "content": "x"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Unknown action: summarize"}

    @pytest.mark.asyncio
    async def test_missing_action(self, client):
        resp = await client.post("/po-agent", json={"content": "x"})
        assert resp.status_code == 400
        assert "Unknown action" in resp.json()["error"]

    @pytest.mark.asyncio
    async def test_rate_limited(self, client):
        _use(FakeLLM(error=status_error(429)))
        resp = await client.post("/po-agent", json={"action": "analyze-feedback", "content": "x"})
        assert resp.status_code == 429
        assert resp.json() == {"error": "Trop de requêtes. Réessayez dans quelques instants."}

    @pytest.mark.asyncio
    async def test_billing(self, client):
        _use(FakeLLM(error=status_error(402)))
        resp = await client.post("/po-agent", json={"action": "analyze-feedback", "content": "x"})
        assert resp.status_code == 402
        assert resp.json() == {"error": "Crédits IA épuisés. Ajoutez des crédits dans les paramètres."}

    @pytest.mark.asyncio
    async def test_other_upstream_status(self, client):
        _use(FakeLLM(error=status_error(503)))
        resp = await client.post("/po-agent", json={"action": "analyze-feedback", "content": "x"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Erreur du service IA"}

    @pytest.mark.asyncio
    async def test_no_tool_call(self, client):
        _use(FakeLLM(response={"choices": [{"message": {"content": "Texte libre"}}]}))
        resp = await client.post("/po-agent", json={"action": "analyze-feedback", "content": "x"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "L'IA n'a pas retourné de résultat structuré"}

    @pytest.mark.asyncio
    async def test_missing_credential(self, client):
        llm = FakeLLM(response=tool_response("analyze_feedback", SAMPLE_ANALYSIS))
        _use(llm, api_key="")
        resp = await client.post("/po-agent", json={"action": "analyze-feedback", "content": "x"})
        assert resp.status_code == 500
        assert "not configured" in resp.json()["error"]
        assert llm.calls == []

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_reported(self, client):
        _use(FakeLLM(error=RuntimeError("connexion perdue")))
        resp = await client.post("/po-agent", json={"action": "analyze-feedback", "content": "x"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "connexion perdue"}

    @pytest.mark.asyncio
    async def test_unexpected_exception_without_message(self, client):
        _use(FakeLLM(error=RuntimeError()))
        resp = await client.post("/po-agent", json={"action": "analyze-feedback", "content": "x"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Erreur inconnue"}

    @pytest.mark.asyncio
    async def test_malformed_body(self, client):
        resp = await client.post(
            "/po-agent", content=b"{not json", headers={"content-type": "application/json"}
        )
        assert resp.status_code == 500
        assert resp.json()["error"]

    @pytest.mark.asyncio
    async def test_wrongly_typed_fields(self, client):
        resp = await client.post("/po-agent", json={"action": "analyze-feedback", "content": 42})
        assert resp.status_code == 500
        assert "content" in resp.json()["error"]

    @pytest.mark.asyncio
    async def test_feature_without_name(self, client):
        resp = await client.post(
            "/po-agent", json={"action": "prioritize-features", "features": [{"title": "x"}]}
        )
        assert resp.status_code == 500
        assert "name" in resp.json()["error"]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"json": {"action": "analyze-feedback", "content": 42}},
            {"content": b"{bad", "headers": {"content-type": "application/json"}},
            {"json": {"action": "nope"}},
        ],
    )
    @pytest.mark.asyncio
    async def test_missing_credential_is_checked_before_the_body(self, client, kwargs):
        llm = FakeLLM(response=tool_response("analyze_feedback", SAMPLE_ANALYSIS))
        _use(llm, api_key="")
        resp = await client.post("/po-agent", **kwargs)
        assert resp.status_code == 500
        assert resp.json() == {"error": "LLM API key is not configured"}
        assert llm.calls == []


class TestCORS:
    @pytest.mark.asyncio
    async def test_preflight_is_empty_success(self, client):
        resp = await client.options(
            "/po-agent",
            headers={"Origin": "https://app.test", "Access-Control-Request-Method": "POST"},
        )
        assert resp.status_code == 200
        assert resp.content == b""
        assert resp.headers["access-control-allow-origin"] == "*"
        assert "content-type" in resp.headers["access-control-allow-headers"]

    @pytest.mark.asyncio
    async def test_success_carries_cors_headers(self, client):
        resp = await client.post("/po-agent", json={"action": "analyze-feedback", "content": "x"})
        assert resp.headers["access-control-allow-origin"] == "*"

    @pytest.mark.asyncio
    async def test_errors_carry_cors_headers(self, client):
        resp = await client.post("/po-agent", json={"action": "nope"})
        assert resp.status_code == 400
        assert resp.headers["access-control-allow-origin"] == "*"


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_health_detail_reports_llm(self, client):
        resp = await client.get("/health/detail")
        assert resp.status_code == 200
        data = resp.json()
        assert data["backend"]["status"] == "ok"
        assert data["llm"]["status"] in ("configured", "no_api_key")
        assert "model" in data["llm"]

    @pytest.mark.asyncio
    async def test_health_llm_success(self, client, fake_llm):
        resp = await client.get("/health/llm")
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "message": "Connection successful", "model": "fake-model"}
        assert fake_llm.calls == [{"method": "test_connection"}]

    @pytest.mark.asyncio
    async def test_health_llm_failure(self, client):
        _use(FakeLLM(error=RuntimeError("gateway unreachable")))
        resp = await client.get("/health/llm")
        assert resp.json() == {"success": False, "message": "gateway unreachable"}

    @pytest.mark.asyncio
    async def test_health_llm_without_key(self, client):
        llm = FakeLLM()
        _use(llm, api_key="")
        resp = await client.get("/health/llm")
        assert resp.json()["success"] is False
        assert llm.calls == []
