from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "PO Agent"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["*"]

    # LLM gateway (OpenAI-compatible chat completions)
    llm_api_key: str = ""
    llm_base_url: str = "https://ai.gateway.lovable.dev/v1"
    llm_model: str = "google/gemini-3-flash-preview"
    llm_timeout: float | None = None  # None = transport default

    model_config = {"env_prefix": "PO_AGENT_"}


settings = Settings()
