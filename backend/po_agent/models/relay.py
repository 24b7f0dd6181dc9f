from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class FeatureName(BaseModel):
    name: str


class RelayRequest(BaseModel):
    """Body of a relay call. ``action`` is validated by the dispatcher, not here."""

    action: str | None = None
    content: str | None = None
    persona: str | None = None
    features: list[FeatureName] | None = None


class RelayResult(BaseModel):
    result: Any


class RelayErrorBody(BaseModel):
    error: str
