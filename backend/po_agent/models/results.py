from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field


class Sentiment(str, enum.Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    MIXED = "mixed"


class RequestPriority(str, enum.Enum):
    CRITIQUE = "Critique"
    HAUTE = "Haute"
    MOYENNE = "Moyenne"
    BASSE = "Basse"


class Complexity(str, enum.Enum):
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"


class MoSCoW(str, enum.Enum):
    MUST = "must"
    SHOULD = "should"
    COULD = "could"
    WONT = "wont"


class _Received(BaseModel):
    """Base for payloads produced by the model: immutable once received."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class FeatureRequest(_Received):
    title: str
    priority: RequestPriority
    # Untrusted count; the model may return any number
    mentions: float


class FeedbackAnalysis(_Received):
    summary: str
    sentiment: Sentiment
    patterns: list[str] = Field(default_factory=list)
    feature_requests: list[FeatureRequest] = Field(default_factory=list, alias="featureRequests")
    pain_points: list[str] = Field(default_factory=list, alias="painPoints")


class UserStory(_Received):
    id: str
    role: str
    action: str
    benefit: str
    acceptance_criteria: list[str] = Field(default_factory=list, alias="acceptanceCriteria")
    complexity: Complexity
    complexity_reason: str = Field(alias="complexityReason")


class PrioritizedFeature(_Received):
    name: str
    reach: float
    impact: float
    confidence: float
    effort: float
    moscow: MoSCoW
    justification: str
