from po_agent.models.feature import Feature
from po_agent.models.relay import FeatureName, RelayRequest
from po_agent.models.results import (
    Complexity,
    FeatureRequest,
    FeedbackAnalysis,
    MoSCoW,
    PrioritizedFeature,
    RequestPriority,
    Sentiment,
    UserStory,
)

__all__ = [
    "Complexity",
    "Feature",
    "FeatureName",
    "FeatureRequest",
    "FeedbackAnalysis",
    "MoSCoW",
    "PrioritizedFeature",
    "RelayRequest",
    "RequestPriority",
    "Sentiment",
    "UserStory",
]
