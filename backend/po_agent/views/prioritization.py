from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import Any
from uuid import uuid4

from po_agent.models.feature import Feature
from po_agent.models.results import MoSCoW, PrioritizedFeature
from po_agent.views.base import RequestView


class Framework(str, enum.Enum):
    RICE = "rice"
    MOSCOW = "moscow"


MOSCOW_ORDER: tuple[MoSCoW, ...] = (MoSCoW.MUST, MoSCoW.SHOULD, MoSCoW.COULD, MoSCoW.WONT)

MOSCOW_LABELS: dict[MoSCoW, str] = {
    MoSCoW.MUST: "Must Have",
    MoSCoW.SHOULD: "Should Have",
    MoSCoW.COULD: "Could Have",
    MoSCoW.WONT: "Won't Have",
}


def default_features() -> list[Feature]:
    return [
        Feature(id="1", name="Export PDF", reach=500, impact=3, confidence=80, effort=3, moscow=MoSCoW.SHOULD),
        Feature(id="2", name="Intégration Slack", reach=300, impact=2, confidence=90, effort=5, moscow=MoSCoW.COULD),
        Feature(id="3", name="Sauvegarde auto", reach=800, impact=3, confidence=95, effort=2, moscow=MoSCoW.MUST),
        Feature(id="4", name="Filtres avancés", reach=200, impact=1, confidence=70, effort=4, moscow=MoSCoW.COULD),
        Feature(id="5", name="Mode hors-ligne", reach=100, impact=2, confidence=50, effort=8, moscow=MoSCoW.WONT),
    ]


def _clamped(values: dict[str, Any]) -> dict[str, Any]:
    if values.get("confidence") is not None:
        values["confidence"] = min(100, values["confidence"])
    if values.get("effort") is not None:
        values["effort"] = max(1, values["effort"])
    return values


def merge_prioritized(
    features: list[Feature], prioritized: Iterable[PrioritizedFeature]
) -> list[Feature]:
    """Apply AI scores to local features whose name matches case-insensitively.

    Returned entries matching no local feature are dropped silently; local
    features without a match are returned unchanged.
    """
    by_name: dict[str, PrioritizedFeature] = {}
    for p in prioritized:
        by_name.setdefault(p.name.lower(), p)

    merged = []
    for f in features:
        p = by_name.get(f.name.lower())
        if p is None:
            merged.append(f)
            continue
        update = _clamped({
            "reach": p.reach,
            "impact": p.impact,
            "confidence": p.confidence,
            "effort": p.effort,
            "moscow": p.moscow,
            "justification": p.justification,
        })
        merged.append(f.model_copy(update=update))
    return merged


class PrioritizationView(RequestView[list[PrioritizedFeature]]):
    status_messages = (
        "Estimation du reach…",
        "Évaluation de l'impact…",
        "Calcul des scores RICE…",
        "Classement MoSCoW…",
    )

    def __init__(self, client, features: list[Feature] | None = None, **kwargs) -> None:
        super().__init__(client, **kwargs)
        self.framework = Framework.RICE
        self.features: list[Feature] = default_features() if features is None else list(features)

    def has_input(self) -> bool:
        return bool(self.features)

    def add_feature(self, name: str) -> Feature | None:
        if not name.strip():
            return None
        feature = Feature(id=uuid4().hex, name=name)
        self.features.append(feature)
        return feature

    def remove_feature(self, feature_id: str) -> None:
        self.features = [f for f in self.features if f.id != feature_id]

    def update_feature(self, feature_id: str, **changes: Any) -> None:
        self.features = [
            Feature.model_validate(_clamped({**f.model_dump(), **changes}))
            if f.id == feature_id else f
            for f in self.features
        ]

    def ranked(self) -> list[Feature]:
        if self.framework is Framework.RICE:
            return sorted(self.features, key=lambda f: f.rice_score, reverse=True)
        return list(self.features)

    def by_moscow(self) -> dict[MoSCoW, list[Feature]]:
        return {cat: [f for f in self.features if f.moscow is cat] for cat in MOSCOW_ORDER}

    def apply_result(self, result: list[PrioritizedFeature]) -> None:
        super().apply_result(result)
        self.features = merge_prioritized(self.features, result)

    async def prioritize_with_ai(self) -> list[PrioritizedFeature] | None:
        names = [f.name for f in self.features]
        return await self.submit(lambda: self.client.prioritize_features(names))
