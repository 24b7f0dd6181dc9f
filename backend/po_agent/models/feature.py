from __future__ import annotations

from pydantic import BaseModel

from po_agent.models.results import MoSCoW


class Feature(BaseModel):
    """A locally held, user-editable feature in the prioritization view."""

    id: str
    name: str
    reach: float = 100
    impact: float = 1
    confidence: float = 50
    effort: float = 3
    moscow: MoSCoW = MoSCoW.COULD
    justification: str | None = None

    @property
    def rice_score(self) -> float:
        """(Reach x Impact x Confidence%) / Effort, computed from current values."""
        if not self.effort:
            return 0.0
        return self.reach * self.impact * (self.confidence / 100) / self.effort
