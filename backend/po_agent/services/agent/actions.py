from __future__ import annotations

import enum
from dataclasses import dataclass, field

from po_agent.services.agent.errors import UnknownActionError
from po_agent.services.llm.prompts.feedback_analysis import (
    FEEDBACK_ANALYSIS_PROMPT,
    FEEDBACK_ANALYSIS_TOOL,
)
from po_agent.services.llm.prompts.prioritization import PRIORITIZATION_PROMPT, PRIORITIZATION_TOOL
from po_agent.services.llm.prompts.user_stories import USER_STORIES_PROMPT, USER_STORIES_TOOL


class Action(str, enum.Enum):
    ANALYZE_FEEDBACK = "analyze-feedback"
    GENERATE_STORIES = "generate-stories"
    PRIORITIZE_FEATURES = "prioritize-features"


@dataclass(frozen=True)
class ActionSpec:
    """System prompt and the single tool the model is forced to call."""

    system_prompt: str
    tools: list[dict] = field(default_factory=list)

    @property
    def tool_name(self) -> str:
        return self.tools[0]["function"]["name"]

    @property
    def tool_choice(self) -> dict:
        return {"type": "function", "function": {"name": self.tool_name}}


_SPECS: dict[Action, ActionSpec] = {
    Action.ANALYZE_FEEDBACK: ActionSpec(FEEDBACK_ANALYSIS_PROMPT, [FEEDBACK_ANALYSIS_TOOL]),
    Action.GENERATE_STORIES: ActionSpec(USER_STORIES_PROMPT, [USER_STORIES_TOOL]),
    Action.PRIORITIZE_FEATURES: ActionSpec(PRIORITIZATION_PROMPT, [PRIORITIZATION_TOOL]),
}


def get_action_spec(action: Action) -> ActionSpec:
    return _SPECS[action]


def resolve_action(name: str | None) -> Action:
    """Validate an action name coming off the wire."""
    try:
        return Action(name)
    except ValueError:
        raise UnknownActionError(name) from None
