from __future__ import annotations

from po_agent.models.relay import RelayRequest
from po_agent.services.agent.actions import Action
from po_agent.services.llm.prompts.feedback_analysis import build_feedback_message
from po_agent.services.llm.prompts.prioritization import build_prioritization_message
from po_agent.services.llm.prompts.user_stories import build_user_stories_message


def compose_user_message(action: Action, request: RelayRequest) -> str:
    """Build the user message for an action. Inputs are passed through unvalidated."""
    if action is Action.GENERATE_STORIES:
        return build_user_stories_message(request.content, request.persona)
    if action is Action.PRIORITIZE_FEATURES and request.features is not None:
        return build_prioritization_message(f.name for f in request.features)
    return build_feedback_message(request.content)
