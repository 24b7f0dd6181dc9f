from __future__ import annotations

from po_agent.models.results import UserStory
from po_agent.views.base import RequestView

PERSONAS: dict[str, str] = {
    "utilisateur": "Utilisateur",
    "admin": "Administrateur",
    "chef_projet": "Chef de projet",
    "developpeur": "Développeur",
}

DEFAULT_PERSONA = "utilisateur"


def story_markdown(story: UserStory) -> str:
    """Markdown rendering of a story, as copied to the clipboard."""
    criteria = "\n".join(f"- {c}" for c in story.acceptance_criteria)
    return (
        f"**En tant que** {story.role}\n"
        f"**Je veux** {story.action}\n"
        f"**Afin de** {story.benefit}\n\n"
        f"**Critères d'acceptation :**\n{criteria}\n\n"
        f"**Complexité :** {story.complexity.value} — {story.complexity_reason}"
    )


class UserStoriesView(RequestView[list[UserStory]]):
    status_messages = (
        "Génération en cours…",
        "Découpage de la feature…",
        "Rédaction des critères d'acceptation…",
        "Estimation de la complexité…",
    )

    def __init__(self, client, **kwargs) -> None:
        super().__init__(client, **kwargs)
        self.feature_description = ""
        self.persona = DEFAULT_PERSONA
        self.expanded_id: str | None = None

    @property
    def stories(self) -> list[UserStory]:
        return self.result or []

    def has_input(self) -> bool:
        return bool(self.feature_description.strip())

    def clear_result(self) -> None:
        super().clear_result()
        self.expanded_id = None

    def apply_result(self, result: list[UserStory]) -> None:
        super().apply_result(result)
        self.expanded_id = result[0].id if result else None

    def toggle(self, story_id: str) -> None:
        self.expanded_id = None if self.expanded_id == story_id else story_id

    def copy_text(self, story_id: str) -> str:
        for story in self.stories:
            if story.id == story_id:
                return story_markdown(story)
        raise KeyError(story_id)

    async def generate(self) -> list[UserStory] | None:
        return await self.submit(
            lambda: self.client.generate_stories(self.feature_description, self.persona)
        )
