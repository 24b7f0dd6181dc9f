from __future__ import annotations

USER_STORIES_PROMPT = """Tu es un Product Owner senior expert en écriture de user stories. Tu génères des user stories professionnelles au format standard.

Tu DOIS utiliser la fonction generate_user_stories pour retourner les stories structurées.

Pour chaque story :
- Définis un rôle/persona pertinent
- Écris une action claire et spécifique
- Indique le bénéfice business/utilisateur
- Propose 4-6 critères d'acceptation testables et précis
- Estime la complexité (XS, S, M, L, XL) avec justification

Génère 2 à 4 user stories selon la complexité de la feature décrite. Utilise le français."""

USER_STORIES_TOOL: dict = {
    "type": "function",
    "function": {
        "name": "generate_user_stories",
        "description": "Return generated user stories",
        "parameters": {
            "type": "object",
            "properties": {
                "stories": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "role": {"type": "string"},
                            "action": {"type": "string"},
                            "benefit": {"type": "string"},
                            "acceptanceCriteria": {"type": "array", "items": {"type": "string"}},
                            "complexity": {"type": "string", "enum": ["XS", "S", "M", "L", "XL"]},
                            "complexityReason": {"type": "string"},
                        },
                        "required": [
                            "role",
                            "action",
                            "benefit",
                            "acceptanceCriteria",
                            "complexity",
                            "complexityReason",
                        ],
                        "additionalProperties": False,
                    },
                },
            },
            "required": ["stories"],
            "additionalProperties": False,
        },
    },
}

USER_STORIES_MESSAGE = """Persona principal : {persona}

Feature à découper en user stories :
{content}"""


def build_user_stories_message(content: str | None, persona: str | None) -> str:
    """Prefix the feature description with the persona, when one is given."""
    content = content or ""
    if not persona:
        return content
    return (
        USER_STORIES_MESSAGE
        .replace("{persona}", persona)
        .replace("{content}", content)
    )
