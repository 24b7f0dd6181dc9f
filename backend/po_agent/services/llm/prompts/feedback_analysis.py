from __future__ import annotations

FEEDBACK_ANALYSIS_PROMPT = """Tu es un expert Product Owner / UX Researcher. Tu analyses des retours clients (emails, tickets, commentaires).

Tu DOIS utiliser la fonction analyze_feedback pour retourner ton analyse structurée. Analyse en profondeur :
- Le sentiment global (positive, negative, ou mixed)
- Un résumé clair et actionnable de 2-3 phrases
- Les patterns et tendances récurrents
- Les demandes de features explicites ou implicites avec priorité et nombre de mentions estimé
- Les points de douleur majeurs

Sois précis, objectif et orienté action. Utilise le français."""

FEEDBACK_ANALYSIS_TOOL: dict = {
    "type": "function",
    "function": {
        "name": "analyze_feedback",
        "description": "Return structured feedback analysis",
        "parameters": {
            "type": "object",
            "properties": {
                "summary": {"type": "string", "description": "Résumé actionnable de 2-3 phrases"},
                "sentiment": {"type": "string", "enum": ["positive", "negative", "mixed"]},
                "patterns": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Patterns et tendances identifiés",
                },
                "featureRequests": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "title": {"type": "string"},
                            "priority": {
                                "type": "string",
                                "enum": ["Critique", "Haute", "Moyenne", "Basse"],
                            },
                            "mentions": {"type": "number"},
                        },
                        "required": ["title", "priority", "mentions"],
                        "additionalProperties": False,
                    },
                },
                "painPoints": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Points de douleur identifiés",
                },
            },
            "required": ["summary", "sentiment", "patterns", "featureRequests", "painPoints"],
            "additionalProperties": False,
        },
    },
}


def build_feedback_message(content: str | None) -> str:
    return content or ""
