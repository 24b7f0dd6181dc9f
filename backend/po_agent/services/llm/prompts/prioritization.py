from __future__ import annotations

from collections.abc import Iterable

PRIORITIZATION_PROMPT = """Tu es un expert en priorisation produit. On te donne une liste de features avec leurs descriptions.

Tu DOIS utiliser la fonction prioritize_features pour retourner ta priorisation structurée.

Pour chaque feature, propose :
- Un score RICE réaliste (Reach 0-1000, Impact 1-3, Confidence 0-100, Effort 1-10)
- Une catégorie MoSCoW (must, should, could, wont)
- Une justification courte de ta priorisation

Base tes estimations sur des critères objectifs : valeur utilisateur, faisabilité technique, impact business. Utilise le français."""

PRIORITIZATION_TOOL: dict = {
    "type": "function",
    "function": {
        "name": "prioritize_features",
        "description": "Return prioritized features with RICE scores and MoSCoW categories",
        "parameters": {
            "type": "object",
            "properties": {
                "features": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string"},
                            "reach": {"type": "number"},
                            "impact": {"type": "number"},
                            "confidence": {"type": "number"},
                            "effort": {"type": "number"},
                            "moscow": {"type": "string", "enum": ["must", "should", "could", "wont"]},
                            "justification": {"type": "string"},
                        },
                        "required": [
                            "name",
                            "reach",
                            "impact",
                            "confidence",
                            "effort",
                            "moscow",
                            "justification",
                        ],
                        "additionalProperties": False,
                    },
                },
            },
            "required": ["features"],
            "additionalProperties": False,
        },
    },
}


def build_prioritization_message(names: Iterable[str]) -> str:
    """Numbered list of feature names; no other attribute reaches the model."""
    lines = [f"{i}. {name}" for i, name in enumerate(names, start=1)]
    return "Voici les features à prioriser :\n" + "\n".join(lines)
