from __future__ import annotations

from po_agent.models.results import FeedbackAnalysis, Sentiment
from po_agent.views.base import RequestView

SAMPLE_FEEDBACKS: tuple[str, ...] = (
    "Le tableau de bord est super mais il manque un export PDF. Aussi, la recherche est trop "
    "lente quand on a beaucoup de projets. J'adorerais avoir des filtres avancés.",
    "Nous avons besoin d'une intégration Slack pour les notifications. L'équipe perd du temps "
    "à checker l'app. Par contre, le nouveau design est top !",
    "Bug critique : les données se perdent quand on rafraîchit la page en plein édition. "
    "Plusieurs membres de l'équipe ont remonté ce problème.",
)

SENTIMENT_LABELS: dict[Sentiment, str] = {
    Sentiment.POSITIVE: "Positif",
    Sentiment.NEGATIVE: "Négatif",
    Sentiment.MIXED: "Mixte",
}


class FeedbackAnalysisView(RequestView[FeedbackAnalysis]):
    status_messages = (
        "Lecture des retours clients…",
        "Détection du sentiment…",
        "Identification des patterns…",
        "Extraction des demandes de features…",
    )

    def __init__(self, client, **kwargs) -> None:
        super().__init__(client, **kwargs)
        self.feedback = ""

    def has_input(self) -> bool:
        return bool(self.feedback.strip())

    def add_sample(self, index: int) -> None:
        sample = SAMPLE_FEEDBACKS[index]
        self.feedback = (self.feedback + "\n\n" if self.feedback else "") + sample

    @property
    def sentiment_label(self) -> str | None:
        if self.result is None:
            return None
        return SENTIMENT_LABELS[self.result.sentiment]

    async def analyze(self) -> FeedbackAnalysis | None:
        return await self.submit(lambda: self.client.analyze_feedback(self.feedback))
