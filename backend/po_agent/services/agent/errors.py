from __future__ import annotations


class RelayError(Exception):
    """A failure the relay reports to its caller as ``{"error": message}``."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class UnknownActionError(RelayError):
    status_code = 400

    def __init__(self, action: str | None) -> None:
        super().__init__(f"Unknown action: {action}")
        self.action = action


class MissingCredentialError(RelayError):
    def __init__(self) -> None:
        super().__init__("LLM API key is not configured")


class UpstreamRateLimitError(RelayError):
    status_code = 429

    def __init__(self) -> None:
        super().__init__("Trop de requêtes. Réessayez dans quelques instants.")


class UpstreamBillingError(RelayError):
    status_code = 402

    def __init__(self) -> None:
        super().__init__("Crédits IA épuisés. Ajoutez des crédits dans les paramètres.")


class UpstreamServiceError(RelayError):
    def __init__(self) -> None:
        super().__init__("Erreur du service IA")


class NoStructuredResultError(RelayError):
    def __init__(self) -> None:
        super().__init__("L'IA n'a pas retourné de résultat structuré")
