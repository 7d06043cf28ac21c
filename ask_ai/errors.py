"""Error types surfaced by ask-ai."""

from __future__ import annotations


class AskAIError(RuntimeError):
    """Base class for every failure raised to callers."""


class ApiError(AskAIError):
    """Raised when credentials, transport or the HTTP status fail."""

    def __init__(self, provider_name: str, failure: str) -> None:
        self.provider_name = provider_name
        self.failure = failure
        super().__init__(f"Error loading API {provider_name}. Error: {failure}")


class ModelError(AskAIError):
    """Raised when a provider answered but the answer could not be read."""

    def __init__(self, model_name: str, failure: str) -> None:
        self.model_name = model_name
        self.failure = failure
        super().__init__(f"Error requesting answer from {model_name}. Error: {failure}")


class UnexpectedError(AskAIError):
    """Catch-all for conditions that fit no other category."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"Unexpected or unknown error: {message}")


class ConfigError(AskAIError):
    """Raised when configuration could not be loaded or parsed."""


class SecretNotFoundError(LookupError):
    """Raised when a required secret is not available."""
