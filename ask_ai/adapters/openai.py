"""OpenAI provider adapter."""

from __future__ import annotations

from typing import Any

from ..config import ProviderConfig
from ..conversation import ConversationRequest, build_messages
from ..errors import ApiError, ModelError, SecretNotFoundError
from ..secrets import EnvSecretProvider, SecretProvider, lookup_endpoint, require
from . import ProviderAdapter, post_json

OPENAI_ENDPOINT = "https://api.openai.com/v1/chat/completions"
API_KEY_VAR = "OPENAI_API_KEY"
API_URL_VAR = "OPENAI_API_URL"


class OpenAIAdapter(ProviderAdapter):
    """Interact with the OpenAI Chat Completions API."""

    def __init__(self, secrets: SecretProvider | None = None) -> None:
        self.secrets = secrets or EnvSecretProvider()

    def build_payload(self, request: ConversationRequest, config: ProviderConfig) -> dict[str, Any]:
        return {
            "model": config.model,
            "messages": [message.to_dict() for message in build_messages(request)],
        }

    def send(self, request: ConversationRequest, config: ProviderConfig) -> str:
        try:
            api_key = require(self.secrets, API_KEY_VAR)
        except SecretNotFoundError as exc:
            raise ApiError(
                config.provider.display_name, f"Missing or invalid {API_KEY_VAR}: {exc}"
            ) from exc

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        }
        endpoint = lookup_endpoint(self.secrets, API_URL_VAR, OPENAI_ENDPOINT)
        data = post_json(endpoint, headers, self.build_payload(request, config), config)

        try:
            answer = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            answer = None
        if not isinstance(answer, str):
            raise ModelError(config.model, "Failed to extract content from OpenAI response")
        return answer
