"""Anthropic provider adapter."""

from __future__ import annotations

from typing import Any

from ..config import ProviderConfig
from ..conversation import ConversationRequest, build_messages
from ..errors import ApiError, ModelError, SecretNotFoundError
from ..secrets import EnvSecretProvider, SecretProvider, lookup_endpoint, require
from . import ProviderAdapter, post_json

ANTHROPIC_ENDPOINT = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
API_KEY_VAR = "ANTHROPIC_API_KEY"
API_URL_VAR = "ANTHROPIC_API_URL"
DEFAULT_MAX_TOKENS = 1024


class AnthropicAdapter(ProviderAdapter):
    """Interact with the Anthropic Messages API."""

    def __init__(self, secrets: SecretProvider | None = None) -> None:
        self.secrets = secrets or EnvSecretProvider()

    def build_payload(self, request: ConversationRequest, config: ProviderConfig) -> dict[str, Any]:
        # The system prompt travels in its own top-level field.
        messages = [
            {"role": message.role, "content": [{"type": "text", "text": message.content}]}
            for message in build_messages(request, include_system=False)
        ]
        max_tokens = config.max_tokens if config.max_tokens is not None else DEFAULT_MAX_TOKENS
        return {
            "model": config.model,
            "max_tokens": max_tokens,
            "messages": messages,
            "system": request.system_prompt or "",
        }

    def send(self, request: ConversationRequest, config: ProviderConfig) -> str:
        try:
            api_key = require(self.secrets, API_KEY_VAR)
        except SecretNotFoundError as exc:
            raise ApiError(
                config.provider.display_name, f"Missing or invalid {API_KEY_VAR}: {exc}"
            ) from exc

        headers = {
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }
        endpoint = lookup_endpoint(self.secrets, API_URL_VAR, ANTHROPIC_ENDPOINT)
        data = post_json(endpoint, headers, self.build_payload(request, config), config)

        try:
            answer = data["content"][0]["text"]
        except (KeyError, IndexError, TypeError):
            answer = None
        if not isinstance(answer, str):
            raise ModelError(config.model, "Failed to extract content from Anthropic response")
        return answer
