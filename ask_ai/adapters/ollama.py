"""Ollama provider adapter."""

from __future__ import annotations

import ollama

from ..config import ProviderConfig
from ..conversation import ConversationRequest, build_messages
from ..errors import ModelError
from ..logging import get_logger
from . import ProviderAdapter

DEFAULT_HOST = "http://localhost:11434"

logger = get_logger("adapters.ollama")


class OllamaAdapter(ProviderAdapter):
    """Interact with a local Ollama model server through the ollama client."""

    def __init__(self, host: str = DEFAULT_HOST) -> None:
        self.host = host.rstrip("/")

    def build_messages(self, request: ConversationRequest) -> list[ollama.Message]:
        return [
            ollama.Message(role=message.role, content=message.content, images=None, tool_calls=None)
            for message in build_messages(request)
        ]

    def send(self, request: ConversationRequest, config: ProviderConfig) -> str:
        messages = self.build_messages(request)
        logger.debug("Ollama chat at %s (model=%s, messages=%d)", self.host, config.model, len(messages))
        try:
            client = ollama.Client(host=self.host, timeout=config.timeout)
            response = client.chat(model=config.model, messages=messages)
            return response.message.content or ""
        except Exception as exc:
            raise ModelError(config.model, str(exc)) from exc
