"""Factory helpers for loading LLM adapters."""

from __future__ import annotations

from ..config import Provider
from ..errors import UnexpectedError
from ..secrets import SecretProvider
from . import ProviderAdapter
from .anthropic import AnthropicAdapter
from .ollama import OllamaAdapter
from .openai import OpenAIAdapter


def build_adapter(provider: Provider, secrets: SecretProvider | None = None) -> ProviderAdapter:
    """Instantiate the adapter for ``provider``."""
    if provider is Provider.OPENAI:
        return OpenAIAdapter(secrets=secrets)
    if provider is Provider.ANTHROPIC:
        return AnthropicAdapter(secrets=secrets)
    if provider is Provider.OLLAMA:
        return OllamaAdapter()
    raise UnexpectedError(f"Unsupported provider: {provider!r}")
