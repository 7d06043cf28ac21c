"""Single entry point that routes a conversation to its provider."""

from __future__ import annotations

from .adapters.factory import build_adapter
from .config import ProviderConfig
from .conversation import ConversationRequest
from .secrets import SecretProvider


def ask(config: ProviderConfig, request: ConversationRequest, secrets: SecretProvider | None = None) -> str:
    """Send ``request`` to the provider named by ``config`` and return its answer.

    Raises ``ApiError`` or ``ModelError`` unchanged from the adapter.
    """
    adapter = build_adapter(config.provider, secrets=secrets)
    return adapter.send(request, config)
