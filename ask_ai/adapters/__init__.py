"""Model provider adapters for ask-ai."""

from __future__ import annotations

from typing import Any, Protocol

import requests

from ..config import ProviderConfig
from ..conversation import ConversationRequest
from ..errors import ApiError, ModelError
from ..logging import get_logger

logger = get_logger("adapters")


class ProviderAdapter(Protocol):
    """Common protocol for provider adapters."""

    def send(self, request: ConversationRequest, config: ProviderConfig) -> str:
        ...


def post_json(
    url: str,
    headers: dict[str, str],
    payload: dict[str, Any],
    config: ProviderConfig,
) -> Any:
    """POST ``payload`` and return the decoded JSON body of a 2xx response."""
    provider_name = config.provider.display_name
    logger.debug("POST %s (provider=%s, model=%s)", url, provider_name, config.model)
    try:
        response = requests.post(url, headers=headers, json=payload, timeout=config.timeout)
    except requests.RequestException as exc:
        raise ApiError(provider_name, f"Request error: {exc}") from exc

    logger.debug("%s responded with status %s", provider_name, response.status_code)
    if not 200 <= response.status_code < 300:
        reason = f" {response.reason}" if response.reason else ""
        raise ApiError(
            provider_name,
            f"Status {response.status_code}{reason}: {response.text}",
        )

    try:
        return response.json()
    except ValueError as exc:
        raise ModelError(config.model, f"Failed to parse JSON response: {exc}") from exc
