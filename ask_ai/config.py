"""Configuration handling for ask-ai."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .util import deep_merge, parse_timeout

CONFIG_FILENAME = ".askai.yml"

DEFAULT_CONFIG: dict[str, Any] = {
    "provider": "ollama",
    "model": "llama3",
    "max_tokens": None,
    "timeout": None,
    "log_level": "INFO",
}


class Provider(str, Enum):
    """LLM providers supported by ask-ai."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    OLLAMA = "ollama"

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "str | Provider") -> "Provider":
        """Resolve a provider from its case-insensitive name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(item.value for item in cls)
            raise ConfigError(f"Unsupported provider: {value!r} (expected one of {choices})") from exc


def _parse_max_tokens(value: Any) -> int | None:
    """Accept whole numbers only; ``1.9`` or ``true`` are configuration mistakes."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigError(f"max_tokens must be an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ConfigError(f"max_tokens must be an integer, got {value!r}")
        parsed = int(value)
    else:
        try:
            parsed = int(str(value).strip())
        except ValueError as exc:
            raise ConfigError(f"max_tokens must be an integer, got {value!r}") from exc
    if parsed < 0:
        raise ConfigError("max_tokens must not be negative.")
    return parsed


@dataclass(frozen=True)
class ProviderConfig:
    """Which provider and model to query, and how."""

    provider: Provider
    model: str
    max_tokens: int | None = None
    timeout: float | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProviderConfig":
        max_tokens = _parse_max_tokens(data.get("max_tokens"))
        try:
            timeout = parse_timeout(data.get("timeout"))
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
        model = data.get("model")
        if not model:
            raise ConfigError("A model name is required.")
        return cls(
            provider=Provider.parse(data.get("provider", DEFAULT_CONFIG["provider"])),
            model=str(model),
            max_tokens=max_tokens,
            timeout=timeout,
        )


@dataclass(frozen=True)
class AppConfig:
    provider: str = DEFAULT_CONFIG["provider"]
    model: str = DEFAULT_CONFIG["model"]
    max_tokens: int | None = DEFAULT_CONFIG["max_tokens"]
    timeout: float | None = DEFAULT_CONFIG["timeout"]
    log_level: str = DEFAULT_CONFIG["log_level"]
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppConfig":
        """Construct from a dictionary, applying defaults for missing keys."""
        merged = deep_merge(DEFAULT_CONFIG, data)
        provider_config = ProviderConfig.from_dict(merged)
        return cls(
            provider=provider_config.provider.value,
            model=provider_config.model,
            max_tokens=provider_config.max_tokens,
            timeout=provider_config.timeout,
            log_level=str(merged.get("log_level") or "INFO"),
            raw=merged,
        )

    @property
    def provider_config(self) -> ProviderConfig:
        """Return the settings handed to the adapters."""
        return ProviderConfig(
            provider=Provider.parse(self.provider),
            model=self.model,
            max_tokens=self.max_tokens,
            timeout=self.timeout,
        )


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a file, applying defaults when missing."""
    config_path = path or Path(CONFIG_FILENAME)
    if not config_path.exists():
        return AppConfig()

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}") from exc

    if not isinstance(payload, dict):
        raise ConfigError("Configuration root must be a mapping.")

    return AppConfig.from_dict(payload)


def save_config(config: AppConfig, path: Path | None = None) -> None:
    """Write configuration back to disk."""
    config_path = path or Path(CONFIG_FILENAME)
    with config_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(config.raw or DEFAULT_CONFIG, handle, sort_keys=False)
