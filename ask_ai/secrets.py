"""Credential and endpoint lookup used by the provider adapters."""

from __future__ import annotations

import os
from typing import Mapping, Protocol

from .errors import SecretNotFoundError


class SecretProvider(Protocol):
    """Source of named secrets such as API keys and endpoint overrides.

    ``get`` returns ``None`` only when the name is absent; a set-but-empty
    value comes back as ``""``.
    """

    def get(self, name: str) -> str | None:
        ...


class EnvSecretProvider:
    """Read secrets from the process environment (or a supplied mapping)."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def get(self, name: str) -> str | None:
        source = os.environ if self._environ is None else self._environ
        return source.get(name)


class StaticSecretProvider:
    """Serve secrets from a fixed mapping."""

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values = dict(values or {})

    def get(self, name: str) -> str | None:
        return self._values.get(name)


def require(secrets: SecretProvider, name: str) -> str:
    """Return the named secret or raise ``SecretNotFoundError``.

    An empty credential counts as missing.
    """
    value = secrets.get(name)
    if value is None:
        raise SecretNotFoundError(f"{name} is not set")
    if not value:
        raise SecretNotFoundError(f"{name} is empty")
    return value


def lookup_endpoint(secrets: SecretProvider, name: str, default: str) -> str:
    """Return the endpoint override ``name`` if it is set at all, else ``default``."""
    override = secrets.get(name)
    return default if override is None else override
