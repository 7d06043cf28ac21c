"""Logging setup for ask-ai.

Answers are written to stdout by the CLI, so every diagnostic goes to
stderr. Records pass through ``RedactSecretsFilter`` so an API key that ends
up in a message (an echoed header, a URL with a key parameter) is masked.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional

from .secrets import EnvSecretProvider, SecretProvider

ROOT_LOGGER = "ask_ai"
SECRET_NAMES = ("OPENAI_API_KEY", "ANTHROPIC_API_KEY")
MASK = "***"

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

# -v lowers the threshold to INFO, -vv (or more) to DEBUG.
_VERBOSITY = (None, logging.INFO, logging.DEBUG)

_DEBUG_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s"
_PLAIN_FORMAT = "%(levelname)-8s %(message)s"


class RedactSecretsFilter(logging.Filter):
    """Replace known credential values in a record's rendered message."""

    def __init__(self, secrets: SecretProvider | None = None, names: Iterable[str] = SECRET_NAMES) -> None:
        super().__init__()
        self.secrets = secrets or EnvSecretProvider()
        self.names = tuple(names)

    def _values(self) -> list[str]:
        values = (self.secrets.get(name) for name in self.names)
        return [value for value in values if value]

    def filter(self, record: logging.LogRecord) -> bool:
        values = self._values()
        if not values:
            return True
        message = record.getMessage()
        redacted = message
        for value in values:
            redacted = redacted.replace(value, MASK)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def resolve_level(level: str = "INFO", verbose: int = 0, quiet: bool = False) -> int:
    """Combine the configured level with the CLI's -v/-q flags."""
    if quiet:
        return logging.ERROR
    if verbose > 0:
        return _VERBOSITY[min(verbose, len(_VERBOSITY) - 1)]
    return LEVELS.get(level.upper(), logging.INFO)


def setup_logging(
    level: str = "INFO",
    verbose: int = 0,
    quiet: bool = False,
    secrets: SecretProvider | None = None,
) -> logging.Logger:
    """
    Configure the ``ask_ai`` logger.

    Args:
        level: Configured log level (DEBUG, INFO, WARNING, ERROR)
        verbose: Count of -v flags
        quiet: Only show errors
        secrets: Source of the credentials to mask (environment by default)

    Returns:
        Configured logger instance
    """
    effective_level = resolve_level(level, verbose, quiet)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(effective_level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(effective_level)
    handler.addFilter(RedactSecretsFilter(secrets))
    handler.setFormatter(
        logging.Formatter(_DEBUG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        if effective_level <= logging.DEBUG
        else logging.Formatter(_PLAIN_FORMAT)
    )
    logger.addHandler(handler)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``ask_ai`` or one of its children."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}" if name else ROOT_LOGGER)
