"""ask-ai package initialization."""

from importlib import metadata

from .config import Provider, ProviderConfig
from .conversation import ConversationRequest, ConversationTurn
from .dispatch import ask
from .errors import ApiError, AskAIError, ModelError, UnexpectedError

try:
    __version__ = metadata.version("ask-ai")
except metadata.PackageNotFoundError:  # pragma: no cover - best effort value during development
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "ApiError",
    "AskAIError",
    "ConversationRequest",
    "ConversationTurn",
    "ModelError",
    "Provider",
    "ProviderConfig",
    "UnexpectedError",
    "ask",
]
