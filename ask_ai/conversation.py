"""Provider-agnostic conversation model and message assembly."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

SYSTEM = "system"
USER = "user"
ASSISTANT = "assistant"

# Sent instead of an empty final prompt.
PROMPT_PLACEHOLDER = "."


@dataclass(frozen=True)
class ConversationTurn:
    """One completed exchange. An empty half is left out of the request."""

    user_text: str = ""
    assistant_text: str = ""


@dataclass
class ConversationRequest:
    new_prompt: str
    system_prompt: Optional[str] = None
    history: Optional[Sequence[ConversationTurn]] = None

    @classmethod
    def from_history(
        cls,
        new_prompt: str,
        turns: Iterable[dict],
        system_prompt: Optional[str] = None,
    ) -> "ConversationRequest":
        """Build a request from ``{"user": ..., "assistant": ...}`` mappings."""
        history = [
            ConversationTurn(
                user_text=str(turn.get("user") or ""),
                assistant_text=str(turn.get("assistant") or ""),
            )
            for turn in turns
        ]
        return cls(new_prompt=new_prompt, system_prompt=system_prompt, history=history)


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


def build_messages(request: ConversationRequest, include_system: bool = True) -> List[ChatMessage]:
    """
    Assemble the ordered, role-tagged entries for a request.

    Order is always: system entry (when requested), each history turn with
    its user text before its assistant text, then the new prompt as a user
    entry. Empty turn halves are skipped and an empty new prompt is replaced
    by ``PROMPT_PLACEHOLDER``.

    Args:
        request: Conversation to render
        include_system: Emit the system entry first (empty when no
            system prompt is set)

    Returns:
        List of ChatMessage entries
    """
    messages: List[ChatMessage] = []
    if include_system:
        messages.append(ChatMessage(SYSTEM, request.system_prompt or ""))

    for turn in request.history or ():
        if turn.user_text:
            messages.append(ChatMessage(USER, turn.user_text))
        if turn.assistant_text:
            messages.append(ChatMessage(ASSISTANT, turn.assistant_text))

    messages.append(ChatMessage(USER, request.new_prompt or PROMPT_PLACEHOLDER))
    return messages
