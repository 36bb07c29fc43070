"""Sanitized request contracts, built fresh for every request."""

from dataclasses import dataclass, field
from typing import Literal

Role = Literal["user", "assistant", "system"]
VALID_ROLES: frozenset[str] = frozenset({"user", "assistant", "system"})


@dataclass(frozen=True)
class ConversationMessage:
    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class SanitizedRequest:
    """
    A request body after validation.

    Attributes:
        message: Non-empty, control-character free, at most 5000 chars
        history: At most the 20 most recent valid turns, each capped
        user_context: Optional verified profile text (capped at 10000)
        preferences_context: Optional stored-preferences text (capped at 5000)
    """

    message: str
    history: list[ConversationMessage] = field(default_factory=list)
    user_context: str | None = None
    preferences_context: str | None = None
