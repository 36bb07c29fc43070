"""Shared input sanitization and validation for guide requests."""

import re
from collections.abc import Mapping
from typing import Any

from models.conversation import VALID_ROLES, ConversationMessage, SanitizedRequest
from models.errors import InvalidInputError

MAX_MESSAGE_LENGTH = 5000
MAX_CONVERSATION_HISTORY = 20
MAX_USER_CONTEXT_LENGTH = 10000
MAX_PREFERENCES_CONTEXT_LENGTH = 5000
SENSITIVE_HEADERS = {"authorization", "apikey", "x-api-key"}

# Control characters other than tab, newline and CR; lone surrogates have no UTF-8 encoding
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F\ud800-\udfff]")


def sanitize_input(value: Any) -> str:
    """Strip unsafe characters and surrounding whitespace; non-strings become ''."""
    if not isinstance(value, str):
        return ""
    return _CONTROL_CHARS.sub("", value).strip()


def validate_message(message: Any) -> str:
    """
    Validate and sanitize the user's message.

    Raises:
        InvalidInputError: not a string, empty after sanitizing, or too long
    """
    if not isinstance(message, str):
        raise InvalidInputError("Message must be a string")

    sanitized = sanitize_input(message)

    if not sanitized:
        raise InvalidInputError("Message cannot be empty")

    if len(sanitized) > MAX_MESSAGE_LENGTH:
        raise InvalidInputError(f"Message exceeds maximum length of {MAX_MESSAGE_LENGTH} characters")

    return sanitized


def validate_conversation_history(history: Any) -> list[ConversationMessage]:
    """
    Keep the most recent valid turns of a caller-supplied history.

    The window is taken before filtering, so invalid entries inside the last
    20 shrink the result rather than pulling older turns back in.
    """
    if not isinstance(history, list):
        return []

    validated = []
    for item in history[-MAX_CONVERSATION_HISTORY:]:
        if not isinstance(item, Mapping):
            continue
        role = item.get("role")
        content = item.get("content")
        if not isinstance(role, str) or role not in VALID_ROLES or not isinstance(content, str):
            continue
        validated.append(
            ConversationMessage(role=role, content=sanitize_input(content)[:MAX_MESSAGE_LENGTH])
        )
    return validated


def sanitize_optional_context(value: Any, limit: int) -> str | None:
    if not isinstance(value, str):
        return None
    return sanitize_input(value)[:limit]


def validate_request(body: Any) -> SanitizedRequest:
    """
    Validate a decoded JSON request body.

    Raises:
        InvalidInputError: the body is not an object or the message is unusable
    """
    if not isinstance(body, Mapping):
        raise InvalidInputError("Invalid JSON request body")

    return SanitizedRequest(
        message=validate_message(body.get("message")),
        history=validate_conversation_history(body.get("conversationHistory")),
        user_context=sanitize_optional_context(body.get("userContext"), MAX_USER_CONTEXT_LENGTH),
        preferences_context=sanitize_optional_context(
            body.get("preferencesContext"), MAX_PREFERENCES_CONTEXT_LENGTH
        ),
    )


def redact_sensitive_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """
    Redact auth-bearing headers before logging.
    """
    redacted: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS and value:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted
