"""
Models package for request, preference and reply contracts.
"""

from .conversation import ConversationMessage, SanitizedRequest
from .errors import ConfigurationError, GatewayError, GuideError, InvalidInputError
from .guide_reply import GuideReply
from .preferences import InferredPreference, PreferenceRecord, PreferenceSignals

__all__ = [
    "ConfigurationError",
    "ConversationMessage",
    "GatewayError",
    "GuideError",
    "GuideReply",
    "InferredPreference",
    "InvalidInputError",
    "PreferenceRecord",
    "PreferenceSignals",
    "SanitizedRequest",
]
