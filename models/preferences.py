"""Preference signal contracts."""

import json
from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class InferredPreference:
    """A personalization signal extracted from one user message."""

    key: str
    value: str
    label: str

    def __post_init__(self):
        if not self.key:
            raise ValueError("InferredPreference.key must not be empty")

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class PreferenceSignals:
    """
    Side-channel output of one request.

    The transport decides how to deliver these (HTTP headers today).
    """

    missing_preference: str | None = None
    inferred_preferences: list[InferredPreference] = field(default_factory=list)

    def inferred_json(self, limit: int) -> str | None:
        """JSON array of at most ``limit`` inferences, or None when empty."""
        if not self.inferred_preferences:
            return None
        return json.dumps([p.to_dict() for p in self.inferred_preferences[:limit]])


@dataclass(frozen=True)
class PreferenceRecord:
    """A preference row as kept by the external preference store."""

    preference_key: str
    preference_value: Any
    confidence_level: str | None = None
    source: str | None = None
