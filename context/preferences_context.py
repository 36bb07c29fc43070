"""Rendering stored preferences into the text sent as ``preferencesContext``."""

import json
from collections.abc import Iterable

from models.preferences import PreferenceRecord

HEADER = "\n\nUSER PREFERENCES (from previous interactions):\n"

CONFIDENCE_LABELS = {
    "explicit": "User stated",
    "inferred": "Inferred from conversation",
}
DEFAULT_CONFIDENCE_LABEL = "Assumed"


def format_preferences_context(records: Iterable[PreferenceRecord]) -> str:
    """
    One line per record: ``- key: <json value> (<confidence label>)``.

    Returns an empty string when there are no records.
    """
    records = list(records or [])
    if not records:
        return ""

    lines = [HEADER]
    for record in records:
        label = CONFIDENCE_LABELS.get(record.confidence_level, DEFAULT_CONFIDENCE_LABEL)
        lines.append(f"- {record.preference_key}: {json.dumps(record.preference_value)} ({label})\n")
    return "".join(lines)
