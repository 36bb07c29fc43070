"""Heuristic preference detection and inference from free text.

Two questions are answered per message:

- which preference category the message touches that the caller has not
  stored yet (``detect_missing_preference``), and
- which preference values the message states outright
  (``infer_preferences_from_message``).

Both are best-effort regex heuristics. ``PreferenceExtractor`` is the seam for
replacing them with a stricter or model-based extractor.
"""

import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from models.preferences import InferredPreference

# Category -> keywords, in priority order. Matching is plain substring, so
# "pr" also fires on "price"; the first category that fires wins.
PREFERENCE_KEYWORDS: dict[str, tuple[str, ...]] = {
    "housing_status": ("hdb", "bto", "resale", "rent", "house", "flat", "condo", "home", "move", "property"),
    "budget_preference": ("budget", "cheap", "affordable", "cost", "price", "expensive", "money", "save"),
    "citizenship_status": ("pr", "citizen", "foreigner", "visa", "ep", "pass", "immigrant", "apply", "cpf"),
    "employment_type": ("job", "work", "salary", "employ", "career", "income", "freelance", "self-employed"),
    "family_status": ("married", "family", "kids", "child", "baby", "spouse", "parent", "single"),
    "timeline_preference": ("when", "urgent", "soon", "deadline", "time", "quickly", "asap", "plan"),
}


@dataclass(frozen=True)
class _Rule:
    """A pattern and how to turn its match into (value, label)."""

    pattern: re.Pattern
    extract: Callable[[re.Match], tuple[str, str]]


def _fixed(value: str, label: str) -> Callable[[re.Match], tuple[str, str]]:
    return lambda _match: (value, label)


def _rule(pattern: str, extract: Callable[[re.Match], tuple[str, str]]) -> _Rule:
    return _Rule(re.compile(pattern, re.IGNORECASE), extract)


def _room_value(room: str) -> str:
    return re.sub(r"\s+", "-", room).lower()


def _room_label(room: str) -> str:
    return room.replace("-", " ").upper()


HOUSING_RULES = (
    _rule(
        r"\b(live|stay|staying|living)\s+(in\s+)?(a\s+)?(\d[-\s]?room)\s*(hdb|flat)?",
        lambda m: (_room_value(m.group(4)) + "-hdb", _room_label(m.group(4)) + " HDB"),
    ),
    _rule(
        r"\b(own|bought|have)\s+(a\s+)?(\d[-\s]?room)\s*(hdb|flat)",
        lambda m: (_room_value(m.group(3)) + "-hdb-owner", _room_label(m.group(3)) + " HDB (Owner)"),
    ),
    _rule(r"\brenting\s+(a\s+)?(\d[-\s]?room|hdb|condo|apartment)", _fixed("renting", "Renting")),
    _rule(r"\b(live|stay)\s+(in\s+)?(a\s+)?condo(minium)?", _fixed("condo", "Condominium")),
    _rule(r"\b(live|stay)\s+with\s+(my\s+)?parents", _fixed("with-parents", "Living with parents")),
)

CITIZENSHIP_RULES = (
    _rule(r"\bi('m|\s+am)\s+(a\s+)?pr\b", _fixed("pr", "Permanent Resident")),
    _rule(r"\bi('m|\s+am)\s+(a\s+)?permanent\s+resident", _fixed("pr", "Permanent Resident")),
    _rule(r"\bi('m|\s+am)\s+(a\s+)?singapore(an)?\s+citizen", _fixed("citizen", "Singapore Citizen")),
    _rule(r"\bi('m|\s+am)\s+(a\s+)?citizen", _fixed("citizen", "Singapore Citizen")),
    _rule(r"\bi('m|\s+am)\s+(a\s+)?foreigner", _fixed("foreigner", "Foreigner")),
    _rule(r"\bi('m|\s+am)\s+on\s+(an?\s+)?(ep|employment\s+pass)", _fixed("ep", "Employment Pass Holder")),
    _rule(r"\bi('m|\s+am)\s+on\s+(an?\s+)?(s\s*pass|spass)", _fixed("spass", "S Pass Holder")),
    _rule(r"\bi('m|\s+am)\s+on\s+(an?\s+)?(wp|work\s+permit)", _fixed("wp", "Work Permit Holder")),
    _rule(r"\bi('m|\s+am)\s+(a\s+)?new\s+citizen", _fixed("new-citizen", "New Citizen")),
)

FAMILY_RULES = (
    _rule(r"\b(i('m|\s+am)|we('re|\s+are))\s+married", _fixed("married", "Married")),
    _rule(r"\bmy\s+(wife|husband|spouse)", _fixed("married", "Married")),
    _rule(r"\bi('m|\s+am)\s+single", _fixed("single", "Single")),
    _rule(r"\b(have|got)\s+(\d+\s+)?(kids?|child(ren)?)", _fixed("with-children", "With children")),
    _rule(r"\bmy\s+(kids?|child(ren)?|son|daughter)", _fixed("with-children", "With children")),
    _rule(r"\b(expecting|pregnant|having\s+a\s+baby)", _fixed("expecting", "Expecting")),
    _rule(r"\bi('m|\s+am)\s+(engaged|getting\s+married)", _fixed("engaged", "Engaged")),
)

EMPLOYMENT_RULES = (
    _rule(r"\bi('m|\s+am)\s+(a\s+)?(freelancer|freelancing)", _fixed("freelance", "Freelancer")),
    _rule(r"\bi('m|\s+am)\s+self[-\s]?employed", _fixed("self-employed", "Self-employed")),
    _rule(r"\bi('m|\s+am)\s+(a\s+)?business\s+owner", _fixed("business-owner", "Business Owner")),
    _rule(
        r"\bi('m|\s+am)\s+(currently\s+)?(unemployed|jobless|looking\s+for\s+(a\s+)?job)",
        _fixed("unemployed", "Unemployed"),
    ),
    _rule(r"\bi('m|\s+am)\s+(a\s+)?student", _fixed("student", "Student")),
    _rule(r"\bi('m|\s+am)\s+retired", _fixed("retired", "Retired")),
    _rule(r"\bi\s+work\s+(at|for|in)", _fixed("employed", "Employed")),
    _rule(r"\bi('m|\s+am)\s+working\s+(at|for|in|as)", _fixed("employed", "Employed")),
)

BUDGET_RULES = (
    _rule(r"\bi('m|\s+am)\s+(on\s+a\s+)?(tight\s+)?budget", _fixed("budget-conscious", "Budget conscious")),
    _rule(r"\b(looking\s+for\s+)?(cheap|affordable|budget)", _fixed("budget-conscious", "Budget conscious")),
    _rule(r"\b(money|cost)\s+(is\s+)?(not|no)\s+(a\s+)?(problem|issue|concern)", _fixed("flexible", "Flexible budget")),
    _rule(r"\b(willing\s+to|can)\s+(spend|pay)\s+(more|extra)", _fixed("flexible", "Flexible budget")),
)

SINGAPORE_AREAS = (
    "tampines", "jurong", "bedok", "woodlands", "yishun", "ang mo kio", "toa payoh", "bishan",
    "clementi", "queenstown", "bukit", "punggol", "sengkang", "pasir ris", "hougang", "serangoon",
    "kallang", "geylang", "marine parade", "east coast", "west coast", "changi", "central",
    "orchard", "bugis", "chinatown", "little india", "harbourfront", "sentosa",
)

AREA_PATTERN = re.compile(
    r"\b(live|stay|staying|living|work|working)\s+(in|at|near)\s+(" + "|".join(SINGAPORE_AREAS) + ")",
    re.IGNORECASE,
)

LIKE_PATTERN = re.compile(
    r"\bi\s+(like|love|enjoy|prefer|want|crave|feel like)\s+(?:to\s+eat\s+|eating\s+|some\s+)?([^,.!?]+)",
    re.IGNORECASE,
)
SOUNDS_GOOD_PATTERN = re.compile(r"\b([a-zA-Z\s]+)\s+sounds?\s+good", re.IGNORECASE)

LIKE_STOP_WORDS = frozenset({"it", "to", "the", "this", "that", "a", "an"})
SOUNDS_GOOD_STOP_WORDS = frozenset({"it", "that", "this", "which"})
MAX_LIKES_SLUG = 30


def _first_match(rules: tuple[_Rule, ...], key: str, message: str) -> InferredPreference | None:
    for rule in rules:
        match = rule.pattern.search(message)
        if match:
            value, label = rule.extract(match)
            return InferredPreference(key=key, value=value, label=label)
    return None


def _likes(item: str, stop_words: frozenset[str]) -> InferredPreference | None:
    item = item.strip().lower()
    if len(item) <= 2 or item in stop_words:
        return None
    slug = re.sub(r"\s+", "_", item)[:MAX_LIKES_SLUG]
    return InferredPreference(key=f"likes_{slug}", value=item, label=f"Likes {item}")


def detect_missing_preference(query: str, existing_preferences: str | None) -> str | None:
    """
    Pick the preference category worth asking about for this query.

    Returns the first category (in table order) whose keywords occur in the
    query and whose key does not already appear in the stored preferences
    text, or None.
    """
    query_lower = (query or "").lower()
    prefs_lower = (existing_preferences or "").lower()

    for category, keywords in PREFERENCE_KEYWORDS.items():
        if category in prefs_lower:
            continue
        if any(keyword in query_lower for keyword in keywords):
            return category

    return None


def infer_preferences_from_message(message: str) -> list[InferredPreference]:
    """
    Extract preference values stated in a message.

    Groups run in a fixed order (housing, citizenship, family, employment,
    likes, "sounds good", area, budget) and each contributes at most one
    inference. "likes_*" keys are built from the matched text.
    """
    message = message or ""
    inferred: list[InferredPreference] = []

    for key, rules in (
        ("housing_status", HOUSING_RULES),
        ("citizenship_status", CITIZENSHIP_RULES),
        ("family_status", FAMILY_RULES),
        ("employment_type", EMPLOYMENT_RULES),
    ):
        found = _first_match(rules, key, message)
        if found:
            inferred.append(found)

    like_match = LIKE_PATTERN.search(message)
    if like_match:
        liked = _likes(like_match.group(2), LIKE_STOP_WORDS)
        if liked:
            inferred.append(liked)
    else:
        # Only consulted when the "I like" shape did not match at all
        sounds_good = SOUNDS_GOOD_PATTERN.search(message)
        if sounds_good:
            liked = _likes(sounds_good.group(1), SOUNDS_GOOD_STOP_WORDS)
            if liked:
                inferred.append(liked)

    area_match = AREA_PATTERN.search(message)
    if area_match:
        area = area_match.group(3)
        inferred.append(
            InferredPreference(
                key="work_area" if "work" in area_match.group(1).lower() else "home_area",
                value=area.lower(),
                label=area[0].upper() + area[1:],
            )
        )

    budget = _first_match(BUDGET_RULES, "budget_preference", message)
    if budget:
        inferred.append(budget)

    return inferred


class PreferenceExtractor(ABC):
    """Source of preference signals for the composer."""

    @abstractmethod
    def detect_missing(self, query: str, existing_preferences: str | None) -> str | None:
        """Return the category worth confirming next, or None."""

    @abstractmethod
    def infer(self, message: str) -> list[InferredPreference]:
        """Return preferences stated in the message."""


class HeuristicPreferenceExtractor(PreferenceExtractor):
    """Regex heuristics; never raises."""

    def detect_missing(self, query: str, existing_preferences: str | None) -> str | None:
        return detect_missing_preference(query, existing_preferences)

    def infer(self, message: str) -> list[InferredPreference]:
        return infer_preferences_from_message(message)
