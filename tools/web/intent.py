"""Intent detection for deciding when to run the business/location tier."""

LOCATION_KEYWORDS = (
    "nearby",
    "near me",
    "find",
    "store",
    "shop",
    "restaurant",
    "hawker",
    "food",
    "eat",
    "where to",
    "location",
    "address",
    "opening",
    "hours",
    "open now",
    "close",
    "operating hours",
    "stall",
    "market",
    "mall",
    "cafe",
    "coffee",
    "bubble tea",
    "salon",
    "clinic",
    "pharmacy",
    "chicken rice",
    "laksa",
    "nasi lemak",
    "roti prata",
    "bak kut teh",
)


def is_location_query(query: str) -> bool:
    """
    Detect if a query is about finding a place or business.

    Plain substring matching, so "find" also matches "finding" and "eat"
    matches "great". The result only decides whether the open business
    search runs; a false positive costs one extra search.

    Args:
        query: Sanitized user message

    Returns:
        True if any location keyword occurs in the query
    """
    query_lower = (query or "").lower()

    for keyword in LOCATION_KEYWORDS:
        if keyword in query_lower:
            return True

    return False
